###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""
Module defining a directed weighted multigraph over dense integer vertices.

The vertices of a graph with `N` vertices are the integers `0` to `N - 1`.
Each vertex keeps its outgoing edges in insertion order, parallel edges and
self-loops are allowed. Removing a vertex shifts every greater vertex down
by one so the vertices stay dense.
"""

import logging
import math
from typing import Iterator, NamedTuple

import numpy as np

from structura.datastructures.elements import (natural_compare,
                                               reversed_compare)
from structura.datastructures.errors import (InvalidIndexError,
                                             KeyNotFoundError,
                                             NullInputError)
from structura.datastructures.queues import LinkedQueue, PriorityQueue

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "Edge",
    "Graph"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


class Edge(NamedTuple):
    """An outgoing edge, its end vertex and weight."""

    end: int
    weight: float


class Graph:
    """
    Class defining a directed weighted multigraph.

    Example Usage
    -------------
    ```
    >>> graph = Graph(4)
    >>> graph.add_edge(0, 1, 4.0)
    >>> graph.add_edge(0, 2, 1.0)
    >>> graph.add_edge(2, 1, 2.0)
    >>> graph.add_edge(1, 3, 1.0)
    >>> distances, parents = graph.dijkstra(0)
    >>> distances
    [0.0, 3.0, 1.0, 4.0]
    >>> parents
    [None, 2, 0, 1]
    >>> graph.tips()
    [0]
    ```

    Instances are not thread-safe.
    """

    __GRAPH_LOGGER = logging.getLogger("Graph")

    __slots__ = {
        "__adjacency": "List of the outgoing edges of each vertex.",
        "__in_degrees": "List of the in-degree of each vertex.",
        "__debug": "Whether to log debug messages."
    }

    def __init__(self, vertices: int = 0, *, debug: bool = False) -> None:
        """
        Create a new graph with the given number of vertices and no edges.

        Raises
        ------
        `ValueError` - If the number of vertices is negative.
        """
        if vertices < 0:
            raise ValueError(f"Number of vertices must be non-negative, "
                             f"got {vertices}.")
        self.__adjacency: list[list[Edge]] = [[] for _ in range(vertices)]
        self.__in_degrees: list[int] = [0] * vertices
        self.__debug: bool = debug

    def __str__(self) -> str:
        """Return a string representation of the graph."""
        return (f"Graph with {len(self)} vertices "
                f"and {self.edge_count} edges")

    def __repr__(self) -> str:
        """Return the adjacency lists of the graph."""
        lines = ", ".join(
            f"{vertex}: [{', '.join(f'({e.end}, {e.weight})' for e in edges)}]"
            for vertex, edges in enumerate(self.__adjacency)
        )
        return f"{self.__class__.__name__}({{{lines}}})"

    def __len__(self) -> int:
        """Return the number of vertices."""
        return len(self.__adjacency)

    def __iter__(self) -> Iterator[int]:
        """Iterate over the vertices."""
        return iter(range(len(self.__adjacency)))

    @property
    def edge_count(self) -> int:
        """The number of edges, counting parallel edges separately."""
        return sum(len(edges) for edges in self.__adjacency)

    def __check_vertex(self, vertex: int) -> None:
        if (not isinstance(vertex, int)
                or not 0 <= vertex < len(self.__adjacency)):
            raise InvalidIndexError(
                f"Vertex {vertex!r} is not in the graph of "
                f"{len(self.__adjacency)} vertices."
            )

    def edges(self, vertex: int, /) -> list[Edge]:
        """Return the outgoing edges of a vertex in insertion order."""
        self.__check_vertex(vertex)
        return list(self.__adjacency[vertex])

    def in_degree(self, vertex: int, /) -> int:
        """Return the number of edges ending at a vertex."""
        self.__check_vertex(vertex)
        return self.__in_degrees[vertex]

    def out_degree(self, vertex: int, /) -> int:
        """Return the number of edges starting at a vertex."""
        self.__check_vertex(vertex)
        return len(self.__adjacency[vertex])

    def has_edge(self, start: int, end: int, /) -> bool:
        """Return whether at least one edge goes from start to end."""
        self.__check_vertex(start)
        self.__check_vertex(end)
        return any(edge.end == end for edge in self.__adjacency[start])

    def add_edge(self, start: int, end: int, weight: float = 1.0) -> None:
        """
        Add an edge from start to end.

        Raises
        ------
        `InvalidIndexError` - If either vertex is not in the graph.

        `NullInputError` - If the weight is None.

        `ValueError` - If the weight is not finite.
        """
        self.__check_vertex(start)
        self.__check_vertex(end)
        if weight is None:
            raise NullInputError("An edge needs a weight.")
        weight = float(weight)
        if not math.isfinite(weight):
            raise ValueError(f"Edge weight must be finite, got {weight}.")
        self.__adjacency[start].append(Edge(end, weight))
        self.__in_degrees[end] += 1

    def remove_edge(self, start: int, end: int) -> None:
        """
        Remove the first added edge from start to end.

        Raises
        ------
        `InvalidIndexError` - If either vertex is not in the graph.

        `KeyNotFoundError` - If there is no such edge.
        """
        self.__check_vertex(start)
        self.__check_vertex(end)
        edges = self.__adjacency[start]
        for index, edge in enumerate(edges):
            if edge.end == end:
                del edges[index]
                self.__in_degrees[end] -= 1
                return
        raise KeyNotFoundError(f"No edge from {start} to {end}.")

    def remove_all_edges(self, start: int, end: int) -> int:
        """
        Remove every edge from start to end, and return how many there were.

        Raises
        ------
        `InvalidIndexError` - If either vertex is not in the graph.

        `KeyNotFoundError` - If there is no such edge.
        """
        self.__check_vertex(start)
        self.__check_vertex(end)
        edges = self.__adjacency[start]
        kept = [edge for edge in edges if edge.end != end]
        removed = len(edges) - len(kept)
        if removed == 0:
            raise KeyNotFoundError(f"No edge from {start} to {end}.")
        self.__adjacency[start] = kept
        self.__in_degrees[end] -= removed
        return removed

    def add_vertices(self, count: int) -> None:
        """
        Add isolated vertices after the existing ones.

        Raises
        ------
        `ValueError` - If the count is negative.
        """
        if count < 0:
            raise ValueError(f"Cannot add {count} vertices.")
        self.__adjacency.extend([] for _ in range(count))
        self.__in_degrees.extend([0] * count)

    def remove_vertex(self, vertex: int) -> None:
        """
        Remove a vertex and every edge touching it.

        Every vertex greater than the removed one is renumbered one lower.

        Raises
        ------
        `InvalidIndexError` - If the vertex is not in the graph.
        """
        self.__check_vertex(vertex)
        for edge in self.__adjacency[vertex]:
            self.__in_degrees[edge.end] -= 1
        del self.__adjacency[vertex]
        del self.__in_degrees[vertex]
        for start, edges in enumerate(self.__adjacency):
            self.__adjacency[start] = [
                Edge(edge.end - 1 if edge.end > vertex else edge.end,
                     edge.weight)
                for edge in edges
                if edge.end != vertex
            ]
        if self.__debug:
            self.__GRAPH_LOGGER.debug(
                "Removed vertex %s, renumbered %s vertices.",
                vertex, len(self.__adjacency) - vertex
            )

    def transpose(self) -> "Graph":
        """Return a new graph with every edge reversed."""
        graph = Graph(len(self), debug=self.__debug)
        for start, edges in enumerate(self.__adjacency):
            for edge in edges:
                graph.add_edge(edge.end, start, edge.weight)
        return graph

    def bfs(self, start: int, /) -> list[int]:
        """
        Return the vertices reachable from start in breadth-first order.

        Raises
        ------
        `InvalidIndexError` - If the vertex is not in the graph.
        """
        self.__check_vertex(start)
        return self.__bfs_order(self.__adjacency, start)

    @staticmethod
    def __bfs_order(adjacency: list[list[Edge]], start: int) -> list[int]:
        visited = [False] * len(adjacency)
        visited[start] = True
        order: list[int] = []
        frontier: LinkedQueue[int] = LinkedQueue([start])
        while frontier:
            vertex = frontier.pop()
            order.append(vertex)
            for edge in adjacency[vertex]:
                if not visited[edge.end]:
                    visited[edge.end] = True
                    frontier.push(edge.end)
        return order

    def dfs(self, start: int, /) -> list[int]:
        """
        Return the vertices reachable from start in depth-first pre-order.

        Raises
        ------
        `InvalidIndexError` - If the vertex is not in the graph.
        """
        self.__check_vertex(start)
        visited = [False] * len(self)
        return self.__dfs_order(self.__adjacency, start, visited)

    @staticmethod
    def __dfs_order(
        adjacency: list[list[Edge]],
        start: int,
        visited: list[bool]
    ) -> list[int]:
        visited[start] = True
        order: list[int] = [start]
        stack: list[Iterator[Edge]] = [iter(adjacency[start])]
        while stack:
            for edge in stack[-1]:
                if not visited[edge.end]:
                    visited[edge.end] = True
                    order.append(edge.end)
                    stack.append(iter(adjacency[edge.end]))
                    break
            else:
                stack.pop()
        return order

    def __finish_order(self) -> list[int]:
        """Return every vertex in depth-first finishing order."""
        adjacency = self.__adjacency
        visited = [False] * len(adjacency)
        finished: list[int] = []
        for root in range(len(adjacency)):
            if visited[root]:
                continue
            visited[root] = True
            stack: list[tuple[int, Iterator[Edge]]] = [
                (root, iter(adjacency[root]))]
            while stack:
                vertex, edges = stack[-1]
                for edge in edges:
                    if not visited[edge.end]:
                        visited[edge.end] = True
                        stack.append((edge.end, iter(adjacency[edge.end])))
                        break
                else:
                    stack.pop()
                    finished.append(vertex)
        return finished

    def has_cycle(self) -> bool:
        """Return whether the graph contains a directed cycle."""
        adjacency = self.__adjacency
        # 0 is unvisited, 1 is on the current path, 2 is finished.
        state = [0] * len(adjacency)
        for root in range(len(adjacency)):
            if state[root] != 0:
                continue
            state[root] = 1
            stack: list[tuple[int, Iterator[Edge]]] = [
                (root, iter(adjacency[root]))]
            while stack:
                vertex, edges = stack[-1]
                for edge in edges:
                    if state[edge.end] == 1:
                        return True
                    if state[edge.end] == 0:
                        state[edge.end] = 1
                        stack.append((edge.end, iter(adjacency[edge.end])))
                        break
                else:
                    state[vertex] = 2
                    stack.pop()
        return False

    def past(self, vertex: int, /) -> list[int]:
        """
        Return the vertices reachable from the vertex along its outgoing
        edges, in breadth-first order, excluding the vertex itself.

        Raises
        ------
        `InvalidIndexError` - If the vertex is not in the graph.
        """
        self.__check_vertex(vertex)
        return self.__bfs_order(self.__adjacency, vertex)[1:]

    def future(self, vertex: int, /) -> list[int]:
        """
        Return the vertices the vertex is reachable from, in breadth-first
        order over the reversed edges, excluding the vertex itself.

        Raises
        ------
        `InvalidIndexError` - If the vertex is not in the graph.
        """
        self.__check_vertex(vertex)
        return self.transpose().past(vertex)

    def anticone(self, vertex: int, /) -> list[int]:
        """
        Return, in ascending order, the vertices that are neither in the
        past nor in the future of the vertex, excluding the vertex itself.

        Raises
        ------
        `InvalidIndexError` - If the vertex is not in the graph.
        """
        related = set(self.past(vertex))
        related.update(self.future(vertex))
        related.add(vertex)
        return [other for other in self if other not in related]

    def tips(self) -> list[int]:
        """Return the vertices with no incoming edges, in ascending order."""
        return [vertex for vertex, degree in enumerate(self.__in_degrees)
                if degree == 0]

    def topological_sort(self) -> list[int]:
        """
        Return every vertex ordered by decreasing depth-first finishing time.

        If the graph is acyclic every edge points forward in the result.
        """
        return self.__finish_order()[::-1]

    def strongly_connected_components(self) -> list[list[int]]:
        """
        Return the strongly connected components (Kosaraju's algorithm).

        Components are listed in topological order of the condensation, the
        vertices of each component in depth-first order.
        """
        finished = self.__finish_order()
        transposed = self.transpose().__adjacency
        visited = [False] * len(self)
        components: list[list[int]] = []
        for vertex in reversed(finished):
            if not visited[vertex]:
                components.append(
                    self.__dfs_order(transposed, vertex, visited))
        return components

    def is_strongly_connected(self) -> bool:
        """Return whether every vertex is reachable from every other."""
        if len(self) == 0:
            return True
        return (len(self.dfs(0)) == len(self)
                and len(self.transpose().dfs(0)) == len(self))

    def __shortest_tree(
        self,
        source: int,
        relax_total: bool
    ) -> tuple[list[float], list[int | None]]:
        """
        Grow a tree from the source, popping the nearest vertex each step.

        If `relax_total` the priority of a vertex is the length of its path
        from the source (Dijkstra), otherwise the weight of the edge joining
        it to the tree (Prim).
        """
        self.__check_vertex(source)
        distances = [math.inf] * len(self)
        parents: list[int | None] = [None] * len(self)
        distances[source] = 0.0
        queue: PriorityQueue[float, int] = PriorityQueue.from_priorities(
            distances, range(len(self)),
            compare_priority=reversed_compare(natural_compare)
        )
        while queue:
            vertex: int = queue.top()  # type: ignore[assignment]
            queue.pop()
            if distances[vertex] == math.inf:
                continue
            for edge in self.__adjacency[vertex]:
                index = queue.find_index_by_payload(edge.end)
                if index is None:
                    continue
                candidate = (distances[vertex] + edge.weight
                             if relax_total else edge.weight)
                if candidate < distances[edge.end]:
                    distances[edge.end] = candidate
                    parents[edge.end] = vertex
                    queue.change_priority(index, candidate)
        return distances, parents

    def dijkstra(self, source: int, /) -> tuple[list[float], list[int | None]]:
        """
        Compute the shortest paths from the source.

        Edge weights are assumed non-negative.

        Returns
        -------
        `tuple[list[float], list[int | None]]` - The distance to each vertex
        (`inf` if unreachable) and the previous vertex on its shortest path
        (None for the source and unreachable vertices).

        Raises
        ------
        `InvalidIndexError` - If the source is not in the graph.
        """
        return self.__shortest_tree(source, relax_total=True)

    def prim(self, root: int, /) -> tuple[list[float], list[int | None]]:
        """
        Compute a minimum spanning tree grown from the root along outgoing
        edges.

        For an undirected graph add every edge in both directions.

        Returns
        -------
        `tuple[list[float], list[int | None]]` - The weight of the edge
        joining each vertex to the tree (`inf` if unreachable, zero for the
        root) and its parent in the tree.

        Raises
        ------
        `InvalidIndexError` - If the root is not in the graph.
        """
        return self.__shortest_tree(root, relax_total=False)

    def to_adjacency_matrix(self) -> np.ndarray:
        """
        Return the matrix of edge weights.

        Entry `[i, j]` is the least weight of the edges from `i` to `j`, or
        `inf` if there is none.
        """
        size = len(self)
        matrix = np.full((size, size), np.inf, dtype=np.float64)
        for start, edges in enumerate(self.__adjacency):
            for edge in edges:
                if edge.weight < matrix[start, edge.end]:
                    matrix[start, edge.end] = edge.weight
        return matrix

    def floyd_warshall(self) -> np.ndarray:
        """
        Compute the shortest path lengths between every pair of vertices.

        Returns
        -------
        `np.ndarray` - Matrix whose entry `[i, j]` is the length of the
        shortest path from `i` to `j`, `inf` if there is none. The diagonal
        is zero unless a negative cycle passes through the vertex.
        """
        distances = self.to_adjacency_matrix()
        np.fill_diagonal(distances, np.minimum(np.diagonal(distances), 0.0))
        for middle in range(len(self)):
            distances = np.minimum(
                distances,
                distances[:, middle, np.newaxis] + distances[np.newaxis, middle, :]
            )
        return distances
