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
Module containing linked FIFO and binary-heap priority queue data structures.

These data structures are for algorithmic use. They are not thread-safe, and
not intended to be used in multi-threaded or multi-process applications. Use
the Python standard library `queue` module instead for such purposes.
"""

import collections.abc
import logging
from dataclasses import dataclass
from typing import (Any, Generic, Iterable, Iterator, MutableSequence,
                    Optional, TypeVar)

from structura.auxiliary.typingutils import (Action, Comparator, Copier,
                                             Destroyer)
from structura.datastructures.elements import ValueContract, natural_compare
from structura.datastructures.errors import (AllocationError,
                                             InvalidIndexError,
                                             NullContainerError,
                                             NullInputError,
                                             RemoveFromEmptyError)

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "LinkedQueue",
    "PriorityQueue",
    "heap_sort",
    "DEFAULT_CAPACITY",
    "GROWTH_RATIO"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


# Initial number of slots of a priority queue's backing array.
DEFAULT_CAPACITY: int = 10

# Factor the backing array grows by when it is full.
GROWTH_RATIO: int = 2


QT = TypeVar("QT")


class _QueueNode:
    """A link of the FIFO queue."""

    __slots__ = ("value", "next")

    def __init__(self, value: Any) -> None:
        self.value = value
        self.next: Optional["_QueueNode"] = None


class LinkedQueue(collections.abc.Collection, Generic[QT]):
    """
    A singly linked first-in first-out queue.

    Values are pushed at the back and popped from the front in constant
    time. The trees use it for level-order walks, and the graph for
    breadth-first search.

    Instances are not thread-safe.
    """

    __slots__ = {
        "__head": "The front link of the queue.",
        "__tail": "The back link of the queue.",
        "__size": "The number of values in the queue.",
        "__destroy": "Called on values discarded by `clear`."
    }

    def __init__(
        self,
        values: Iterable[QT] = (), /, *,
        destroy: Destroyer | None = None
    ) -> None:
        """
        Create a new queue, optionally filled from an iterable.

        Parameters
        ----------
        `values: Iterable[QT]` - Values pushed in iteration order.

        `destroy: Destroyer | None = None` - Called on every value still in
        the queue when it is cleared. Popped values are handed to the caller
        and are not destroyed.
        """
        self.__head: _QueueNode | None = None
        self.__tail: _QueueNode | None = None
        self.__size: int = 0
        self.__destroy: Destroyer | None = destroy
        for value in values:
            self.push(value)

    def __str__(self) -> str:
        """Return a string representation of the queue."""
        return f"Linked Queue with {len(self)} items"

    def __repr__(self) -> str:
        """Return an instantiable string representation of the queue."""
        values = ", ".join(repr(value) for value in self)
        return f"{self.__class__.__name__}([{values}])"

    def __len__(self) -> int:
        """Return the number of values in the queue."""
        return self.__size

    def __bool__(self) -> bool:
        """Return True if the queue is not empty."""
        return self.__size != 0

    def __iter__(self) -> Iterator[QT]:
        """Iterate over the values from front to back."""
        node = self.__head
        while node is not None:
            yield node.value
            node = node.next

    def __contains__(self, value: object) -> bool:
        """Return whether a value equal to the given value is queued."""
        return any(stored == value for stored in self)

    def is_empty(self) -> bool:
        """Return True if the queue is empty."""
        return self.__size == 0

    def front(self) -> QT | None:
        """Return the front value, or None if the queue is empty."""
        if self.__head is None:
            return None
        return self.__head.value

    def back(self) -> QT | None:
        """Return the back value, or None if the queue is empty."""
        if self.__tail is None:
            return None
        return self.__tail.value

    def push(self, value: QT, /) -> None:
        """Push a value onto the back of the queue."""
        try:
            node = _QueueNode(value)
        except MemoryError as error:
            raise AllocationError("Not enough memory for a queue node.") \
                from error
        if self.__tail is None:
            self.__head = node
        else:
            self.__tail.next = node
        self.__tail = node
        self.__size += 1

    def pop(self) -> QT:
        """
        Pop the front value from the queue.

        Returns
        -------
        `QT` - The front value, ownership passes to the caller.

        Raises
        ------
        `RemoveFromEmptyError` - If the queue is empty.
        """
        if self.__head is None:
            raise RemoveFromEmptyError("Pop from empty linked queue.")
        node = self.__head
        self.__head = node.next
        if self.__head is None:
            self.__tail = None
        self.__size -= 1
        return node.value

    def traverse(self, action: Action, /) -> None:
        """Apply an action to every value from front to back."""
        if action is None:
            raise NullInputError("No action given to traverse the queue.")
        for value in self:
            action(value)

    def clear(self) -> None:
        """Remove every value, destroying each one if a destroyer is set."""
        node = self.__head
        self.__head = self.__tail = None
        self.__size = 0
        while node is not None:
            if self.__destroy is not None:
                self.__destroy(node.value)
            node = node.next


PT = TypeVar("PT")
DT = TypeVar("DT")


@dataclass
class _HeapNode(Generic[PT, DT]):
    """Dataclass for storing a priority and its optional payload."""

    priority: PT
    payload: DT | None = None


class PriorityQueue(Generic[PT, DT]):
    """
    Class defining an array-backed binary-heap priority queue.

    The queue is a max-heap under the priority comparator; the node with the
    greatest priority sits at index 0. A min-heap is obtained by giving an
    inverted comparator (see `structura.datastructures.elements`).

    Each node pairs a mandatory priority with an optional payload. Unlike a
    heap-queue from the standard library, nodes are addressable by index, so
    their priority can be changed in place (as Dijkstra's and Prim's
    algorithms require).

    Example Usage
    -------------
    ```
    >>> queue = PriorityQueue[int, str]()
    >>> queue.push(5, "A")
    >>> queue.push(8, "C")
    >>> queue.top_priority(), queue.top()
    (8, 'C')
    >>> queue.change_priority(queue.find_index_by_payload("A"), 10)
    >>> queue.top()
    'A'
    ```

    Instances are not thread-safe.
    """

    __PRIORITY_QUEUE_LOGGER = logging.getLogger("PriorityQueue")

    __slots__ = {
        "__nodes": "The backing array of heap nodes, of length capacity.",
        "__size": "The number of nodes in the heap.",
        "__priorities": "Value contract of the priorities.",
        "__payloads": "Value contract of the payloads.",
        "__debug": "Whether to log debug messages."
    }

    def __init__(
        self,
        compare_priority: Comparator = natural_compare,
        compare_payload: Comparator = natural_compare,
        destroy_priority: Destroyer | None = None,
        destroy_payload: Destroyer | None = None,
        initial_capacity: int = DEFAULT_CAPACITY, *,
        copy_priority: Copier | None = None,
        copy_payload: Copier | None = None,
        debug: bool = False
    ) -> None:
        """
        Create a new empty priority queue.

        Parameters
        ----------
        `compare_priority: Comparator` - Orders the priorities, the greatest
        is popped first.

        `compare_payload: Comparator` - Matches payloads in
        `find_index_by_payload`.

        `destroy_priority: Destroyer | None` - Called on discarded priorities.

        `destroy_payload: Destroyer | None` - Called on discarded payloads.

        `initial_capacity: int` - Number of preallocated slots, values below
        one fall back to `DEFAULT_CAPACITY`.

        `debug: bool = False` - Whether to log debug messages.

        Raises
        ------
        `NullInputError` - If either comparator is missing.
        """
        self.__priorities = ValueContract(
            compare_priority, destroy_priority, copy_priority)
        self.__payloads = ValueContract(
            compare_payload, destroy_payload, copy_payload)
        if initial_capacity < 1:
            initial_capacity = DEFAULT_CAPACITY
        self.__nodes: list[_HeapNode[PT, DT] | None] = [None] * initial_capacity
        self.__size: int = 0
        self.__debug: bool = debug

    @classmethod
    def from_priorities(
        cls,
        priorities: Iterable[PT],
        payloads: Iterable[DT] | None = None,
        **kwargs: Any
    ) -> "PriorityQueue[PT, DT]":
        """
        Create a priority queue in linear time from priorities and optional
        payloads.

        Keyword arguments are passed to the constructor.
        """
        queue: "PriorityQueue[PT, DT]" = cls(**kwargs)
        queue.heapify(priorities, payloads)
        return queue

    def __str__(self) -> str:
        """Return a string representation of the queue."""
        return f"Priority Queue with {len(self)} items"

    def __repr__(self) -> str:
        """Return a string representation of the nodes in array order."""
        nodes = ", ".join(
            f"({node.priority!r}, {node.payload!r})"
            for node in self.__iter_nodes()
        )
        return f"{self.__class__.__name__}({nodes})"

    def __len__(self) -> int:
        """Return the number of nodes in the queue."""
        return self.__size

    def __bool__(self) -> bool:
        """Return True if the queue is not empty."""
        return self.__size != 0

    def __iter__(self) -> Iterator[tuple[PT, DT | None]]:
        """
        Iterate over the priority-payload pairs in array order.

        The pairs are not yielded in priority order.
        """
        for node in self.__iter_nodes():
            yield node.priority, node.payload

    def __getitem__(self, index: int) -> tuple[PT, DT | None]:
        """Return the priority-payload pair at the given array index."""
        node = self.__node_at(index)
        return node.priority, node.payload

    def __iter_nodes(self) -> Iterator[_HeapNode[PT, DT]]:
        for index in range(self.__size):
            yield self.__nodes[index]  # type: ignore[misc]

    def __node_at(self, index: int) -> _HeapNode[PT, DT]:
        if not isinstance(index, int) or not 0 <= index < self.__size:
            raise InvalidIndexError(
                f"Index {index!r} is outside of the priority queue "
                f"of size {self.__size}."
            )
        return self.__nodes[index]  # type: ignore[return-value]

    @property
    def capacity(self) -> int:
        """The number of slots in the backing array."""
        return len(self.__nodes)

    def is_empty(self) -> bool:
        """Return True if the queue is empty."""
        return self.__size == 0

    def __swap(self, first: int, second: int) -> None:
        nodes = self.__nodes
        nodes[first], nodes[second] = nodes[second], nodes[first]

    def __sift_up(self, index: int) -> None:
        compare = self.__priorities.compare
        nodes = self.__nodes
        while index > 0:
            parent = (index - 1) // 2
            if compare(nodes[index].priority, nodes[parent].priority) <= 0:
                break
            self.__swap(index, parent)
            index = parent

    def __sift_down(self, index: int) -> None:
        compare = self.__priorities.compare
        nodes = self.__nodes
        size = self.__size
        while True:
            swap_index = index
            for child in (2 * index + 1, 2 * index + 2):
                if (child < size
                        and compare(nodes[child].priority,
                                    nodes[swap_index].priority) > 0):
                    swap_index = child
            if swap_index == index:
                return
            self.__swap(index, swap_index)
            index = swap_index

    def __grow(self) -> None:
        old_capacity = len(self.__nodes)
        try:
            self.__nodes.extend([None] * (old_capacity * (GROWTH_RATIO - 1)))
        except MemoryError as error:
            raise AllocationError(
                "Not enough memory to grow the priority queue."
            ) from error
        if self.__debug:
            self.__PRIORITY_QUEUE_LOGGER.debug(
                "Grew priority queue capacity from %s to %s.",
                old_capacity, len(self.__nodes)
            )

    def __release(self, node: _HeapNode[PT, DT]) -> None:
        self.__priorities.release(node.priority)
        if node.payload is not None:
            self.__payloads.release(node.payload)

    def push(self, priority: PT, payload: DT | None = None, /) -> None:
        """
        Push a payload onto the queue with the given priority.

        Parameters
        ----------
        `priority: PT` - The priority of the node, must not be None.

        `payload: DT | None = None` - The optional payload of the node.

        Raises
        ------
        `NullInputError` - If the priority is None.
        """
        if priority is None:
            raise NullInputError("A priority queue node needs a priority.")
        if self.__size == len(self.__nodes):
            self.__grow()
        node = _HeapNode(
            self.__priorities.adopt(priority),
            None if payload is None else self.__payloads.adopt(payload)
        )
        self.__nodes[self.__size] = node
        self.__sift_up(self.__size)
        self.__size += 1

    def top(self) -> DT | None:
        """Return the payload of the greatest priority node, or None."""
        if self.__size == 0:
            return None
        return self.__nodes[0].payload  # type: ignore[union-attr]

    def top_priority(self) -> PT | None:
        """Return the greatest priority in the queue, or None."""
        if self.__size == 0:
            return None
        return self.__nodes[0].priority  # type: ignore[union-attr]

    def __remove_top(self) -> _HeapNode[PT, DT]:
        if self.__size == 0:
            raise RemoveFromEmptyError("Pop from empty priority queue.")
        last = self.__size - 1
        self.__swap(0, last)
        node = self.__nodes[last]
        self.__nodes[last] = None
        self.__size = last
        self.__sift_down(0)
        return node  # type: ignore[return-value]

    def pop(self) -> None:
        """
        Remove the greatest priority node, destroying its priority and
        payload.

        Raises
        ------
        `RemoveFromEmptyError` - If the queue is empty.
        """
        self.__release(self.__remove_top())

    def extract(self) -> tuple[PT, DT | None]:
        """
        Remove the greatest priority node and return it.

        Ownership of the priority and payload passes to the caller, so
        neither is destroyed.

        Raises
        ------
        `RemoveFromEmptyError` - If the queue is empty.
        """
        node = self.__remove_top()
        return node.priority, node.payload

    def change_priority(self, index: int, new_priority: PT, /) -> None:
        """
        Change the priority of the node at the given array index.

        The node moves up if its new priority ranks strictly higher than the
        old one, and down if it ranks strictly lower.

        Raises
        ------
        `InvalidIndexError` - If the index is out of range.

        `NullInputError` - If the new priority is None.
        """
        node = self.__node_at(index)
        if new_priority is None:
            raise NullInputError("Cannot change a priority to None.")
        new_priority = self.__priorities.adopt(new_priority)
        order = self.__priorities.compare(new_priority, node.priority)
        old_priority = node.priority
        node.priority = new_priority
        self.__priorities.release(old_priority)
        if order > 0:
            self.__sift_up(index)
        elif order < 0:
            self.__sift_down(index)

    def change_payload(self, index: int, new_payload: DT | None, /) -> None:
        """
        Replace the payload of the node at the given array index.

        Payloads take no part in the heap order so nothing moves.

        Raises
        ------
        `InvalidIndexError` - If the index is out of range.
        """
        node = self.__node_at(index)
        old_payload = node.payload
        node.payload = (None if new_payload is None
                        else self.__payloads.adopt(new_payload))
        if old_payload is not None:
            self.__payloads.release(old_payload)

    def find_index_by_payload(self, payload: DT, /) -> int | None:
        """Return the lowest index holding an equal payload, or None."""
        compare = self.__payloads.compare
        for index, node in enumerate(self.__iter_nodes()):
            if node.payload is not None and compare(node.payload, payload) == 0:
                return index
        return None

    def find_index_by_priority(self, priority: PT, /) -> int | None:
        """Return the lowest index holding an equal priority, or None."""
        compare = self.__priorities.compare
        for index, node in enumerate(self.__iter_nodes()):
            if compare(node.priority, priority) == 0:
                return index
        return None

    def heapify(
        self,
        priorities: Iterable[PT],
        payloads: Iterable[DT] | None = None
    ) -> None:
        """
        Replace the contents of the queue with the given nodes in linear
        time.

        The array is filled in the given order and then every internal node
        is sifted down, from the last one back to the root.

        Parameters
        ----------
        `priorities: Iterable[PT]` - The priorities of the nodes.

        `payloads: Iterable[DT] | None = None` - The payloads of the nodes,
        paired with the priorities by position.

        Raises
        ------
        `NullInputError` - If the priorities are None or any is None.

        `InvalidIndexError` - If there are not as many payloads as
        priorities.
        """
        if priorities is None:
            raise NullInputError("No priorities given to heapify.")
        priorities = list(priorities)
        if payloads is None:
            payload_list: list[DT | None] = [None] * len(priorities)
        else:
            payload_list = list(payloads)
            if len(payload_list) != len(priorities):
                raise InvalidIndexError(
                    f"Got {len(payload_list)} payloads for "
                    f"{len(priorities)} priorities."
                )
        if any(priority is None for priority in priorities):
            raise NullInputError("A priority queue node needs a priority.")
        self.clear()
        capacity = max(len(priorities), len(self.__nodes))
        nodes: list[_HeapNode[PT, DT] | None] = [
            _HeapNode(
                self.__priorities.adopt(priority),
                None if payload is None else self.__payloads.adopt(payload)
            )
            for priority, payload in zip(priorities, payload_list)
        ]
        nodes.extend([None] * (capacity - len(nodes)))
        self.__nodes = nodes
        self.__size = len(priorities)
        for index in range((self.__size // 2) - 1, -1, -1):
            self.__sift_down(index)

    def traverse(self, action: Action, /) -> None:
        """Apply an action to every payload, in array order."""
        if action is None:
            raise NullInputError("No action given to traverse the queue.")
        for node in self.__iter_nodes():
            action(node.payload)

    def is_heap(self) -> bool:
        """Return whether every parent ranks at least as high as its children."""
        compare = self.__priorities.compare
        nodes = self.__nodes
        return all(
            compare(nodes[(index - 1) // 2].priority,
                    nodes[index].priority) >= 0
            for index in range(1, self.__size)
        )

    def clear(self) -> None:
        """Remove every node, destroying priorities and payloads."""
        for index in range(self.__size):
            node = self.__nodes[index]
            self.__nodes[index] = None
            self.__release(node)  # type: ignore[arg-type]
        self.__size = 0


def heap_sort(
    array: MutableSequence[Any],
    compare: Comparator = natural_compare
) -> None:
    """
    Sort a mutable sequence in place with a binary heap.

    Each element is heapified as a priority paired with its position in the
    sequence, then popped one by one; the greatest is written to the end of
    the sequence first, so a max-oriented comparator yields an ascending
    sequence. Among equal elements the later position ranks higher, so the
    sort is stable.

    Parameters
    ----------
    `array: MutableSequence[Any]` - The sequence to sort.

    `compare: Comparator` - Three-way comparator of the elements.

    Raises
    ------
    `NullContainerError` - If the array is None.

    `NullInputError` - If the comparator is None.
    """
    if array is None:
        raise NullContainerError("No array given to heap sort.")
    if compare is None:
        raise NullInputError("No comparator given to heap sort.")

    def compare_positioned(
        first: tuple[Any, int],
        second: tuple[Any, int]
    ) -> int:
        order = compare(first[0], second[0])
        if order != 0:
            return order
        return (first[1] > second[1]) - (first[1] < second[1])

    heap: PriorityQueue[tuple[Any, int], Any] = PriorityQueue.from_priorities(
        [(element, position) for position, element in enumerate(array)],
        compare_priority=compare_positioned
    )
    for index in range(len(array) - 1, -1, -1):
        array[index] = heap.top_priority()[0]  # type: ignore[index]
        heap.pop()
