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
Module defining the shared machinery of ordered binary search trees.

The trees store each distinct value in one node. Inserting a value that
compares equal to a stored one increments the multiplicity of that node
instead of adding a new node, so a tree behaves as a multiset whose length
counts distinct values.

Every tree owns a sentinel node that stands in for all absent links. The
sentinel's links point to itself and its fields are never written, so
several trees may safely share one sentinel.
"""

import collections.abc
import logging
from typing import Any, Generic, Iterator, Literal, TypeAlias, TypeVar

from structura.auxiliary.typingutils import (Action, Comparator, Copier,
                                             Destroyer)
from structura.datastructures.elements import ValueContract, natural_compare
from structura.datastructures.errors import (AllocationError,
                                             CannotSwapError,
                                             FixNullNodeError,
                                             KeyNotFoundError,
                                             NullInputError,
                                             RemoveFromEmptyError)
from structura.datastructures.queues import LinkedQueue

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "TraversalOrder",
    "TreeNode",
    "BinarySearchTree"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


TraversalOrder: TypeAlias = Literal["inorder", "preorder", "postorder", "level"]


class TreeNode:
    """A node of a binary search tree."""

    __slots__ = ("value", "parent", "left", "right", "multiplicity")

    def __init__(self, value: Any, sentinel: "TreeNode | None") -> None:
        self.value = value
        self.multiplicity: int = 1
        if sentinel is None:
            sentinel = self
        self.parent: TreeNode = sentinel
        self.left: TreeNode = sentinel
        self.right: TreeNode = sentinel

    @classmethod
    def make_sentinel(cls) -> "TreeNode":
        """Create a sentinel node whose links point to itself."""
        return cls(None, None)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value!r})"


TT = TypeVar("TT")


class BinarySearchTree(collections.abc.Collection, Generic[TT]):
    """
    An unbalanced binary search tree, and the base of the balanced trees.

    Subclasses rebalance the tree by overriding the insertion and deletion
    fix-up hooks; everything else (search, neighbours, traversals, deletion
    by position swap) is shared.

    Instances are not thread-safe. Iterators are invalidated by any change
    to the tree.
    """

    _node_type: type[TreeNode] = TreeNode
    # Not name-mangled, subclasses rebind it to log under their own name.
    _logger = logging.getLogger("BinarySearchTree")

    __slots__ = {
        "_sentinel": "The node standing in for every absent link.",
        "_root": "The root node, the sentinel when the tree is empty.",
        "_size": "The number of distinct values in the tree.",
        "_contract": "Value contract of the stored values.",
        "_debug": "Whether to log debug messages."
    }

    def __init__(
        self,
        compare: Comparator = natural_compare,
        destroy: Destroyer | None = None, *,
        copy: Copier | None = None,
        sentinel: TreeNode | None = None,
        debug: bool = False
    ) -> None:
        """
        Create a new empty tree.

        Parameters
        ----------
        `compare: Comparator = natural_compare` - Three-way comparator
        defining the order of the values.

        `destroy: Destroyer | None = None` - Called on every value the tree
        releases (deletion or clearing).

        `copy: Copier | None = None` - Applied to inserted values so the
        tree owns its own copy.

        `sentinel: TreeNode | None = None` - A sentinel to share with other
        trees of the same node type, a fresh one is made if not given.

        `debug: bool = False` - Whether to log rebalancing steps.

        Raises
        ------
        `NullInputError` - If the comparator is missing.
        """
        self._contract = ValueContract(compare, destroy, copy)
        if sentinel is None:
            sentinel = self._node_type.make_sentinel()
        self._sentinel: TreeNode = sentinel
        self._root: TreeNode = sentinel
        self._size: int = 0
        self._debug: bool = debug

    def __str__(self) -> str:
        """Return a string representation of the tree."""
        return f"{self.__class__.__name__} with {self._size} nodes"

    def __repr__(self) -> str:
        """Return the values of the tree in order."""
        values = ", ".join(repr(value) for value in self)
        return f"{self.__class__.__name__}([{values}])"

    def __len__(self) -> int:
        """Return the number of distinct values in the tree."""
        return self._size

    def __bool__(self) -> bool:
        """Return True if the tree is not empty."""
        return self._size != 0

    def __iter__(self) -> Iterator[TT]:
        """Iterate over the distinct values in ascending order."""
        return self.iter_inorder()

    def __contains__(self, value: object) -> bool:
        """Return whether an equal value is stored in the tree."""
        if value is None:
            return False
        return self._search(value) is not self._sentinel

    def is_empty(self) -> bool:
        """Return True if the tree is empty."""
        return self._size == 0

    @property
    def root(self) -> TT | None:
        """The value at the root, or None if the tree is empty."""
        return self._root.value if self._root is not self._sentinel else None

    @property
    def compare(self) -> Comparator:
        """The comparator ordering the values."""
        return self._contract.compare

    def _search(self, value: Any) -> TreeNode:
        """Return the node holding an equal value, or the sentinel."""
        compare = self._contract.compare
        sentinel = self._sentinel
        node = self._root
        while node is not sentinel:
            order = compare(value, node.value)
            if order == 0:
                return node
            node = node.left if order < 0 else node.right
        return node

    def _get_node(self, value: Any) -> TreeNode:
        """Return the node holding an equal value, raising if absent."""
        if value is None:
            raise NullInputError("Cannot search a tree for None.")
        node = self._search(value)
        if node is self._sentinel:
            raise KeyNotFoundError(f"Value {value!r} is not in the tree.")
        return node

    def _new_node(self, value: Any) -> TreeNode:
        try:
            return self._node_type(value, self._sentinel)
        except MemoryError as error:
            raise AllocationError("Not enough memory for a tree node.") \
                from error

    def find(self, value: TT, /) -> TT | None:
        """
        Return the stored value equal to the given value, or None.

        The stored object is returned, not a copy.
        """
        if value is None:
            raise NullInputError("Cannot search a tree for None.")
        node = self._search(value)
        return node.value if node is not self._sentinel else None

    def count(self, value: TT, /) -> int:
        """Return how many times an equal value was inserted, zero if none."""
        if value is None:
            return 0
        node = self._search(value)
        return node.multiplicity if node is not self._sentinel else 0

    def level(self, value: TT, /) -> int:
        """
        Return the depth of the node holding the value, the root has depth
        zero.

        Raises
        ------
        `KeyNotFoundError` - If the value is not stored.
        """
        if value is None:
            raise NullInputError("Cannot search a tree for None.")
        compare = self._contract.compare
        node = self._root
        depth = 0
        while node is not self._sentinel:
            order = compare(value, node.value)
            if order == 0:
                return depth
            node = node.left if order < 0 else node.right
            depth += 1
        raise KeyNotFoundError(f"Value {value!r} is not in the tree.")

    def insert(self, value: TT, /) -> None:
        """
        Insert a value into the tree.

        If an equal value is already stored its multiplicity is incremented
        and the tree is left unchanged, otherwise a new node is attached
        and the tree is rebalanced.

        Raises
        ------
        `NullInputError` - If the value is None.

        `AllocationError` - If a node cannot be allocated.
        """
        self._insert_node(value)

    def _insert_node(
        self,
        value: Any,
        adopt: bool = True
    ) -> tuple[TreeNode, bool]:
        """
        Insert a value and return its node and whether the node is new.

        Ownership of the value is taken only if a new node is made, the
        value is copied first unless `adopt` is False.
        """
        if value is None:
            raise NullInputError("Cannot insert None into a tree.")
        compare = self._contract.compare
        sentinel = self._sentinel
        parent = sentinel
        node = self._root
        order = 0
        while node is not sentinel:
            order = compare(value, node.value)
            if order == 0:
                node.multiplicity += 1
                return node, False
            parent = node
            node = node.left if order < 0 else node.right
        if adopt:
            value = self._contract.adopt(value)
        node = self._new_node(value)
        node.parent = parent
        if parent is sentinel:
            self._root = node
        elif order < 0:
            parent.left = node
        else:
            parent.right = node
        self._size += 1
        self._insert_fixup(node)
        return node, True

    def delete(self, value: TT, /) -> None:
        """
        Delete one occurrence of a value from the tree.

        If the value was inserted more than once only its multiplicity is
        decremented, otherwise the node is removed and its value destroyed.

        Raises
        ------
        `RemoveFromEmptyError` - If the tree is empty.

        `KeyNotFoundError` - If the value is not stored.
        """
        if self._size == 0:
            raise RemoveFromEmptyError("Delete from empty tree.")
        node = self._get_node(value)
        if node.multiplicity > 1:
            node.multiplicity -= 1
            return
        self._remove_node(node)
        self._release_node(node)

    def _release_node(self, node: TreeNode) -> None:
        """Hand the values owned by a removed node to their destroyers."""
        self._contract.release(node.value)

    def _remove_node(self, node: TreeNode) -> None:
        """Unlink a node from the tree, whatever its multiplicity."""
        sentinel = self._sentinel
        if node.left is not sentinel and node.right is not sentinel:
            successor = node.right
            while successor.left is not sentinel:
                successor = successor.left
            self._swap_positions(node, successor)
        child = node.left if node.left is not sentinel else node.right
        parent = node.parent
        self._replace_child(parent, node, child)
        if child is not sentinel:
            child.parent = parent
        self._size -= 1
        self._delete_fixup(node, child, parent)
        node.parent = node.left = node.right = sentinel

    def _insert_fixup(self, node: TreeNode) -> None:
        """Restore the balance of the tree after attaching a new node."""

    def _delete_fixup(
        self,
        removed: TreeNode,
        child: TreeNode,
        parent: TreeNode
    ) -> None:
        """
        Restore the balance of the tree after splicing out a node.

        `child` has taken the place of `removed` under `parent`; either may
        be the sentinel.
        """

    def _replace_child(
        self,
        parent: TreeNode,
        old: TreeNode,
        new: TreeNode
    ) -> None:
        """Make `new` take the place of `old` under `parent`."""
        if parent is self._sentinel:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def _swap_positions(self, first: TreeNode, second: TreeNode) -> None:
        """
        Exchange the positions of two nodes in the tree.

        The values stay in their nodes, so references to stored values
        remain valid. Positional attributes (height or colour) are exchanged
        with the positions by `_swap_attributes`.

        Raises
        ------
        `CannotSwapError` - If the nodes are the same or either is the
        sentinel.
        """
        sentinel = self._sentinel
        if first is second or first is sentinel or second is sentinel:
            raise CannotSwapError("Cannot swap a node with itself "
                                  "or with the sentinel.")
        if first.parent is second:
            first, second = second, first
        if second.parent is first:
            parent = first.parent
            if first.left is second:
                other = first.right
                first.left, first.right = second.left, second.right
                second.left, second.right = first, other
            else:
                other = first.left
                first.left, first.right = second.left, second.right
                second.left, second.right = other, first
            self._replace_child(parent, first, second)
            second.parent = parent
            first.parent = second
            if other is not sentinel:
                other.parent = second
        else:
            first_parent, second_parent = first.parent, second.parent
            if first_parent is second_parent:
                first_parent.left, first_parent.right = \
                    first_parent.right, first_parent.left
            else:
                self._replace_child(first_parent, first, second)
                self._replace_child(second_parent, second, first)
            first.parent, second.parent = second_parent, first_parent
            first.left, second.left = second.left, first.left
            first.right, second.right = second.right, first.right
            if second.left is not sentinel:
                second.left.parent = second
            if second.right is not sentinel:
                second.right.parent = second
        if first.left is not sentinel:
            first.left.parent = first
        if first.right is not sentinel:
            first.right.parent = first
        self._swap_attributes(first, second)

    def _swap_attributes(self, first: TreeNode, second: TreeNode) -> None:
        """Exchange the attributes that belong to a node's position."""

    def _rotate_left(self, pivot: TreeNode) -> TreeNode:
        """
        Promote the right child of the pivot into its place.

        Returns the promoted node.

        Raises
        ------
        `FixNullNodeError` - If the pivot or its right child is the sentinel.
        """
        sentinel = self._sentinel
        promoted = pivot.right
        if pivot is sentinel or promoted is sentinel:
            raise FixNullNodeError("Cannot rotate left about the sentinel.")
        orphan = promoted.left
        pivot.right = orphan
        if orphan is not sentinel:
            orphan.parent = pivot
        parent = pivot.parent
        promoted.parent = parent
        self._replace_child(parent, pivot, promoted)
        promoted.left = pivot
        pivot.parent = promoted
        if self._debug:
            self._logger.debug("Rotated left about %r.", pivot.value)
        self._rotated(pivot, promoted)
        return promoted

    def _rotate_right(self, pivot: TreeNode) -> TreeNode:
        """
        Promote the left child of the pivot into its place.

        Returns the promoted node.

        Raises
        ------
        `FixNullNodeError` - If the pivot or its left child is the sentinel.
        """
        sentinel = self._sentinel
        promoted = pivot.left
        if pivot is sentinel or promoted is sentinel:
            raise FixNullNodeError("Cannot rotate right about the sentinel.")
        orphan = promoted.right
        pivot.left = orphan
        if orphan is not sentinel:
            orphan.parent = pivot
        parent = pivot.parent
        promoted.parent = parent
        self._replace_child(parent, pivot, promoted)
        promoted.right = pivot
        pivot.parent = promoted
        if self._debug:
            self._logger.debug("Rotated right about %r.", pivot.value)
        self._rotated(pivot, promoted)
        return promoted

    def _rotated(self, pivot: TreeNode, promoted: TreeNode) -> None:
        """Called after each rotation with the demoted and promoted nodes."""

    def _min_node(self, node: TreeNode) -> TreeNode:
        sentinel = self._sentinel
        if node is sentinel:
            return node
        while node.left is not sentinel:
            node = node.left
        return node

    def _max_node(self, node: TreeNode) -> TreeNode:
        sentinel = self._sentinel
        if node is sentinel:
            return node
        while node.right is not sentinel:
            node = node.right
        return node

    def _subroot(self, subroot: Any) -> TreeNode:
        if subroot is None:
            return self._root
        return self._search(subroot)

    def min_below(self, subroot: TT | None = None, /) -> TT | None:
        """
        Return the least value in the subtree rooted at the given value.

        Parameters
        ----------
        `subroot: TT | None = None` - A stored value whose subtree is
        searched, None means the whole tree.

        Returns
        -------
        `TT | None` - The least value, or None if the tree is empty or the
        subroot is not stored.
        """
        node = self._min_node(self._subroot(subroot))
        return node.value if node is not self._sentinel else None

    def max_below(self, subroot: TT | None = None, /) -> TT | None:
        """
        Return the greatest value in the subtree rooted at the given value.

        See `min_below` for the parameters.
        """
        node = self._max_node(self._subroot(subroot))
        return node.value if node is not self._sentinel else None

    def predecessor(self, value: TT, /) -> TT | None:
        """
        Return the greatest stored value less than the given one.

        Returns
        -------
        `TT | None` - The predecessor, or None if the value is the least.

        Raises
        ------
        `KeyNotFoundError` - If the value is not stored.
        """
        sentinel = self._sentinel
        node = self._get_node(value)
        if node.left is not sentinel:
            return self._max_node(node.left).value
        parent = node.parent
        while parent is not sentinel and node is parent.left:
            node, parent = parent, parent.parent
        return parent.value if parent is not sentinel else None

    def successor(self, value: TT, /) -> TT | None:
        """
        Return the least stored value greater than the given one.

        Returns
        -------
        `TT | None` - The successor, or None if the value is the greatest.

        Raises
        ------
        `KeyNotFoundError` - If the value is not stored.
        """
        sentinel = self._sentinel
        node = self._get_node(value)
        if node.right is not sentinel:
            return self._min_node(node.right).value
        parent = node.parent
        while parent is not sentinel and node is parent.right:
            node, parent = parent, parent.parent
        return parent.value if parent is not sentinel else None

    def lowest_common_ancestor(self, first: TT, second: TT, /) -> TT:
        """
        Return the deepest stored value having both values in its subtree.

        Raises
        ------
        `KeyNotFoundError` - If either value is not stored.
        """
        self._get_node(first)
        self._get_node(second)
        compare = self._contract.compare
        node = self._root
        while True:
            if compare(first, node.value) < 0 and compare(second, node.value) < 0:
                node = node.left
            elif (compare(first, node.value) > 0
                    and compare(second, node.value) > 0):
                node = node.right
            else:
                return node.value

    def _iter_nodes_inorder(self) -> Iterator[TreeNode]:
        sentinel = self._sentinel
        stack: list[TreeNode] = []
        node = self._root
        while stack or node is not sentinel:
            while node is not sentinel:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def _iter_nodes_preorder(self) -> Iterator[TreeNode]:
        sentinel = self._sentinel
        if self._root is sentinel:
            return
        stack: list[TreeNode] = [self._root]
        while stack:
            node = stack.pop()
            yield node
            if node.right is not sentinel:
                stack.append(node.right)
            if node.left is not sentinel:
                stack.append(node.left)

    def _iter_nodes_postorder(self) -> Iterator[TreeNode]:
        sentinel = self._sentinel
        stack: list[TreeNode] = []
        last: TreeNode = sentinel
        node = self._root
        while stack or node is not sentinel:
            while node is not sentinel:
                stack.append(node)
                node = node.left
            top = stack[-1]
            if top.right is not sentinel and top.right is not last:
                node = top.right
            else:
                last = stack.pop()
                yield last

    def _iter_nodes_level(self) -> Iterator[TreeNode]:
        sentinel = self._sentinel
        if self._root is sentinel:
            return
        frontier: LinkedQueue[TreeNode] = LinkedQueue([self._root])
        while frontier:
            node = frontier.pop()
            yield node
            if node.left is not sentinel:
                frontier.push(node.left)
            if node.right is not sentinel:
                frontier.push(node.right)

    def _iter_nodes(self, order: TraversalOrder) -> Iterator[TreeNode]:
        if order == "inorder":
            return self._iter_nodes_inorder()
        if order == "preorder":
            return self._iter_nodes_preorder()
        if order == "postorder":
            return self._iter_nodes_postorder()
        if order == "level":
            return self._iter_nodes_level()
        raise ValueError(f"Unknown traversal order {order!r}.")

    def iter_inorder(self) -> Iterator[TT]:
        """Iterate over the values in ascending order."""
        return (node.value for node in self._iter_nodes_inorder())

    def iter_preorder(self) -> Iterator[TT]:
        """Iterate over the values, each node before its subtrees."""
        return (node.value for node in self._iter_nodes_preorder())

    def iter_postorder(self) -> Iterator[TT]:
        """Iterate over the values, each node after its subtrees."""
        return (node.value for node in self._iter_nodes_postorder())

    def iter_level(self) -> Iterator[TT]:
        """Iterate over the values level by level, left to right."""
        return (node.value for node in self._iter_nodes_level())

    @staticmethod
    def _apply(action: Action, values: Iterator[Any]) -> None:
        if action is None:
            raise NullInputError("No action given to traverse the tree.")
        for value in values:
            action(value)

    def traverse_inorder(self, action: Action, /) -> None:
        """
        Apply an action to every value in ascending order.

        The action may read the tree but must not change its structure.
        Values may be changed in place only if their order is kept.

        Raises
        ------
        `NullInputError` - If the action is None.
        """
        self._apply(action, self.iter_inorder())

    def traverse_preorder(self, action: Action, /) -> None:
        """Apply an action to every value in pre-order."""
        self._apply(action, self.iter_preorder())

    def traverse_postorder(self, action: Action, /) -> None:
        """Apply an action to every value in post-order."""
        self._apply(action, self.iter_postorder())

    def traverse_level(self, action: Action, /) -> None:
        """Apply an action to every value in level order."""
        self._apply(action, self.iter_level())

    def clear(self) -> None:
        """Remove every node, destroying the stored values."""
        nodes = list(self._iter_nodes_postorder())
        self._root = self._sentinel
        self._size = 0
        for node in nodes:
            node.parent = node.left = node.right = self._sentinel
            self._release_node(node)

    def check_invariants(self) -> bool:
        """
        Return whether the tree satisfies its structural invariants.

        Checks that the sentinel is intact, that the parent links agree with
        the child links, that the values are strictly ordered, that the size
        counts the nodes, and the balance rules of the subclass.
        """
        sentinel = self._sentinel
        if not (sentinel.parent is sentinel and sentinel.left is sentinel
                and sentinel.right is sentinel):
            return False
        if self._root is not sentinel and self._root.parent is not sentinel:
            return False
        compare = self._contract.compare
        previous: TreeNode | None = None
        count = 0
        for node in self._iter_nodes_inorder():
            count += 1
            if node.multiplicity < 1:
                return False
            for child in (node.left, node.right):
                if child is not sentinel and child.parent is not node:
                    return False
            if previous is not None and compare(previous.value, node.value) >= 0:
                return False
            previous = node
        return count == self._size and self._check_balance()

    def _check_balance(self) -> bool:
        """Return whether the balance rules of the tree hold."""
        return True
