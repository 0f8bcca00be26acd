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
Module defining a red-black binary search tree.

Each node may carry a payload alongside its key, which is how the hash table
stores its values in its bucket trees.
"""

import enum
import logging
from typing import Any, Generic, Iterator, TypeVar

from structura.auxiliary.typingutils import Comparator, Copier, Destroyer
from structura.datastructures.elements import ValueContract, natural_compare
from structura.datastructures.errors import (FixNullNodeError,
                                             UnknownColourError)
from structura.datastructures.trees import (BinarySearchTree,
                                            TraversalOrder, TreeNode)

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "Colour",
    "RBNode",
    "RedBlackTree"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


@enum.unique
class Colour(enum.Enum):
    """The colour of a red-black tree node."""

    RED = "red"
    BLACK = "black"


class RBNode(TreeNode):
    """A tree node with a colour and an optional payload."""

    __slots__ = ("colour", "payload")

    def __init__(self, value: Any, sentinel: TreeNode | None) -> None:
        super().__init__(value, sentinel)
        self.colour: Colour = Colour.RED
        self.payload: Any = None

    @classmethod
    def make_sentinel(cls) -> "RBNode":
        sentinel = cls(None, None)
        sentinel.colour = Colour.BLACK
        return sentinel


KT = TypeVar("KT")
VT = TypeVar("VT")


class RedBlackTree(BinarySearchTree[KT], Generic[KT, VT]):
    """
    A self-balancing binary search tree that colours its nodes red or black.

    The root and the sentinel are black, a red node has only black children,
    and every path from the root to the sentinel passes the same number of
    black nodes. Insertion repairs red-red violations by recolouring and
    rotating towards the root; deletion of a black node pushes an extra
    black up the tree until it can be absorbed.

    Several trees may share one sentinel (see `RBNode.make_sentinel`), the
    rebalancing routines never write to it.

    Example Usage
    -------------
    ```
    >>> tree = RedBlackTree[int, str]()
    >>> tree.insert(10, "ten")
    >>> tree.insert(20, "twenty")
    >>> tree.insert(30, "thirty")
    >>> tree.root, tree.colour(10), tree.colour(30)
    (20, <Colour.RED: 'red'>, <Colour.RED: 'red'>)
    >>> tree.find_payload(30)
    'thirty'
    ```
    """

    _node_type = RBNode
    _logger = logging.getLogger("RedBlackTree")

    __slots__ = {
        "_payloads": "Value contract of the payloads."
    }

    def __init__(
        self,
        compare: Comparator = natural_compare,
        destroy: Destroyer | None = None, *,
        copy: Copier | None = None,
        compare_payload: Comparator = natural_compare,
        destroy_payload: Destroyer | None = None,
        copy_payload: Copier | None = None,
        sentinel: RBNode | None = None,
        debug: bool = False
    ) -> None:
        """
        Create a new empty red-black tree.

        Parameters
        ----------
        `compare: Comparator = natural_compare` - Orders the keys.

        `destroy: Destroyer | None = None` - Called on every released key.

        `copy: Copier | None = None` - Applied to inserted keys.

        `compare_payload: Comparator = natural_compare` - Matches payloads.

        `destroy_payload: Destroyer | None = None` - Called on every
        released payload.

        `copy_payload: Copier | None = None` - Applied to inserted payloads.

        `sentinel: RBNode | None = None` - A sentinel shared with other
        trees.

        `debug: bool = False` - Whether to log rebalancing steps.

        Raises
        ------
        `NullInputError` - If a comparator is missing.

        `UnknownColourError` - If the given sentinel is not black.
        """
        if sentinel is not None and sentinel.colour is not Colour.BLACK:
            raise UnknownColourError("A red-black sentinel must be black.")
        super().__init__(compare, destroy, copy=copy, sentinel=sentinel,
                         debug=debug)
        self._payloads = ValueContract(compare_payload, destroy_payload,
                                       copy_payload)

    def insert(self, key: KT, payload: VT | None = None, /) -> None:
        """
        Insert a key with an optional payload into the tree.

        If an equal key is already stored its multiplicity is incremented
        and the given payload is not stored.

        Raises
        ------
        `NullInputError` - If the key is None.

        `AllocationError` - If a node cannot be allocated.
        """
        node, is_new = self._insert_node(key)
        if is_new and payload is not None:
            node.payload = self._payloads.adopt(payload)

    def insert_owned(
        self,
        key: KT,
        payload: VT | None,
        multiplicity: int = 1
    ) -> None:
        """
        Insert an entry moved from another container with the same owner.

        Neither the key nor the payload is copied. The node takes the given
        multiplicity, or gains it if an equal key is already stored.
        """
        node, is_new = self._insert_node(key, adopt=False)
        if is_new:
            node.payload = payload
            node.multiplicity = multiplicity
        else:
            node.multiplicity += multiplicity - 1

    def find_payload(self, key: KT, /) -> VT | None:
        """Return the payload stored with an equal key, or None."""
        node = self._search(key) if key is not None else self._sentinel
        return node.payload if node is not self._sentinel else None

    def items(
        self,
        order: TraversalOrder = "inorder"
    ) -> Iterator[tuple[KT, VT | None]]:
        """
        Iterate over the key-payload pairs.

        Parameters
        ----------
        `order: TraversalOrder = "inorder"` - One of "inorder" (ascending
        keys), "preorder", "postorder" or "level".
        """
        return ((node.value, node.payload)
                for node in self._iter_nodes(order))

    def _release_node(self, node: TreeNode) -> None:
        super()._release_node(node)
        if node.payload is not None:
            self._payloads.release(node.payload)

    def colour(self, key: KT, /) -> Colour:
        """
        Return the colour of the node holding the given key.

        Raises
        ------
        `KeyNotFoundError` - If the key is not stored.
        """
        return self._get_node(key).colour

    def black_height(self) -> int:
        """
        Return the number of black nodes on the leftmost path from the root,
        not counting the sentinel.
        """
        height = 0
        node = self._root
        while node is not self._sentinel:
            if node.colour is Colour.BLACK:
                height += 1
            node = node.left
        return height

    def _swap_attributes(self, first: TreeNode, second: TreeNode) -> None:
        first.colour, second.colour = second.colour, first.colour

    def _insert_fixup(self, node: TreeNode) -> None:
        if node is self._sentinel:
            raise FixNullNodeError("Cannot fix the tree from the sentinel.")
        while node.parent.colour is Colour.RED:
            parent = node.parent
            grandparent = parent.parent
            if parent is grandparent.left:
                uncle = grandparent.right
                if uncle.colour is Colour.RED:
                    parent.colour = uncle.colour = Colour.BLACK
                    grandparent.colour = Colour.RED
                    node = grandparent
                    continue
                if node is parent.right:
                    node = parent
                    self._rotate_left(node)
                    parent = node.parent
                parent.colour = Colour.BLACK
                grandparent.colour = Colour.RED
                self._rotate_right(grandparent)
            else:
                uncle = grandparent.left
                if uncle.colour is Colour.RED:
                    parent.colour = uncle.colour = Colour.BLACK
                    grandparent.colour = Colour.RED
                    node = grandparent
                    continue
                if node is parent.left:
                    node = parent
                    self._rotate_right(node)
                    parent = node.parent
                parent.colour = Colour.BLACK
                grandparent.colour = Colour.RED
                self._rotate_left(grandparent)
        self._root.colour = Colour.BLACK

    def _delete_fixup(
        self,
        removed: TreeNode,
        child: TreeNode,
        parent: TreeNode
    ) -> None:
        if removed.colour is Colour.RED:
            return
        sentinel = self._sentinel
        node = child
        while node is not self._root and node.colour is Colour.BLACK:
            if parent is sentinel:
                raise FixNullNodeError("Lost the parent of a double-black "
                                       "position.")
            if node is parent.left:
                sibling = parent.right
                if sibling.colour is Colour.RED:
                    sibling.colour = Colour.BLACK
                    parent.colour = Colour.RED
                    self._rotate_left(parent)
                    sibling = parent.right
                if (sibling.left.colour is Colour.BLACK
                        and sibling.right.colour is Colour.BLACK):
                    sibling.colour = Colour.RED
                    node, parent = parent, parent.parent
                    continue
                if sibling.right.colour is Colour.BLACK:
                    sibling.left.colour = Colour.BLACK
                    sibling.colour = Colour.RED
                    self._rotate_right(sibling)
                    sibling = parent.right
                sibling.colour = parent.colour
                parent.colour = Colour.BLACK
                sibling.right.colour = Colour.BLACK
                self._rotate_left(parent)
            else:
                sibling = parent.left
                if sibling.colour is Colour.RED:
                    sibling.colour = Colour.BLACK
                    parent.colour = Colour.RED
                    self._rotate_right(parent)
                    sibling = parent.left
                if (sibling.left.colour is Colour.BLACK
                        and sibling.right.colour is Colour.BLACK):
                    sibling.colour = Colour.RED
                    node, parent = parent, parent.parent
                    continue
                if sibling.left.colour is Colour.BLACK:
                    sibling.right.colour = Colour.BLACK
                    sibling.colour = Colour.RED
                    self._rotate_left(sibling)
                    sibling = parent.left
                sibling.colour = parent.colour
                parent.colour = Colour.BLACK
                sibling.left.colour = Colour.BLACK
                self._rotate_right(parent)
            node = self._root
            break
        if node is not sentinel:
            node.colour = Colour.BLACK
        if self._debug:
            self._logger.debug("Absorbed double black after removing %r.",
                               removed.value)

    def _check_balance(self) -> bool:
        sentinel = self._sentinel
        if sentinel.colour is not Colour.BLACK:
            return False
        if self._root.colour is not Colour.BLACK:
            return False
        black_heights: dict[int, int] = {id(sentinel): 0}
        for node in self._iter_nodes_postorder():
            if not isinstance(node.colour, Colour):
                raise UnknownColourError(
                    f"Node {node.value!r} has colour {node.colour!r}.")
            if node.colour is Colour.RED and (
                    node.left.colour is Colour.RED
                    or node.right.colour is Colour.RED):
                return False
            left = black_heights[id(node.left)]
            right = black_heights[id(node.right)]
            if left != right:
                return False
            black_heights[id(node)] = left + (node.colour is Colour.BLACK)
        return True
