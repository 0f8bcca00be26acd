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

"""Module defining a height-balanced (AVL) binary search tree."""

import logging
from typing import Any, TypeVar

from structura.datastructures.trees import BinarySearchTree, TreeNode

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "AVLNode",
    "AVLTree"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


class AVLNode(TreeNode):
    """A tree node that records the height of its subtree."""

    __slots__ = ("height",)

    def __init__(self, value: Any, sentinel: TreeNode | None) -> None:
        super().__init__(value, sentinel)
        self.height: int = 1

    @classmethod
    def make_sentinel(cls) -> "AVLNode":
        sentinel = cls(None, None)
        sentinel.height = 0
        return sentinel


AT = TypeVar("AT")


class AVLTree(BinarySearchTree[AT]):
    """
    A self-balancing binary search tree in which the heights of the two
    subtrees of every node differ by at most one.

    Insertion and deletion walk from the changed position back to the root,
    updating heights and rotating any node whose balance (left height minus
    right height) leaves the range [-1, 1].

    Example Usage
    -------------
    ```
    >>> tree = AVLTree[int]()
    >>> for value in (1, 2, 3, 4, 5):
    ...     tree.insert(value)
    >>> tree.root
    2
    >>> tree.height(2), tree.height(4)
    (3, 2)
    ```
    """

    _node_type = AVLNode
    _logger = logging.getLogger("AVLTree")

    __slots__ = ()

    def _update_height(self, node: AVLNode) -> None:
        node.height = 1 + max(node.left.height, node.right.height)

    @staticmethod
    def _balance(node: AVLNode) -> int:
        return node.left.height - node.right.height

    def height(self, value: AT | None = None, /) -> int:
        """
        Return the height of the subtree rooted at the given value.

        A leaf has height one. If no value is given the height of the whole
        tree is returned, zero when it is empty.

        Raises
        ------
        `KeyNotFoundError` - If the value is not stored.
        """
        if value is None:
            return self._root.height
        return self._get_node(value).height

    def balance(self, value: AT, /) -> int:
        """Return the left height minus the right height at the given value."""
        return self._balance(self._get_node(value))

    def _rotated(self, pivot: TreeNode, promoted: TreeNode) -> None:
        self._update_height(pivot)
        self._update_height(promoted)

    def _swap_attributes(self, first: TreeNode, second: TreeNode) -> None:
        first.height, second.height = second.height, first.height

    def _insert_fixup(self, node: TreeNode) -> None:
        self._rebalance(node.parent)

    def _delete_fixup(
        self,
        removed: TreeNode,
        child: TreeNode,
        parent: TreeNode
    ) -> None:
        self._rebalance(parent)

    def _rebalance(self, node: AVLNode) -> None:
        """
        Walk from the given node to the root, restoring heights and balance.

        A child balance of zero on the taller side only occurs after a
        deletion, and is handled by a single rotation.
        """
        sentinel = self._sentinel
        while node is not sentinel:
            self._update_height(node)
            balance = self._balance(node)
            if balance > 1:
                if self._debug:
                    self._logger.debug("Rebalancing left-heavy node %r.",
                                       node.value)
                if self._balance(node.left) < 0:
                    self._rotate_left(node.left)
                self._rotate_right(node)
            elif balance < -1:
                if self._debug:
                    self._logger.debug("Rebalancing right-heavy node %r.",
                                       node.value)
                if self._balance(node.right) > 0:
                    self._rotate_right(node.right)
                self._rotate_left(node)
            node = node.parent

    def _check_balance(self) -> bool:
        sentinel = self._sentinel
        if sentinel.height != 0:
            return False
        for node in self._iter_nodes_postorder():
            left, right = node.left.height, node.right.height
            if node.height != 1 + max(left, right):
                return False
            if abs(left - right) > 1:
                return False
        return True
