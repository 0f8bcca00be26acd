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
Module containing linked sequence data structures.

The lists keep their values in insertion order (or in comparator order when
`insert_ordered` is used throughout) and look values up with the same
three-way comparator as the trees. The stack is the last-in first-out twin of
`structura.datastructures.queues.LinkedQueue`.
"""

import collections.abc
import logging
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from structura.auxiliary.typingutils import (Action, Comparator, Copier,
                                             Destroyer)
from structura.datastructures.elements import ValueContract, natural_compare
from structura.datastructures.errors import (AllocationError,
                                             CannotSwapError,
                                             InvalidIndexError,
                                             KeyNotFoundError,
                                             NullInputError,
                                             RemoveFromEmptyError)

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "LinkedList",
    "DoublyLinkedList",
    "LinkedStack"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


LT = TypeVar("LT")


class _ListNode:
    """A forward link of a list or stack."""

    __slots__ = ("value", "next")

    def __init__(self, value: Any) -> None:
        self.value = value
        self.next: Optional["_ListNode"] = None


class _DoubleListNode(_ListNode):
    """A link of a doubly linked list."""

    __slots__ = ("previous",)

    def __init__(self, value: Any) -> None:
        super().__init__(value)
        self.previous: Optional["_DoubleListNode"] = None


class LinkedList(collections.abc.Collection, Generic[LT]):
    """
    A singly linked list of values.

    Values are appended at the tail in constant time. Lookups, deletions by
    value and the ordered insertion walk the list from the head, comparing
    with the list's three-way comparator. Indices start at zero at the head.

    Example Usage
    -------------
    ```
    >>> numbers = LinkedList[int]([5, 1])
    >>> numbers.insert_ordered(3)
    >>> list(numbers)
    [3, 5, 1]
    >>> numbers.erase_range(0, 1)
    >>> list(numbers)
    [1]
    ```

    Instances are not thread-safe.
    """

    _node_type: type[_ListNode] = _ListNode
    # Not name-mangled, the doubly linked list rebinds it.
    _logger = logging.getLogger("LinkedList")

    __slots__ = {
        "_head": "The first link, None when the list is empty.",
        "_tail": "The last link, None when the list is empty.",
        "_size": "The number of values in the list.",
        "_contract": "Value contract of the stored values.",
        "_debug": "Whether to log debug messages."
    }

    def __init__(
        self,
        values: Iterable[LT] = (), /,
        compare: Comparator = natural_compare,
        destroy: Destroyer | None = None, *,
        copy: Copier | None = None,
        debug: bool = False
    ) -> None:
        """
        Create a new list, optionally filled from an iterable.

        Parameters
        ----------
        `values: Iterable[LT]` - Values appended in iteration order.

        `compare: Comparator = natural_compare` - Three-way comparator used
        to find values and to place them in `insert_ordered`.

        `destroy: Destroyer | None = None` - Called on every value the list
        releases (deletion, replacement or clearing).

        `copy: Copier | None = None` - Applied to inserted values so the
        list owns its own copy.

        `debug: bool = False` - Whether to log range erasures.
        """
        self._contract = ValueContract(compare, destroy, copy)
        self._head: _ListNode | None = None
        self._tail: _ListNode | None = None
        self._size: int = 0
        self._debug: bool = debug
        for value in values:
            self.insert(value)

    def __str__(self) -> str:
        """Return a string representation of the list."""
        return f"{self.__class__.__name__} with {len(self)} items"

    def __repr__(self) -> str:
        """Return an instantiable string representation of the list."""
        values = ", ".join(repr(value) for value in self)
        return f"{self.__class__.__name__}([{values}])"

    def __len__(self) -> int:
        """Return the number of values in the list."""
        return self._size

    def __bool__(self) -> bool:
        """Return True if the list is not empty."""
        return self._size != 0

    def __iter__(self) -> Iterator[LT]:
        """Iterate over the values from head to tail."""
        node = self._head
        while node is not None:
            yield node.value
            node = node.next

    def __contains__(self, value: object) -> bool:
        """Return whether a value comparing equal is stored."""
        if value is None:
            return False
        return self._find_node(value)[1] is not None  # type: ignore[arg-type]

    def __getitem__(self, index: int) -> LT:
        """
        Return the value at an index.

        Raises
        ------
        `InvalidIndexError` - If the index is negative or past the tail.
        """
        if index < 0 or index >= self._size:
            raise InvalidIndexError(
                f"Index {index} out of range for {self._size} values."
            )
        return self._node_at(index).value

    @property
    def compare(self) -> Comparator:
        """The three-way comparator of the values."""
        return self._contract.compare

    def is_empty(self) -> bool:
        """Return True if the list is empty."""
        return self._size == 0

    def head(self) -> LT | None:
        """Return the first value, or None if the list is empty."""
        if self._head is None:
            return None
        return self._head.value

    def tail(self) -> LT | None:
        """Return the last value, or None if the list is empty."""
        if self._tail is None:
            return None
        return self._tail.value

    def insert(self, value: LT, /) -> None:
        """Append a value at the tail."""
        self._link_after(self._tail, self._new_node(value))

    def insert_front(self, value: LT, /) -> None:
        """Insert a value at the head."""
        self._link_after(None, self._new_node(value))

    def insert_ordered(self, value: LT, /) -> None:
        """
        Insert a value before the first stored value that is not less than
        it.

        A list built only with this method is sorted in ascending order, and
        a value goes before any values equal to it.
        """
        node = self._new_node(value)
        compare = self._contract.compare
        previous: _ListNode | None = None
        current = self._head
        while current is not None and compare(node.value, current.value) > 0:
            previous, current = current, current.next
        self._link_after(previous, node)

    def insert_at_index(self, value: LT, index: int, /) -> None:
        """
        Insert a value so that it ends up at the given index.

        An index at or past the end appends the value.

        Raises
        ------
        `InvalidIndexError` - If the index is negative.
        """
        if index < 0:
            raise InvalidIndexError(f"Cannot insert at negative index {index}.")
        node = self._new_node(value)
        if index >= self._size:
            self._link_after(self._tail, node)
        elif index == 0:
            self._link_after(None, node)
        else:
            self._link_after(self._node_at(index - 1), node)

    def find_by_value(self, value: LT, /) -> LT | None:
        """Return the first stored value comparing equal, or None."""
        if value is None:
            raise NullInputError("Cannot search a list for None.")
        _, node = self._find_node(value)
        if node is None:
            return None
        return node.value

    def find_by_index(self, index: int, /) -> LT | None:
        """Return the value at an index, or None if there is none."""
        if index < 0 or index >= self._size:
            return None
        return self._node_at(index).value

    def delete_by_value(self, value: LT, /) -> None:
        """
        Delete the first stored value comparing equal to the given value.

        Raises
        ------
        `RemoveFromEmptyError` - If the list is empty.

        `NullInputError` - If the value is None.

        `KeyNotFoundError` - If no stored value compares equal.
        """
        if self._head is None:
            raise RemoveFromEmptyError("Delete from empty list.")
        if value is None:
            raise NullInputError("Cannot delete None from a list.")
        previous, node = self._find_node(value)
        if node is None:
            raise KeyNotFoundError(f"Value {value!r} is not in the list.")
        self._unlink(previous, node)
        self._contract.release(node.value)

    def delete_at_index(self, index: int, /) -> None:
        """
        Delete the value at an index.

        Raises
        ------
        `RemoveFromEmptyError` - If the list is empty.

        `InvalidIndexError` - If the index is negative or past the tail.
        """
        if self._head is None:
            raise RemoveFromEmptyError("Delete from empty list.")
        if index < 0 or index >= self._size:
            raise InvalidIndexError(
                f"Index {index} out of range for {self._size} values."
            )
        previous = None if index == 0 else self._node_at(index - 1)
        node = self._head if previous is None else previous.next
        self._unlink(previous, node)  # type: ignore[arg-type]
        self._contract.release(node.value)  # type: ignore[union-attr]

    def erase_range(self, left: int, right: int, /) -> None:
        """
        Delete every value between two indices, both inclusive.

        The indices may be given in either order, and are clamped to the
        last index.

        Raises
        ------
        `RemoveFromEmptyError` - If the list is empty.

        `InvalidIndexError` - If an index is negative.
        """
        if self._head is None:
            raise RemoveFromEmptyError("Erase from empty list.")
        if left < 0 or right < 0:
            raise InvalidIndexError("Cannot erase from a negative index.")
        if left > right:
            left, right = right, left
        left = min(left, self._size - 1)
        right = min(right, self._size - 1)
        if self._debug:
            self._logger.debug("Erasing indices %s to %s of %s values.",
                               left, right, self._size)
        previous = None if left == 0 else self._node_at(left - 1)
        node = self._head if previous is None else previous.next
        for _ in range(right - left + 1):
            following = node.next  # type: ignore[union-attr]
            self._unlink(previous, node)  # type: ignore[arg-type]
            self._contract.release(node.value)  # type: ignore[union-attr]
            node = following

    def filter(self, predicate: Callable[[LT], bool], /) -> "LinkedList[LT]":
        """
        Return a new list of the values satisfying a predicate.

        The new list has the same type and value contract, so its values
        are copies when a copier is set.
        """
        if predicate is None:
            raise NullInputError("No predicate given to filter the list.")
        contract = self._contract
        return self.__class__(
            (value for value in self if predicate(value)),
            contract.compare, contract.destroy,
            copy=contract.copy, debug=self._debug
        )

    def map(self, function: Callable[[LT], LT], /) -> None:
        """
        Replace every value in place by the result of a function.

        The function receives each stored value and its result is stored
        directly, neither copied nor is the old value destroyed.
        """
        if function is None:
            raise NullInputError("No function given to map the list.")
        node = self._head
        while node is not None:
            mapped = function(node.value)
            if mapped is None:
                raise NullInputError("A list cannot store None.")
            node.value = mapped
            node = node.next

    def swap_values(self, first: LT, second: LT, /) -> None:
        """
        Exchange the positions of the first stored values comparing equal to
        the two given values.

        Raises
        ------
        `CannotSwapError` - If either value is None.

        `KeyNotFoundError` - If either value is not in the list.
        """
        if first is None or second is None:
            raise CannotSwapError("Cannot swap None in a list.")
        _, first_node = self._find_node(first)
        _, second_node = self._find_node(second)
        if first_node is None or second_node is None:
            raise KeyNotFoundError("Both values must be in the list to swap.")
        first_node.value, second_node.value = \
            second_node.value, first_node.value

    def change_value(self, old: LT, new: LT, /) -> None:
        """
        Replace the first stored value comparing equal to `old` by `new`.

        The replaced value is destroyed. The list is not reordered.

        Raises
        ------
        `NullInputError` - If either value is None.

        `KeyNotFoundError` - If `old` is not in the list.
        """
        if old is None or new is None:
            raise NullInputError("Cannot change a list value to or from None.")
        _, node = self._find_node(old)
        if node is None:
            raise KeyNotFoundError(f"Value {old!r} is not in the list.")
        replaced = node.value
        node.value = self._contract.adopt(new)
        self._contract.release(replaced)

    def traverse(self, action: Action, /) -> None:
        """Apply an action to every value from head to tail."""
        if action is None:
            raise NullInputError("No action given to traverse the list.")
        for value in self:
            action(value)

    def clear(self) -> None:
        """Remove every value, destroying each one if a destroyer is set."""
        node = self._head
        self._head = self._tail = None
        self._size = 0
        while node is not None:
            self._contract.release(node.value)
            node = node.next

    def _new_node(self, value: LT) -> _ListNode:
        """Make a link owning the value."""
        if value is None:
            raise NullInputError("A list cannot store None.")
        try:
            return self._node_type(self._contract.adopt(value))
        except MemoryError as error:
            raise AllocationError("Not enough memory for a list node.") \
                from error

    def _node_at(self, index: int) -> _ListNode:
        """Return the link at a valid index."""
        node = self._head
        for _ in range(index):
            node = node.next  # type: ignore[union-attr]
        return node  # type: ignore[return-value]

    def _find_node(
        self,
        value: LT
    ) -> tuple[_ListNode | None, _ListNode | None]:
        """Return the first link holding an equal value and its predecessor."""
        compare = self._contract.compare
        previous: _ListNode | None = None
        node = self._head
        while node is not None and compare(node.value, value) != 0:
            previous, node = node, node.next
        return previous, node

    def _link_after(self, previous: _ListNode | None, node: _ListNode) -> None:
        """Link a node after another, or at the head if there is none."""
        if previous is None:
            node.next = self._head
            self._head = node
        else:
            node.next = previous.next
            previous.next = node
        if node.next is None:
            self._tail = node
        self._size += 1

    def _unlink(self, previous: _ListNode | None, node: _ListNode) -> None:
        """Unlink a node given the one before it, None for the head."""
        if previous is None:
            self._head = node.next
        else:
            previous.next = node.next
        if node is self._tail:
            self._tail = previous
        node.next = None
        self._size -= 1


class DoublyLinkedList(LinkedList[LT]):
    """
    A doubly linked list of values.

    Has the operations of `LinkedList`, and can also be walked from the tail
    with `reversed` or `traverse_backward`. Index lookups walk from
    whichever end is nearer.

    Instances are not thread-safe.
    """

    _node_type = _DoubleListNode
    _logger = logging.getLogger("DoublyLinkedList")

    __slots__ = ()

    def __reversed__(self) -> Iterator[LT]:
        """Iterate over the values from tail to head."""
        node = self._tail
        while node is not None:
            yield node.value
            node = node.previous  # type: ignore[attr-defined]

    def traverse_backward(self, action: Action, /) -> None:
        """Apply an action to every value from tail to head."""
        if action is None:
            raise NullInputError("No action given to traverse the list.")
        for value in reversed(self):
            action(value)

    def _node_at(self, index: int) -> _ListNode:
        if index < self._size // 2:
            return super()._node_at(index)
        node = self._tail
        for _ in range(self._size - 1 - index):
            node = node.previous  # type: ignore[union-attr]
        return node  # type: ignore[return-value]

    def _link_after(self, previous: _ListNode | None, node: _ListNode) -> None:
        super()._link_after(previous, node)
        node.previous = previous  # type: ignore[attr-defined]
        if node.next is not None:
            node.next.previous = node  # type: ignore[attr-defined]

    def _unlink(self, previous: _ListNode | None, node: _ListNode) -> None:
        following = node.next
        super()._unlink(previous, node)
        if following is not None:
            following.previous = previous  # type: ignore[attr-defined]
        node.previous = None  # type: ignore[attr-defined]


class LinkedStack(collections.abc.Collection, Generic[LT]):
    """
    A singly linked last-in first-out stack.

    Values are pushed and popped at the top in constant time.

    Instances are not thread-safe.
    """

    __slots__ = {
        "__top": "The top link of the stack.",
        "__size": "The number of values in the stack.",
        "__destroy": "Called on values discarded by `clear`."
    }

    def __init__(
        self,
        values: Iterable[LT] = (), /, *,
        destroy: Destroyer | None = None
    ) -> None:
        """
        Create a new stack, optionally filled from an iterable.

        Parameters
        ----------
        `values: Iterable[LT]` - Values pushed in iteration order, so the
        last one is on top.

        `destroy: Destroyer | None = None` - Called on every value still on
        the stack when it is cleared. Popped values are handed to the caller
        and are not destroyed.
        """
        self.__top: _ListNode | None = None
        self.__size: int = 0
        self.__destroy: Destroyer | None = destroy
        for value in values:
            self.push(value)

    def __str__(self) -> str:
        """Return a string representation of the stack."""
        return f"Linked Stack with {len(self)} items"

    def __repr__(self) -> str:
        """Return an instantiable string representation of the stack."""
        values = ", ".join(repr(value) for value in reversed(list(self)))
        return f"{self.__class__.__name__}([{values}])"

    def __len__(self) -> int:
        """Return the number of values on the stack."""
        return self.__size

    def __bool__(self) -> bool:
        """Return True if the stack is not empty."""
        return self.__size != 0

    def __iter__(self) -> Iterator[LT]:
        """Iterate over the values from top to bottom."""
        node = self.__top
        while node is not None:
            yield node.value
            node = node.next

    def __contains__(self, value: object) -> bool:
        """Return whether a value equal to the given value is stacked."""
        return any(stored == value for stored in self)

    def is_empty(self) -> bool:
        """Return True if the stack is empty."""
        return self.__size == 0

    def top(self) -> LT | None:
        """Return the top value, or None if the stack is empty."""
        if self.__top is None:
            return None
        return self.__top.value

    def push(self, value: LT, /) -> None:
        """Push a value onto the top of the stack."""
        if value is None:
            raise NullInputError("A stack cannot store None.")
        try:
            node = _ListNode(value)
        except MemoryError as error:
            raise AllocationError("Not enough memory for a stack node.") \
                from error
        node.next = self.__top
        self.__top = node
        self.__size += 1

    def pop(self) -> LT:
        """
        Pop the top value from the stack.

        Returns
        -------
        `LT` - The top value, ownership passes to the caller.

        Raises
        ------
        `RemoveFromEmptyError` - If the stack is empty.
        """
        if self.__top is None:
            raise RemoveFromEmptyError("Pop from empty linked stack.")
        node = self.__top
        self.__top = node.next
        self.__size -= 1
        return node.value

    def traverse(self, action: Action, /) -> None:
        """Apply an action to every value from top to bottom."""
        if action is None:
            raise NullInputError("No action given to traverse the stack.")
        for value in self:
            action(value)

    def clear(self) -> None:
        """Remove every value, destroying each one if a destroyer is set."""
        node = self.__top
        self.__top = None
        self.__size = 0
        while node is not None:
            if self.__destroy is not None:
                self.__destroy(node.value)
            node = node.next
