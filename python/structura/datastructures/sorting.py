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
Module containing in-place sorting routines and binary search.

Every routine works on a mutable sequence and orders it ascending under a
three-way comparator, the natural ordering of the elements by default.
"""

from typing import Any, MutableSequence, Sequence

from structura.auxiliary.typingutils import Comparator
from structura.datastructures.elements import natural_compare
from structura.datastructures.errors import (NullContainerError,
                                             NullInputError)
from structura.datastructures.queues import LinkedQueue, heap_sort

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "quick_sort",
    "merge_sort",
    "bubble_sort",
    "radix_sort",
    "heap_sort",
    "reverse",
    "binary_search"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


def _check(array: Sequence[Any] | None, compare: Comparator | None) -> None:
    if array is None:
        raise NullContainerError("No array given to sort or search.")
    if compare is None:
        raise NullInputError("No comparator given to sort or search.")


def _partition(
    array: MutableSequence[Any],
    low: int,
    high: int,
    compare: Comparator
) -> int:
    """Partition around the last element, returning its final index."""
    pivot = array[high]
    boundary = low
    for index in range(low, high):
        if compare(array[index], pivot) < 0:
            array[index], array[boundary] = array[boundary], array[index]
            boundary += 1
    array[boundary], array[high] = array[high], array[boundary]
    return boundary


def quick_sort(
    array: MutableSequence[Any],
    compare: Comparator = natural_compare
) -> None:
    """
    Sort a sequence in place with quick sort.

    Uses Lomuto partitioning around the last element of each range. Not
    stable.

    Raises
    ------
    `NullContainerError` - If the array is None.

    `NullInputError` - If the comparator is None.
    """
    _check(array, compare)
    ranges: list[tuple[int, int]] = [(0, len(array) - 1)]
    while ranges:
        low, high = ranges.pop()
        if low >= high:
            continue
        pivot = _partition(array, low, high, compare)
        # The smaller range is popped next.
        if pivot - low > high - pivot:
            ranges.append((low, pivot - 1))
            ranges.append((pivot + 1, high))
        else:
            ranges.append((pivot + 1, high))
            ranges.append((low, pivot - 1))


def merge_sort(
    array: MutableSequence[Any],
    compare: Comparator = natural_compare
) -> None:
    """
    Sort a sequence in place with a stable bottom-up merge sort.

    Uses an auxiliary buffer of the same length as the sequence.

    Raises
    ------
    `NullContainerError` - If the array is None.

    `NullInputError` - If the comparator is None.
    """
    _check(array, compare)
    length = len(array)
    buffer = list(array)
    width = 1
    while width < length:
        for low in range(0, length, 2 * width):
            middle = min(low + width, length)
            high = min(low + 2 * width, length)
            left, right = low, middle
            for index in range(low, high):
                if right >= high or (left < middle
                                     and compare(buffer[left],
                                                 buffer[right]) <= 0):
                    array[index] = buffer[left]
                    left += 1
                else:
                    array[index] = buffer[right]
                    right += 1
        buffer[:] = array
        width *= 2


def bubble_sort(
    array: MutableSequence[Any],
    compare: Comparator = natural_compare
) -> None:
    """
    Sort a sequence in place with bubble sort.

    Stops early once a pass makes no swap. Stable.

    Raises
    ------
    `NullContainerError` - If the array is None.

    `NullInputError` - If the comparator is None.
    """
    _check(array, compare)
    for end in range(len(array) - 1, 0, -1):
        swapped = False
        for index in range(end):
            if compare(array[index], array[index + 1]) > 0:
                array[index], array[index + 1] = array[index + 1], array[index]
                swapped = True
        if not swapped:
            return


def radix_sort(array: MutableSequence[int]) -> None:
    """
    Sort a sequence of non-negative integers in place with a least
    significant digit radix sort in base ten.

    Raises
    ------
    `NullContainerError` - If the array is None.

    `ValueError` - If an element is negative or not an integer.
    """
    if array is None:
        raise NullContainerError("No array given to sort.")
    if any(not isinstance(value, int) or value < 0 for value in array):
        raise ValueError("Radix sort only sorts non-negative integers.")
    if not array:
        return
    buckets: list[LinkedQueue[int]] = [LinkedQueue() for _ in range(10)]
    largest = max(array)
    place = 1
    while largest // place > 0:
        for value in array:
            buckets[(value // place) % 10].push(value)
        index = 0
        for bucket in buckets:
            while bucket:
                array[index] = bucket.pop()
                index += 1
        place *= 10


def reverse(array: MutableSequence[Any]) -> None:
    """
    Reverse a sequence in place.

    Raises
    ------
    `NullContainerError` - If the array is None.
    """
    if array is None:
        raise NullContainerError("No array given to reverse.")
    low, high = 0, len(array) - 1
    while low < high:
        array[low], array[high] = array[high], array[low]
        low += 1
        high -= 1


def binary_search(
    array: Sequence[Any],
    value: Any,
    compare: Comparator = natural_compare
) -> Any | None:
    """
    Search a sorted sequence for an element equal to the given value.

    Returns
    -------
    `Any | None` - The stored element, not the given value, or None if no
    element is equal.

    Raises
    ------
    `NullContainerError` - If the array is None.

    `NullInputError` - If the comparator or the value is None.
    """
    _check(array, compare)
    if value is None:
        raise NullInputError("Cannot search for None.")
    low, high = 0, len(array) - 1
    while low <= high:
        middle = (low + high) // 2
        order = compare(array[middle], value)
        if order == 0:
            return array[middle]
        if order < 0:
            low = middle + 1
        else:
            high = middle - 1
    return None
