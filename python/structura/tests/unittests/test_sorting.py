
import random
import unittest

from structura.datastructures.elements import natural_compare, reversed_compare
from structura.datastructures.errors import (NullContainerError,
                                             NullInputError)
from structura.datastructures.sorting import (binary_search, bubble_sort,
                                              heap_sort, merge_sort,
                                              quick_sort, radix_sort, reverse)


def by_first(first: tuple, second: tuple) -> int:
    return natural_compare(first[0], second[0])


class TestSorting(unittest.TestCase):
    sorts = (quick_sort, merge_sort, bubble_sort, heap_sort)

    def test_sorts_agree_with_sorted(self):
        rng = random.Random(31)
        for length in (0, 1, 2, 7, 100):
            values = [rng.randint(-50, 50) for _ in range(length)]
            for sort in self.sorts:
                array = list(values)
                sort(array)
                self.assertEqual(array, sorted(values), sort.__name__)

    def test_sorts_with_comparator(self):
        values = [3, 1, 4, 1, 5, 9, 2, 6]
        for sort in self.sorts:
            array = list(values)
            sort(array, reversed_compare(natural_compare))
            self.assertEqual(array, sorted(values, reverse=True),
                             sort.__name__)

    def test_stable_sorts(self):
        values = [(2, "a"), (1, "b"), (2, "c"), (1, "d"), (0, "e")]
        for sort in (merge_sort, bubble_sort, heap_sort):
            array = list(values)
            sort(array, by_first)
            self.assertEqual(array, sorted(values, key=lambda pair: pair[0]),
                             sort.__name__)

    def test_sorted_and_reversed_input(self):
        for sort in self.sorts:
            array = list(range(200))
            sort(array)
            self.assertEqual(array, list(range(200)))
            array = list(range(200, 0, -1))
            sort(array)
            self.assertEqual(array, list(range(1, 201)))

    def test_radix_sort(self):
        rng = random.Random(32)
        values = [rng.randint(0, 100000) for _ in range(300)]
        array = list(values)
        radix_sort(array)
        self.assertEqual(array, sorted(values))
        empty: list[int] = []
        radix_sort(empty)
        self.assertEqual(empty, [])
        zeros = [0, 0, 0]
        radix_sort(zeros)
        self.assertEqual(zeros, [0, 0, 0])

    def test_radix_sort_rejects_negative(self):
        with self.assertRaises(ValueError):
            radix_sort([3, -1])
        with self.assertRaises(ValueError):
            radix_sort([1.5])

    def test_none_arguments(self):
        for sort in self.sorts:
            with self.assertRaises(NullContainerError):
                sort(None)
        for sort in (quick_sort, merge_sort, bubble_sort):
            with self.assertRaises(NullInputError):
                sort([2, 1], None)
        with self.assertRaises(NullContainerError):
            radix_sort(None)
        with self.assertRaises(NullContainerError):
            reverse(None)


class TestReverseAndSearch(unittest.TestCase):
    def test_reverse(self):
        for length in (0, 1, 4, 5):
            array = list(range(length))
            reverse(array)
            self.assertEqual(array, list(range(length))[::-1])

    def test_binary_search(self):
        array = [1, 3, 5, 7, 9, 11]
        for value in array:
            self.assertEqual(binary_search(array, value), value)
        for value in (0, 4, 12):
            self.assertIsNone(binary_search(array, value))
        self.assertIsNone(binary_search([], 1))

    def test_binary_search_returns_stored_element(self):
        array = [(1, "one"), (2, "two"), (3, "three")]
        self.assertEqual(binary_search(array, (2, None), by_first),
                         (2, "two"))

    def test_binary_search_none(self):
        with self.assertRaises(NullInputError):
            binary_search([1], None)
        with self.assertRaises(NullContainerError):
            binary_search(None, 1)
