
import random
import unittest

from structura.datastructures.avltree import AVLNode, AVLTree
from structura.datastructures.errors import KeyNotFoundError


class TestAVLTree(unittest.TestCase):
    def test_right_right_rotation(self):
        tree = AVLTree[int]()
        for value in (10, 20, 30):
            tree.insert(value)
        self.assertEqual(tree.root, 20)
        self.assertEqual(tree.height(20), 2)
        self.assertEqual(tree.height(10), 1)
        self.assertEqual(tree.height(30), 1)
        self.assertEqual(tree.height(), 2)
        self.assertEqual(list(tree), [10, 20, 30])

    def test_left_right_rotation(self):
        tree = AVLTree[int]()
        for value in (30, 10, 20):
            tree.insert(value)
        self.assertEqual(tree.root, 20)
        self.assertEqual(list(tree.iter_preorder()), [20, 10, 30])

    def test_sequential_insert_is_perfect(self):
        tree = AVLTree[int]()
        for value in range(1, 8):
            tree.insert(value)
        self.assertEqual(list(tree.iter_level()), [4, 2, 6, 1, 3, 5, 7])
        self.assertEqual(list(tree.iter_preorder()), [4, 2, 1, 3, 6, 5, 7])
        self.assertEqual(list(tree.iter_postorder()), [1, 3, 2, 5, 7, 6, 4])
        self.assertEqual(tree.height(), 3)
        self.assertEqual(tree.lowest_common_ancestor(1, 3), 2)
        self.assertEqual(tree.lowest_common_ancestor(1, 7), 4)
        self.assertEqual(tree.lowest_common_ancestor(6, 7), 6)
        self.assertEqual(tree.level(5), 2)

    def test_delete_root_takes_successor(self):
        tree = AVLTree[int]()
        for value in range(1, 8):
            tree.insert(value)
        tree.delete(4)
        self.assertEqual(tree.root, 5)
        self.assertEqual(list(tree.iter_level()), [5, 2, 6, 1, 3, 7])
        self.assertEqual(tree.height(6), 2)
        self.assertEqual(tree.balance(6), -1)
        self.assertTrue(tree.check_invariants())

    def test_delete_rebalances(self):
        tree = AVLTree[int]()
        for value in (2, 1, 3, 4):
            tree.insert(value)
        tree.delete(1)
        self.assertEqual(tree.root, 3)
        self.assertEqual(list(tree.iter_level()), [3, 2, 4])
        self.assertTrue(tree.check_invariants())

    def test_height_of_missing_value(self):
        tree = AVLTree[int]()
        self.assertEqual(tree.height(), 0)
        with self.assertRaises(KeyNotFoundError):
            tree.height(1)
        with self.assertRaises(KeyNotFoundError):
            tree.balance(1)

    def test_height_is_logarithmic(self):
        tree = AVLTree[int]()
        for value in range(1000):
            tree.insert(value)
        self.assertLessEqual(tree.height(), 14)
        self.assertTrue(tree.check_invariants())

    def test_balance_after_random_operations(self):
        rng = random.Random(5)
        tree = AVLTree[int]()
        values = rng.sample(range(500), 300)
        for value in values:
            tree.insert(value)
        for value in values[::2]:
            tree.delete(value)
            self.assertTrue(tree.check_invariants())
        for value in tree:
            self.assertIn(tree.balance(value), (-1, 0, 1))
        self.assertEqual(list(tree), sorted(values[1::2]))

    def test_shared_sentinel(self):
        sentinel = AVLNode.make_sentinel()
        first = AVLTree[int](sentinel=sentinel)
        second = AVLTree[int](sentinel=sentinel)
        rng = random.Random(8)
        for _ in range(200):
            first.insert(rng.randint(0, 50))
            second.insert(rng.randint(0, 50))
        for value in range(0, 50, 3):
            if value in first:
                first.delete(value)
            if value in second:
                second.delete(value)
        self.assertEqual(sentinel.height, 0)
        self.assertTrue(first.check_invariants())
        self.assertTrue(second.check_invariants())

    def test_debug_logging(self):
        tree = AVLTree[int](debug=True)
        with self.assertLogs("AVLTree", level="DEBUG") as logs:
            for value in (1, 2, 3):
                tree.insert(value)
        self.assertTrue(any("Rotated left" in line for line in logs.output))
