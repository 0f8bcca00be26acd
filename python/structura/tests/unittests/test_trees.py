
import random
import unittest

from structura.datastructures.avltree import AVLTree
from structura.datastructures.errors import (CannotSwapError,
                                             FixNullNodeError,
                                             KeyNotFoundError,
                                             NullInputError,
                                             RemoveFromEmptyError)
from structura.datastructures.redblacktree import RedBlackTree
from structura.datastructures.trees import BinarySearchTree


class Box:
    """A value compared by its key, used to check object identity."""

    def __init__(self, key: int) -> None:
        self.key = key

    def __lt__(self, other: "Box") -> bool:
        return self.key < other.key

    def __gt__(self, other: "Box") -> bool:
        return self.key > other.key


class TreeBehaviour:
    """Behaviour shared by every binary search tree, mixed into test cases."""

    tree_type: type[BinarySearchTree] = BinarySearchTree

    def make(self, values=(), **kwargs) -> BinarySearchTree:
        tree = self.tree_type(**kwargs)
        for value in values:
            tree.insert(value)
        return tree

    def test_inorder_is_sorted(self):
        tree = self.make([5, 3, 8, 1, 4, 7, 9])
        self.assertEqual(list(tree), [1, 3, 4, 5, 7, 8, 9])
        self.assertEqual(len(tree), 7)
        self.assertTrue(tree.check_invariants())

    def test_empty_tree(self):
        tree = self.make()
        self.assertTrue(tree.is_empty())
        self.assertIsNone(tree.root)
        self.assertIsNone(tree.min_below())
        self.assertIsNone(tree.max_below())
        self.assertEqual(list(tree.iter_level()), [])
        self.assertTrue(tree.check_invariants())

    def test_find(self):
        tree = self.make([2, 1, 3])
        self.assertEqual(tree.find(3), 3)
        self.assertIsNone(tree.find(4))
        self.assertIn(1, tree)
        self.assertNotIn(4, tree)
        with self.assertRaises(NullInputError):
            tree.find(None)

    def test_insert_none(self):
        tree = self.make()
        with self.assertRaises(NullInputError):
            tree.insert(None)

    def test_multiplicity(self):
        tree = self.make([1, 2, 3])
        tree.insert(2)
        self.assertEqual(len(tree), 3)
        self.assertEqual(tree.count(2), 2)
        tree.delete(2)
        self.assertEqual(tree.count(2), 1)
        self.assertIn(2, tree)
        tree.delete(2)
        self.assertEqual(tree.count(2), 0)
        self.assertNotIn(2, tree)
        self.assertEqual(len(tree), 2)

    def test_delete_errors(self):
        tree = self.make()
        with self.assertRaises(RemoveFromEmptyError):
            tree.delete(1)
        tree.insert(1)
        with self.assertRaises(KeyNotFoundError):
            tree.delete(2)

    def test_insert_then_delete_restores(self):
        tree = self.make([50, 30, 70, 20, 40, 60, 80])
        before = list(tree)
        tree.insert(45)
        tree.delete(45)
        self.assertEqual(list(tree), before)
        self.assertEqual(len(tree), len(before))
        self.assertTrue(tree.check_invariants())

    def test_delete_root_until_empty(self):
        tree = self.make(range(20))
        while tree:
            tree.delete(tree.root)
            self.assertTrue(tree.check_invariants())
        self.assertIsNone(tree.root)

    def test_delete_keeps_stored_objects(self):
        boxes = [Box(key) for key in range(10)]
        tree = self.make(boxes)
        target = tree.find(Box(6))
        for key in (3, 5, 7, 1):
            tree.delete(Box(key))
            self.assertIs(tree.find(Box(6)), target)
        self.assertEqual([box.key for box in tree], [0, 2, 4, 6, 8, 9])

    def test_destroy_on_removal_only(self):
        destroyed = []
        tree = self.make([1, 2, 3], destroy=destroyed.append)
        tree.insert(2)
        tree.delete(2)
        self.assertEqual(destroyed, [])
        tree.delete(2)
        self.assertEqual(destroyed, [2])
        tree.clear()
        self.assertEqual(sorted(destroyed), [1, 2, 3])
        self.assertTrue(tree.is_empty())

    def test_copy_on_insert(self):
        value = [1, 2]
        tree = self.make([value], copy=list)
        stored = tree.find([1, 2])
        self.assertEqual(stored, value)
        self.assertIsNot(stored, value)

    def test_min_max_below(self):
        tree = self.make(range(1, 16))
        self.assertEqual(tree.min_below(), 1)
        self.assertEqual(tree.max_below(), 15)
        self.assertIsNone(tree.min_below(100))
        root = tree.root
        self.assertEqual(tree.max_below(root), 15)
        self.assertEqual(tree.min_below(root), 1)

    def test_predecessor_successor(self):
        values = [8, 4, 12, 2, 6, 10, 14, 1, 3]
        tree = self.make(values)
        ordered = sorted(values)
        for index, value in enumerate(ordered):
            expected_predecessor = ordered[index - 1] if index > 0 else None
            expected_successor = (ordered[index + 1]
                                  if index + 1 < len(ordered) else None)
            self.assertEqual(tree.predecessor(value), expected_predecessor)
            self.assertEqual(tree.successor(value), expected_successor)
        with self.assertRaises(KeyNotFoundError):
            tree.predecessor(5)
        with self.assertRaises(KeyNotFoundError):
            tree.successor(5)

    def test_lowest_common_ancestor(self):
        tree = self.make(range(1, 32))
        for first, second in [(1, 31), (3, 4), (10, 10), (17, 29)]:
            ancestor = tree.lowest_common_ancestor(first, second)
            self.assertTrue(min(first, second) <= ancestor <= max(first, second))
            self.assertLessEqual(tree.level(ancestor), tree.level(first))
            self.assertLessEqual(tree.level(ancestor), tree.level(second))
        with self.assertRaises(KeyNotFoundError):
            tree.lowest_common_ancestor(1, 99)

    def test_level(self):
        tree = self.make([2, 1, 3])
        self.assertEqual(tree.level(tree.root), 0)
        with self.assertRaises(KeyNotFoundError):
            tree.level(9)

    def test_traversals_visit_each_node_once(self):
        values = list(range(40))
        tree = self.make(random.Random(3).sample(values, len(values)))
        for iterate in (tree.iter_inorder, tree.iter_preorder,
                        tree.iter_postorder, tree.iter_level):
            self.assertEqual(sorted(iterate()), values)
        self.assertEqual(next(tree.iter_preorder()), tree.root)
        self.assertEqual(next(tree.iter_level()), tree.root)
        self.assertEqual(list(tree.iter_postorder())[-1], tree.root)

    def test_traverse_actions(self):
        tree = self.make([2, 1, 3])
        seen = []
        tree.traverse_inorder(seen.append)
        self.assertEqual(seen, [1, 2, 3])
        for traverse in (tree.traverse_inorder, tree.traverse_preorder,
                         tree.traverse_postorder, tree.traverse_level):
            with self.assertRaises(NullInputError):
                traverse(None)

    def test_swap_errors(self):
        tree = self.make([2, 1, 3])
        node = tree._search(2)
        with self.assertRaises(CannotSwapError):
            tree._swap_positions(node, node)
        with self.assertRaises(CannotSwapError):
            tree._swap_positions(node, tree._sentinel)

    def test_rotate_sentinel(self):
        tree = self.make([1])
        with self.assertRaises(FixNullNodeError):
            tree._rotate_left(tree._sentinel)
        with self.assertRaises(FixNullNodeError):
            tree._rotate_right(tree._search(1))

    def test_random_operations(self):
        rng = random.Random(2023)
        tree = self.make()
        reference: dict[int, int] = {}
        for _ in range(600):
            value = rng.randint(0, 80)
            if reference and rng.random() < 0.45:
                value = rng.choice(list(reference))
                tree.delete(value)
                reference[value] -= 1
                if reference[value] == 0:
                    del reference[value]
            else:
                tree.insert(value)
                reference[value] = reference.get(value, 0) + 1
            self.assertTrue(tree.check_invariants())
            self.assertEqual(list(tree), sorted(reference))
        for value, count in reference.items():
            self.assertEqual(tree.count(value), count)


class TestBinarySearchTree(TreeBehaviour, unittest.TestCase):
    tree_type = BinarySearchTree

    def test_unbalanced_shape(self):
        tree = self.make([1, 2, 3])
        self.assertEqual(list(tree.iter_preorder()), [1, 2, 3])
        self.assertEqual(tree.level(3), 2)


class TestAVLTreeBehaviour(TreeBehaviour, unittest.TestCase):
    tree_type = AVLTree


class TestRedBlackTreeBehaviour(TreeBehaviour, unittest.TestCase):
    tree_type = RedBlackTree
