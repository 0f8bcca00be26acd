
import random
import unittest

from structura.datastructures.errors import (KeyNotFoundError,
                                             UnknownColourError)
from structura.datastructures.redblacktree import (Colour, RBNode,
                                                   RedBlackTree)


class TestRedBlackTree(unittest.TestCase):
    def make(self, keys, **kwargs) -> RedBlackTree[int, str]:
        tree = RedBlackTree[int, str](**kwargs)
        for key in keys:
            tree.insert(key, str(key))
        return tree

    def test_insert_recolours_and_rotates(self):
        tree = self.make([10, 20, 30, 15, 25, 5])
        self.assertEqual(list(tree), [5, 10, 15, 20, 25, 30])
        self.assertEqual(tree.root, 20)
        self.assertEqual(tree.colour(20), Colour.BLACK)
        for key in (10, 30):
            self.assertEqual(tree.colour(key), Colour.BLACK)
        for key in (5, 15, 25):
            self.assertEqual(tree.colour(key), Colour.RED)
        self.assertEqual(tree.black_height(), 2)
        self.assertTrue(tree.check_invariants())

    def test_delete_red_successor(self):
        tree = self.make([10, 20, 30, 15, 25, 5])
        tree.delete(10)
        self.assertEqual(list(tree), [5, 15, 20, 25, 30])
        self.assertEqual(tree.colour(15), Colour.BLACK)
        self.assertEqual(tree.find_payload(15), "15")
        self.assertTrue(tree.check_invariants())

    def test_delete_black_leaf(self):
        tree = self.make([10, 20, 30, 15, 25, 5])
        for key in (5, 15, 10):
            tree.delete(key)
            self.assertTrue(tree.check_invariants())
        self.assertEqual(list(tree), [20, 25, 30])
        self.assertEqual(tree.black_height(), 2)

    def test_colour_of_missing_key(self):
        tree = self.make([1])
        with self.assertRaises(KeyNotFoundError):
            tree.colour(2)

    def test_empty_black_height(self):
        self.assertEqual(RedBlackTree().black_height(), 0)

    def test_payloads(self):
        tree = self.make([2, 1, 3])
        self.assertEqual(tree.find_payload(1), "1")
        self.assertIsNone(tree.find_payload(4))
        tree.insert(1, "other")
        self.assertEqual(tree.find_payload(1), "1")
        self.assertEqual(tree.count(1), 2)
        self.assertEqual(list(tree.items()), [(1, "1"), (2, "2"), (3, "3")])
        self.assertEqual(list(tree.items("level")),
                         [(2, "2"), (1, "1"), (3, "3")])

    def test_unknown_order(self):
        tree = self.make([1])
        with self.assertRaises(ValueError):
            list(tree.items("sideways"))

    def test_payload_destroyed_with_node(self):
        destroyed_keys = []
        destroyed_payloads = []
        tree = self.make([1, 2, 3], destroy=destroyed_keys.append,
                         destroy_payload=destroyed_payloads.append)
        tree.delete(2)
        self.assertEqual(destroyed_keys, [2])
        self.assertEqual(destroyed_payloads, ["2"])
        tree.clear()
        self.assertEqual(sorted(destroyed_payloads), ["1", "2", "3"])

    def test_payload_copied_on_insert(self):
        payload = ["a"]
        tree = RedBlackTree[int, list](copy_payload=list)
        tree.insert(1, payload)
        self.assertEqual(tree.find_payload(1), payload)
        self.assertIsNot(tree.find_payload(1), payload)

    def test_insert_owned_does_not_copy(self):
        payload = ["a"]
        tree = RedBlackTree[int, list](copy_payload=list)
        tree.insert_owned(1, payload, 3)
        self.assertIs(tree.find_payload(1), payload)
        self.assertEqual(tree.count(1), 3)
        tree.insert_owned(1, ["b"], 2)
        self.assertEqual(tree.count(1), 5)
        self.assertIs(tree.find_payload(1), payload)

    def test_red_sentinel_rejected(self):
        with self.assertRaises(UnknownColourError):
            RedBlackTree(sentinel=RBNode(None, None))

    def test_corrupt_colour_detected(self):
        tree = self.make([1, 2])
        tree._search(2).colour = "green"
        with self.assertRaises(UnknownColourError):
            tree.check_invariants()

    def test_black_height_bounds_size(self):
        rng = random.Random(17)
        tree = RedBlackTree[int, None]()
        for key in rng.sample(range(10000), 2000):
            tree.insert(key)
        self.assertTrue(tree.check_invariants())
        self.assertGreaterEqual(len(tree), 2 ** tree.black_height() - 1)

    def test_random_insert_delete(self):
        rng = random.Random(42)
        tree = RedBlackTree[int, int]()
        present: set[int] = set()
        for _ in range(1000):
            key = rng.randint(0, 200)
            if key in present:
                tree.delete(key)
                present.discard(key)
            else:
                tree.insert(key, key * 2)
                present.add(key)
            self.assertTrue(tree.check_invariants())
        self.assertEqual(list(tree), sorted(present))
        for key in present:
            self.assertEqual(tree.find_payload(key), key * 2)

    def test_shared_sentinel(self):
        sentinel = RBNode.make_sentinel()
        trees = [RedBlackTree[int, None](sentinel=sentinel) for _ in range(3)]
        rng = random.Random(99)
        for _ in range(300):
            tree = rng.choice(trees)
            key = rng.randint(0, 40)
            if key in tree:
                tree.delete(key)
            else:
                tree.insert(key)
        self.assertIs(sentinel.colour, Colour.BLACK)
        self.assertIs(sentinel.left, sentinel)
        self.assertIs(sentinel.right, sentinel)
        self.assertIs(sentinel.parent, sentinel)
        for tree in trees:
            self.assertTrue(tree.check_invariants())
