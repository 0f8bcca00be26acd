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
Module defining a hash table whose buckets are red-black trees.

Keys that collide are kept ordered inside their bucket, so a lookup costs
one hash plus a logarithmic search of the bucket, even when many keys share
a bucket.
"""

import logging
from typing import Generic, Iterator, TypeVar

from structura.auxiliary.typingutils import (Action, Comparator, Copier,
                                             Destroyer, HashFunction)
from structura.datastructures.elements import ValueContract, natural_compare
from structura.datastructures.errors import (InvalidIndexError,
                                             KeyNotFoundError,
                                             NullInputError, RehashError,
                                             RemoveFromEmptyError)
from structura.datastructures.redblacktree import RBNode, RedBlackTree
from structura.datastructures.trees import TraversalOrder

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "HashTable",
    "MIN_CAPACITY",
    "DEFAULT_CAPACITY",
    "MAX_LOAD_FACTOR",
    "GROWTH_RATIO"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


# Capacities below the minimum are replaced by the default.
MIN_CAPACITY: int = 10
DEFAULT_CAPACITY: int = 10

# The table is rehashed when size / capacity exceeds this after an insertion.
MAX_LOAD_FACTOR: float = 0.75

GROWTH_RATIO: int = 2

# Signed hashes are reduced through their unsigned 64-bit pattern.
_HASH_MASK: int = (1 << 64) - 1


KT = TypeVar("KT")
VT = TypeVar("VT")


class HashTable(Generic[KT, VT]):
    """
    A hash table mapping keys to values, chaining colliding keys in
    red-black trees.

    Inserting a key equal to a stored one increments its multiplicity and
    keeps the stored value; deleting it decrements the multiplicity and only
    removes the entry when it reaches zero. All buckets share one sentinel.

    Example Usage
    -------------
    ```
    >>> table = HashTable[int, str](hash_function=lambda key: key)
    >>> table.insert(1, "one")
    >>> table.insert(11, "eleven")
    >>> table.bucket_count(1)
    2
    >>> table.find_by_key(11)
    'eleven'
    >>> print(table.format_buckets().splitlines()[1])
    (1): [1: 'one'] [11: 'eleven']
    ```

    Instances are not thread-safe.
    """

    __HASH_TABLE_LOGGER = logging.getLogger("HashTable")

    __slots__ = {
        "__buckets": "The bucket trees, None for a bucket never used.",
        "__size": "The number of distinct keys in the table.",
        "__sentinel": "The sentinel shared by all bucket trees.",
        "__hash": "The hash function of the keys.",
        "__keys": "Value contract of the keys.",
        "__values": "Value contract of the values.",
        "__debug": "Whether to log debug messages."
    }

    def __init__(
        self,
        initial_capacity: int = DEFAULT_CAPACITY,
        hash_function: HashFunction = hash,
        compare_key: Comparator = natural_compare,
        compare_value: Comparator = natural_compare,
        destroy_key: Destroyer | None = None,
        destroy_value: Destroyer | None = None, *,
        copy_key: Copier | None = None,
        copy_value: Copier | None = None,
        debug: bool = False
    ) -> None:
        """
        Create a new empty hash table.

        Parameters
        ----------
        `initial_capacity: int = DEFAULT_CAPACITY` - The number of buckets,
        values below `MIN_CAPACITY` fall back to `DEFAULT_CAPACITY`.

        `hash_function: HashFunction = hash` - Maps a key to an integer.

        `compare_key: Comparator` - Orders keys within a bucket.

        `compare_value: Comparator` - Matches values in lookups by value.

        `destroy_key: Destroyer | None` - Called on every released key.

        `destroy_value: Destroyer | None` - Called on every released value.

        `copy_key: Copier | None` - Applied to inserted keys.

        `copy_value: Copier | None` - Applied to inserted values.

        `debug: bool = False` - Whether to log rehashing.

        Raises
        ------
        `NullInputError` - If the hash function or a comparator is missing.
        """
        if hash_function is None or not callable(hash_function):
            raise NullInputError("A hash table needs a hash function.")
        self.__keys = ValueContract(compare_key, destroy_key, copy_key)
        self.__values = ValueContract(compare_value, destroy_value, copy_value)
        if initial_capacity < MIN_CAPACITY:
            initial_capacity = DEFAULT_CAPACITY
        self.__hash: HashFunction = hash_function
        self.__sentinel = RBNode.make_sentinel()
        self.__buckets: list[RedBlackTree[KT, VT] | None] = \
            [None] * initial_capacity
        self.__size: int = 0
        self.__debug: bool = debug

    def __str__(self) -> str:
        """Return a string representation of the table."""
        return (f"Hash Table with {self.__size} keys "
                f"in {len(self.__buckets)} buckets")

    def __repr__(self) -> str:
        """Return the key-value pairs of the table in bucket order."""
        items = ", ".join(f"{key!r}: {value!r}" for key, value in self.items())
        return f"{self.__class__.__name__}({{{items}}})"

    def __len__(self) -> int:
        """Return the number of distinct keys in the table."""
        return self.__size

    def __bool__(self) -> bool:
        """Return True if the table is not empty."""
        return self.__size != 0

    def __iter__(self) -> Iterator[KT]:
        """Iterate over the keys in bucket order."""
        return (key for key, _ in self.items())

    def __contains__(self, key: object) -> bool:
        """Return whether an equal key is stored."""
        return self.contains_key(key)  # type: ignore[arg-type]

    def is_empty(self) -> bool:
        """Return True if the table is empty."""
        return self.__size == 0

    @property
    def capacity(self) -> int:
        """The number of buckets."""
        return len(self.__buckets)

    @property
    def load_factor(self) -> float:
        """The number of keys per bucket."""
        return self.__size / len(self.__buckets)

    def bucket_index(self, key: KT, /) -> int:
        """Return the index of the bucket the key belongs to."""
        if key is None:
            raise NullInputError("A hash table key cannot be None.")
        return (self.__hash(key) & _HASH_MASK) % len(self.__buckets)

    def __new_bucket(self) -> RedBlackTree[KT, VT]:
        return RedBlackTree(
            self.__keys.compare, self.__keys.destroy,
            copy=self.__keys.copy,
            compare_payload=self.__values.compare,
            destroy_payload=self.__values.destroy,
            copy_payload=self.__values.copy,
            sentinel=self.__sentinel,
            debug=self.__debug
        )

    def __bucket_of(self, key: KT) -> RedBlackTree[KT, VT] | None:
        return self.__buckets[self.bucket_index(key)]

    def __check_index(self, index: int) -> RedBlackTree[KT, VT] | None:
        if not isinstance(index, int) or not 0 <= index < len(self.__buckets):
            raise InvalidIndexError(
                f"Bucket index {index!r} is outside of the table "
                f"of capacity {len(self.__buckets)}."
            )
        return self.__buckets[index]

    def insert(self, key: KT, value: VT, /) -> None:
        """
        Insert a key-value pair into the table.

        If an equal key is stored its multiplicity is incremented and the
        given value is not stored. The table is rehashed if its load factor
        then exceeds `MAX_LOAD_FACTOR`.

        Raises
        ------
        `NullInputError` - If the key or value is None.

        `AllocationError` - If a node cannot be allocated.

        `RehashError` - If the table cannot grow, the pair stays inserted.
        """
        if value is None:
            raise NullInputError("A hash table value cannot be None.")
        index = self.bucket_index(key)
        bucket = self.__buckets[index]
        if bucket is None:
            bucket = self.__buckets[index] = self.__new_bucket()
        before = len(bucket)
        bucket.insert(key, value)
        self.__size += len(bucket) - before
        if self.__size / len(self.__buckets) > MAX_LOAD_FACTOR:
            self.rehash()

    def rehash(self) -> None:
        """
        Grow the table and move every entry to its new bucket.

        The new buckets are fully built before they replace the old ones,
        and the entries are moved without being copied or destroyed.

        Raises
        ------
        `RehashError` - If memory runs out, the table is left unchanged.
        """
        old_capacity = len(self.__buckets)
        new_capacity = old_capacity * GROWTH_RATIO
        if self.__debug:
            self.__HASH_TABLE_LOGGER.debug(
                "Rehashing %s keys from %s to %s buckets.",
                self.__size, old_capacity, new_capacity
            )
        try:
            buckets: list[RedBlackTree[KT, VT] | None] = [None] * new_capacity
            for bucket in self.__buckets:
                if bucket is None:
                    continue
                for key, value in bucket.items():
                    index = (self.__hash(key) & _HASH_MASK) % new_capacity
                    target = buckets[index]
                    if target is None:
                        target = buckets[index] = self.__new_bucket()
                    target.insert_owned(key, value, bucket.count(key))
        except MemoryError as error:
            raise RehashError(
                f"Cannot grow hash table to {new_capacity} buckets."
            ) from error
        self.__buckets = buckets
        if self.__debug:
            self.__HASH_TABLE_LOGGER.debug(
                "Rehashed into %s buckets, load factor is now %.3f.",
                new_capacity, self.load_factor
            )

    def find_by_key(self, key: KT, /) -> VT | None:
        """Return the value stored with an equal key, or None."""
        bucket = self.__bucket_of(key)
        if bucket is None:
            return None
        return bucket.find_payload(key)

    def find_by_key_value(self, key: KT, value: VT, /) -> VT | None:
        """
        Return the value stored with an equal key, only if it is equal to
        the given value.
        """
        stored = self.find_by_key(key)
        if stored is None or value is None:
            return None
        if self.__values.compare(stored, value) != 0:
            return None
        return stored

    def __find_entry_by_value(self, value: VT) -> tuple[KT, VT] | None:
        if value is None:
            raise NullInputError("Cannot search a hash table for None.")
        compare = self.__values.compare
        for key, stored in self.items():
            if compare(stored, value) == 0:
                return key, stored
        return None

    def find_key_by_value(self, value: VT, /) -> KT | None:
        """Return the first key, in bucket order, stored with an equal value."""
        entry = self.__find_entry_by_value(value)
        return entry[0] if entry is not None else None

    def find_value(self, value: VT, /) -> VT | None:
        """Return the first stored value equal to the given one, or None."""
        entry = self.__find_entry_by_value(value)
        return entry[1] if entry is not None else None

    def contains_key(self, key: KT, /) -> bool:
        """Return whether an equal key is stored."""
        if key is None:
            return False
        bucket = self.__bucket_of(key)
        return bucket is not None and key in bucket

    def contains_key_value(self, key: KT, value: VT, /) -> bool:
        """Return whether an equal key is stored with an equal value."""
        if key is None:
            return False
        return self.find_by_key_value(key, value) is not None

    def contains_value(self, value: VT, /) -> bool:
        """Return whether an equal value is stored under any key."""
        return self.__find_entry_by_value(value) is not None

    def count(self, key: KT, /) -> int:
        """Return the multiplicity of the key, zero if it is not stored."""
        bucket = self.__bucket_of(key)
        return bucket.count(key) if bucket is not None else 0

    def delete_by_key(self, key: KT, /) -> None:
        """
        Delete one occurrence of a key.

        The entry and its value are only removed (and destroyed) once its
        multiplicity drops to zero.

        Raises
        ------
        `RemoveFromEmptyError` - If the table is empty.

        `KeyNotFoundError` - If the key is not stored.
        """
        if self.__size == 0:
            raise RemoveFromEmptyError("Delete from empty hash table.")
        bucket = self.__bucket_of(key)
        if bucket is None or key not in bucket:
            raise KeyNotFoundError(f"Key {key!r} is not in the hash table.")
        before = len(bucket)
        bucket.delete(key)
        self.__size -= before - len(bucket)

    def delete_by_key_value(self, key: KT, value: VT, /) -> None:
        """
        Delete one occurrence of a key only if it is stored with an equal
        value.

        Raises
        ------
        `RemoveFromEmptyError` - If the table is empty.

        `KeyNotFoundError` - If the key is not stored with an equal value.
        """
        if self.__size == 0:
            raise RemoveFromEmptyError("Delete from empty hash table.")
        if self.find_by_key_value(key, value) is None:
            raise KeyNotFoundError(
                f"Key {key!r} is not stored with value {value!r}.")
        self.delete_by_key(key)

    def delete_by_value(self, value: VT, /) -> None:
        """
        Delete one occurrence of the first key, in bucket order, stored with
        an equal value.

        Raises
        ------
        `RemoveFromEmptyError` - If the table is empty.

        `KeyNotFoundError` - If no key is stored with an equal value.
        """
        if self.__size == 0:
            raise RemoveFromEmptyError("Delete from empty hash table.")
        entry = self.__find_entry_by_value(value)
        if entry is None:
            raise KeyNotFoundError(f"Value {value!r} is not in the hash table.")
        self.delete_by_key(entry[0])

    def delete_bucket(self, key: KT, /) -> None:
        """
        Delete every entry in the bucket the key belongs to.

        Raises
        ------
        `RemoveFromEmptyError` - If the bucket is empty.
        """
        bucket = self.__bucket_of(key)
        if bucket is None or bucket.is_empty():
            raise RemoveFromEmptyError(
                f"Bucket {self.bucket_index(key)} is already empty.")
        self.__size -= len(bucket)
        bucket.clear()

    def bucket_count(self, key: KT, /) -> int:
        """Return the number of entries in the bucket the key belongs to."""
        bucket = self.__bucket_of(key)
        return len(bucket) if bucket is not None else 0

    def is_bucket_empty(self, key: KT, /) -> bool:
        """Return whether the bucket the key belongs to is empty."""
        return self.bucket_count(key) == 0

    def items(
        self,
        order: TraversalOrder = "inorder"
    ) -> Iterator[tuple[KT, VT]]:
        """
        Iterate over the key-value pairs, bucket by bucket in index order.

        Within a bucket the pairs follow the given tree traversal order.
        """
        for bucket in self.__buckets:
            if bucket is not None:
                yield from bucket.items(order)  # type: ignore[misc]

    def keys(self) -> Iterator[KT]:
        """Iterate over the keys in bucket order."""
        return (key for key, _ in self.items())

    def values(self) -> Iterator[VT]:
        """Iterate over the values in bucket order."""
        return (value for _, value in self.items())

    def __traverse(
        self,
        pairs: Iterator[tuple[KT, VT]],
        action: Action
    ) -> None:
        if action is None:
            raise NullInputError("No action given to traverse the table.")
        for _, value in pairs:
            action(value)

    def __bucket_items(
        self,
        index: int,
        order: TraversalOrder
    ) -> Iterator[tuple[KT, VT]]:
        bucket = self.__check_index(index)
        if bucket is None:
            return iter(())
        return bucket.items(order)  # type: ignore[return-value]

    def traverse_inorder(self, action: Action, /) -> None:
        """
        Apply an action to every value, bucket by bucket, visiting each
        bucket in ascending key order.

        Raises
        ------
        `NullInputError` - If the action is None.
        """
        self.__traverse(self.items("inorder"), action)

    def traverse_preorder(self, action: Action, /) -> None:
        """Apply an action to every value, each bucket in pre-order."""
        self.__traverse(self.items("preorder"), action)

    def traverse_postorder(self, action: Action, /) -> None:
        """Apply an action to every value, each bucket in post-order."""
        self.__traverse(self.items("postorder"), action)

    def traverse_level(self, action: Action, /) -> None:
        """Apply an action to every value, each bucket in level order."""
        self.__traverse(self.items("level"), action)

    def traverse_bucket_inorder(self, index: int, action: Action, /) -> None:
        """
        Apply an action to every value of one bucket in ascending key order.

        Raises
        ------
        `InvalidIndexError` - If the bucket index is out of range.

        `NullInputError` - If the action is None.
        """
        self.__traverse(self.__bucket_items(index, "inorder"), action)

    def traverse_bucket_preorder(self, index: int, action: Action, /) -> None:
        """Apply an action to every value of one bucket in pre-order."""
        self.__traverse(self.__bucket_items(index, "preorder"), action)

    def traverse_bucket_postorder(self, index: int, action: Action, /) -> None:
        """Apply an action to every value of one bucket in post-order."""
        self.__traverse(self.__bucket_items(index, "postorder"), action)

    def traverse_bucket_level(self, index: int, action: Action, /) -> None:
        """Apply an action to every value of one bucket in level order."""
        self.__traverse(self.__bucket_items(index, "level"), action)

    def format_buckets(self, order: TraversalOrder = "inorder") -> str:
        """
        Return a printable listing of the table, one line per bucket.

        Each line is prefixed with the bucket index, an empty bucket reads
        `(Null)`.
        """
        lines: list[str] = []
        for index, bucket in enumerate(self.__buckets):
            if bucket is None or bucket.is_empty():
                lines.append(f"({index}): (Null)")
            else:
                entries = " ".join(f"[{key!r}: {value!r}]"
                                   for key, value in bucket.items(order))
                lines.append(f"({index}): {entries}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Remove every entry, destroying keys and values."""
        for bucket in self.__buckets:
            if bucket is not None:
                bucket.clear()
        self.__size = 0
