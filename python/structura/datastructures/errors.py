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
Module for all data structure related errors.

Every fallible operation of the containers in this package raises exactly
one exception derived from `StructureError`. The `kind` attribute of the
exception is a member of the closed `ErrorKind` enumeration, so callers can
either catch specific exception classes, catch the built-in exception type
each class also derives from (e.g. `KeyError`), or dispatch on `kind`.
"""

import enum

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "ErrorKind",
    "StructureError",
    "NullContainerError",
    "NullInputError",
    "AllocationError",
    "KeyNotFoundError",
    "RemoveFromEmptyError",
    "InvalidIndexError",
    "CannotSwapError",
    "FixNullNodeError",
    "UnknownColourError",
    "RehashError"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


@enum.unique
class ErrorKind(enum.Enum):
    """The closed set of error kinds raised by the containers."""

    NULL_CONTAINER = "null-container"
    NULL_INPUT = "null-input"
    ALLOCATION_FAILED = "allocation-failed"
    KEY_NOT_FOUND = "key-not-found"
    REMOVE_FROM_EMPTY = "remove-from-empty"
    INVALID_INDEX = "invalid-index"
    CANNOT_SWAP = "cannot-swap"
    FIX_NULL_NODE = "fix-null-node"
    UNKNOWN_COLOUR = "unknown-colour"
    REHASH_FAILED = "rehash-failed"


class StructureError(Exception):
    """Base class for all errors raised by the data structures."""

    kind: ErrorKind

    def __init__(self, message: str = "", /) -> None:
        """Create a new error with an optional message."""
        super().__init__(message or self.kind.value)

    # Unlike KeyError, the message is not quoted.
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else self.kind.value


class NullContainerError(StructureError, TypeError):
    """Raised when an operation is given no container to work on."""

    kind = ErrorKind.NULL_CONTAINER


class NullInputError(StructureError, ValueError):
    """Raised when a required input (comparator, action, key...) is None."""

    kind = ErrorKind.NULL_INPUT


class AllocationError(StructureError, MemoryError):
    """Raised when a node or backing array cannot be allocated."""

    kind = ErrorKind.ALLOCATION_FAILED


class KeyNotFoundError(StructureError, KeyError):
    """Raised when a key or value is not stored in the container."""

    kind = ErrorKind.KEY_NOT_FOUND


class RemoveFromEmptyError(StructureError, IndexError):
    """Raised when removing from an empty container."""

    kind = ErrorKind.REMOVE_FROM_EMPTY


class InvalidIndexError(StructureError, IndexError):
    """Raised when an index lies outside the valid range."""

    kind = ErrorKind.INVALID_INDEX


class CannotSwapError(StructureError, RuntimeError):
    """Raised when two tree nodes cannot exchange positions."""

    kind = ErrorKind.CANNOT_SWAP


class FixNullNodeError(StructureError, RuntimeError):
    """Raised when a rebalancing routine is started from the sentinel."""

    kind = ErrorKind.FIX_NULL_NODE


class UnknownColourError(StructureError, ValueError):
    """Raised when a red-black node carries a colour that is not red or black."""

    kind = ErrorKind.UNKNOWN_COLOUR


class RehashError(StructureError, RuntimeError):
    """Raised when a hash table fails to grow; the table is left unchanged."""

    kind = ErrorKind.REHASH_FAILED
