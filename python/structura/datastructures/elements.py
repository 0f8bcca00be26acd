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
Module defining the value-type contract shared by all containers.

Every container is parameterised by how its elements are ordered, how they
are copied in, and how they are released. The container owns every stored
element: insertions take a copy (when a copier is given), lookups expose the
stored object itself, and removals hand the element to the destroyer.
"""

from dataclasses import dataclass
from typing import Any

from structura.auxiliary.typingutils import (Comparator, Copier, Destroyer,
                                             SupportsRichComparison)
from structura.datastructures.errors import NullInputError

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "natural_compare",
    "reversed_compare",
    "ValueContract"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


def natural_compare(
    first: SupportsRichComparison,
    second: SupportsRichComparison, /
) -> int:
    """
    Three-way comparison using the natural ordering of the arguments.

    Returns -1, 0 or 1 if the first argument is respectively less than, equal
    to, or greater than the second, according to their rich comparison
    methods.
    """
    if first < second:
        return -1
    if first > second:
        return 1
    return 0


def reversed_compare(compare: Comparator, /) -> Comparator:
    """
    Invert a three-way comparator.

    A max-heap driven by the inverted comparator behaves as a min-heap.
    """
    if compare is None:
        raise NullInputError("Cannot reverse a missing comparator.")

    def _reversed(first: Any, second: Any, /) -> int:
        return compare(second, first)

    return _reversed


@dataclass(frozen=True)
class ValueContract:
    """
    Bundle of the per-type behaviours a container needs from its elements.

    Parameters
    ----------
    `compare: Comparator` - Total-order three-way comparator.

    `destroy: Destroyer | None = None` - Called once on every element the
    container releases. Elements that are only moved inside the container
    (rotations, position swaps, rehashing) are never destroyed.

    `copy: Copier | None = None` - Applied on insertion so the container
    owns an independent copy. If None the given reference is stored.

    Raises
    ------
    `NullInputError` - If the comparator is missing or not callable.
    """

    compare: Comparator
    destroy: Destroyer | None = None
    copy: Copier | None = None

    def __post_init__(self) -> None:
        if self.compare is None or not callable(self.compare):
            raise NullInputError("A comparator is required.")
        if self.destroy is not None and not callable(self.destroy):
            raise NullInputError("The destroyer must be callable.")
        if self.copy is not None and not callable(self.copy):
            raise NullInputError("The copier must be callable.")

    def adopt(self, value: Any, /) -> Any:
        """Return the object the container should store for `value`."""
        if self.copy is None:
            return value
        return self.copy(value)

    def release(self, value: Any, /) -> None:
        """Hand a value the container no longer stores to the destroyer."""
        if self.destroy is not None:
            self.destroy(value)
