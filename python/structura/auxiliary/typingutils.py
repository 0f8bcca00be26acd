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

"""Module defining the protocols and callable aliases used for type hinting."""

# Useful links for typing:
#      - Type Aliasing: https://peps.python.org/pep-0613/
#      - Protocols: https://peps.python.org/pep-0544/

from typing import Any, Callable, Protocol, TypeAlias, runtime_checkable

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "SupportsRichComparison",
    "Comparator",
    "Destroyer",
    "Copier",
    "Action",
    "HashFunction"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


@runtime_checkable
class SupportsRichComparison(Protocol):
    """
    Protocol for values ordered by their `__lt__` and `__gt__` methods,
    as required by the natural comparator.
    """

    def __lt__(self, __other: Any) -> bool:
        ...

    def __gt__(self, __other: Any) -> bool:
        ...


# A three-way comparison; negative if the first argument orders before the
# second, zero if they are equal, positive otherwise.
Comparator: TypeAlias = Callable[[Any, Any], int]

# Releases whatever a stored value owns, called when the container drops it.
Destroyer: TypeAlias = Callable[[Any], None]

# Produces the container's own copy of a value on insertion.
Copier: TypeAlias = Callable[[Any], Any]

# Applied to each element by the eager traversal methods.
Action: TypeAlias = Callable[[Any], Any]

HashFunction: TypeAlias = Callable[[Any], int]
