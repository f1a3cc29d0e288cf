"""Square value object and coordinate helpers.

Board layout: ``row`` is the rank index, ``column`` the file index::

    (0, 0) = a1, (0, 7) = h1
    (1, 4) = e2
    (7, 0) = a8, (7, 7) = h8
"""

from __future__ import annotations

from dataclasses import dataclass

from chesstable.core.errors import InvalidSquareError

BOARD_SIZE = 8

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """Immutable ``(row, column)`` board coordinate, both in ``[0, 8)``."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if not (is_valid_coord(self.row) and is_valid_coord(self.column)):
            raise InvalidSquareError(
                f"Square out of range: row={self.row!r}, column={self.column!r}"
            )

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Square(1, 4).name == 'e2'``."""
        return _FILES[self.column] + _RANKS[self.row]

    def __str__(self) -> str:
        return self.name


def is_valid_coord(value: object) -> bool:
    """Check whether *value* is an integer row/column index."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value < BOARD_SIZE
    )


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(0, 0)`` → ``'a1'``."""
    return sq.name


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(3, 4)``."""
    if (
        not isinstance(name, str)
        or len(name) != 2
        or name[0] not in _FILES
        or name[1] not in _RANKS
    ):
        raise InvalidSquareError(f"Invalid square name: {name!r}")
    return Square(_RANKS.index(name[1]), _FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, column) for row in range(BOARD_SIZE) for column in range(BOARD_SIZE)
)
