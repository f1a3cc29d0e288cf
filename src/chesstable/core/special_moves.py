"""Geometric rules for castling and en passant.

Everything the coordinator needs to resolve a special move's side effects
lives here as pure functions of color and move flag.
"""

from __future__ import annotations

from chesstable.core.enums import Color, MoveFlag
from chesstable.core.errors import InvalidSquareError
from chesstable.core.types import Square

# flag → (rook home column, rook post-castle column)
_CASTLING_ROOK_COLUMNS: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.KINGSIDE_CASTLE: (7, 5),
    MoveFlag.QUEENSIDE_CASTLE: (0, 3),
}


def home_row(color: Color) -> int:
    """Back-rank row of *color* (0 for white, 7 for black)."""
    return 0 if color == Color.WHITE else 7


def pawn_row(color: Color) -> int:
    """Starting row of *color*'s pawns."""
    return 1 if color == Color.WHITE else 6


def forward(color: Color) -> int:
    """Row direction in which *color*'s pawns advance."""
    return 1 if color == Color.WHITE else -1


def castling_rook_squares(color: Color, flag: MoveFlag) -> tuple[Square, Square]:
    """Return ``(rook_from, rook_to)`` for a castle of *color*.

    Raises:
        ValueError: *flag* is not a castling flag.
    """
    try:
        from_col, to_col = _CASTLING_ROOK_COLUMNS[flag]
    except KeyError:
        raise ValueError(f"Not a castling flag: {flag!r}") from None
    row = home_row(color)
    return Square(row, from_col), Square(row, to_col)


def en_passant_victim(destination: Square, mover: Color) -> Square:
    """Square of the pawn captured en passant.

    Same column as *destination*, one row behind it toward the mover's
    own home edge.
    """
    row = destination.row - forward(mover)
    try:
        return Square(row, destination.column)
    except InvalidSquareError:
        raise InvalidSquareError(
            f"No en passant victim behind {destination} for {mover}"
        ) from None
