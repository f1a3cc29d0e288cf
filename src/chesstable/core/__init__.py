"""Core domain layer — squares, enums, errors and special-move geometry.

Quick start::

    from chesstable.core import Square, parse_square

    e2 = parse_square("e2")
    assert e2 == Square(1, 4)
"""

from chesstable.core.enums import Color, KinematicState, MoveFlag, PieceType
from chesstable.core.errors import (
    BoardDesyncError,
    CallerError,
    ChesstableError,
    InternalConsistencyError,
    InvalidPromotionError,
    InvalidSelectionError,
    InvalidSquareError,
    PieceNotFoundError,
    SelectionStateError,
)
from chesstable.core.special_moves import (
    castling_rook_squares,
    en_passant_victim,
    home_row,
    pawn_row,
)
from chesstable.core.types import ALL_SQUARES, BOARD_SIZE, Square, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "KinematicState",
    "MoveFlag",
    "PieceType",
    # Errors
    "BoardDesyncError",
    "CallerError",
    "ChesstableError",
    "InternalConsistencyError",
    "InvalidPromotionError",
    "InvalidSelectionError",
    "InvalidSquareError",
    "PieceNotFoundError",
    "SelectionStateError",
    # Types / helpers
    "ALL_SQUARES",
    "BOARD_SIZE",
    "Square",
    "parse_square",
    "square_name",
    # Special moves
    "castling_rook_squares",
    "en_passant_victim",
    "home_row",
    "pawn_row",
]
