"""Rules oracle layer wrapping python-chess."""

from chesstable.rules.oracle import (
    ChessOracle,
    MoveResult,
    RulesOracle,
    from_chess_square,
    promotion_letter,
    to_chess_square,
)

__all__ = [
    "ChessOracle",
    "MoveResult",
    "RulesOracle",
    "from_chess_square",
    "promotion_letter",
    "to_chess_square",
]
