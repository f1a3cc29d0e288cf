"""Core enumerations for the table domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()


class MoveFlag(IntEnum):
    """Special-move category reported by the rules oracle."""

    NORMAL = 0
    KINGSIDE_CASTLE = 1
    QUEENSIDE_CASTLE = 2
    EN_PASSANT = 3
    PROMOTION = 4
    ERROR = 5

    @property
    def is_castle(self) -> bool:
        return self in (MoveFlag.KINGSIDE_CASTLE, MoveFlag.QUEENSIDE_CASTLE)


class KinematicState(IntEnum):
    """Whether a piece takes part in the physics simulation."""

    FREE = 0  # responds to gravity/contacts
    HELD = 1  # picked up, excluded from simulation
