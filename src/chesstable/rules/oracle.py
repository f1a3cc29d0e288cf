"""Rules-engine oracle: the single source of truth for chess legality.

The table never decides legality itself.  It asks the oracle for legal
destinations when a piece is picked up, and reports every drop back as a
move.  :class:`ChessOracle` is the production implementation, backed by
``python-chess``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import chess

from chesstable.core.enums import Color, MoveFlag, PieceType
from chesstable.core.errors import InvalidPromotionError
from chesstable.core.types import Square

_LOGGER = logging.getLogger(__name__)

_COLORS: dict[chess.Color, Color] = {chess.WHITE: Color.WHITE, chess.BLACK: Color.BLACK}

_PROMOTION_LETTERS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


def to_chess_square(sq: Square) -> chess.Square:
    """``Square(row, column)`` → python-chess square index."""
    return chess.square(sq.column, sq.row)


def from_chess_square(index: chess.Square) -> Square:
    """python-chess square index → ``Square(row, column)``."""
    return Square(chess.square_rank(index), chess.square_file(index))


def promotion_letter(piece_type: PieceType) -> str:
    """Suffix used in coordinate notation, e.g. ``QUEEN`` → ``'q'``."""
    try:
        return _PROMOTION_LETTERS[piece_type]
    except KeyError:
        raise InvalidPromotionError(f"Cannot promote to {piece_type}") from None


# ── Move metadata ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MoveResult:
    """What happened when the oracle applied a move.

    ``captured_at`` is the move's destination square, including for en
    passant, where the captured pawn actually stands one row behind it.
    """

    notation: str
    flag: MoveFlag
    from_square: Square | None = None
    to_square: Square | None = None
    mover_color: Color | None = None
    captured_color: Color | None = None
    captured_type: PieceType | None = None
    captured_at: Square | None = None
    promotion: PieceType | None = None
    san: str = ""

    @property
    def is_capture(self) -> bool:
        return self.captured_type is not None

    @property
    def is_error(self) -> bool:
        return self.flag == MoveFlag.ERROR

    @classmethod
    def rejected(cls, notation: str) -> MoveResult:
        return cls(notation=notation, flag=MoveFlag.ERROR)


class RulesOracle(Protocol):
    """Protocol for the rules engine consulted by the board coordinator."""

    @property
    def turn(self) -> Color: ...

    def legal_destinations(self, square: Square) -> list[Square]: ...

    def apply_move(self, notation: str, *, permissive: bool = True) -> MoveResult: ...

    def is_game_over(self) -> bool: ...

    def outcome_text(self) -> str | None: ...


# ── python-chess implementation ──────────────────────────────────────────────


class ChessOracle:
    """:class:`RulesOracle` backed by :class:`chess.Board`.

    Args:
        fen: Starting position; the standard start when omitted.
    """

    __slots__ = ("_board",)

    def __init__(self, fen: str | None = None) -> None:
        self._board = chess.Board(fen) if fen else chess.Board()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def turn(self) -> Color:
        return _COLORS[self._board.turn]

    @property
    def fen(self) -> str:
        return self._board.fen()

    def legal_destinations(self, square: Square) -> list[Square]:
        """Distinct destination squares of the piece on *square*.

        Empty when the square is empty or holds a piece of the side not
        to move.  Promotion choices collapse into a single destination.
        """
        origin = to_chess_square(square)
        destinations: dict[Square, None] = {}
        for move in self._board.legal_moves:
            if move.from_square == origin:
                destinations.setdefault(from_chess_square(move.to_square), None)
        return list(destinations)

    def piece_placement(self) -> dict[Square, tuple[Color, PieceType]]:
        """Current occupancy, used to populate the table from a FEN."""
        return {
            from_chess_square(index): (_COLORS[piece.color], PieceType(piece.piece_type))
            for index, piece in self._board.piece_map().items()
        }

    def is_game_over(self) -> bool:
        return self._board.is_game_over()

    def outcome_text(self) -> str | None:
        """E.g. ``'1-0 (checkmate)'``; ``None`` while the game is running."""
        outcome = self._board.outcome()
        if outcome is None:
            return None
        return f"{outcome.result()} ({outcome.termination.name.lower().replace('_', ' ')})"

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply_move(self, notation: str, *, permissive: bool = True) -> MoveResult:
        """Apply *notation* to the position and describe the result.

        Strict mode accepts SAN only.  Permissive mode also accepts
        coordinate notation (``e2e4``), and a bare coordinate pawn move to
        the last rank promotes to a queen.  An unparsable or illegal move
        yields a result flagged :attr:`MoveFlag.ERROR`; the position is
        left untouched.
        """
        move = self._parse(notation, permissive)
        if move is None:
            _LOGGER.debug("Oracle rejected move %r", notation)
            return MoveResult.rejected(notation)

        board = self._board
        mover = _COLORS[board.turn]
        to_square = from_chess_square(move.to_square)
        captured_type: PieceType | None = None

        if board.is_kingside_castling(move):
            flag = MoveFlag.KINGSIDE_CASTLE
        elif board.is_queenside_castling(move):
            flag = MoveFlag.QUEENSIDE_CASTLE
        elif board.is_en_passant(move):
            flag = MoveFlag.EN_PASSANT
            captured_type = PieceType.PAWN
        elif move.promotion is not None:
            flag = MoveFlag.PROMOTION
        else:
            flag = MoveFlag.NORMAL

        if captured_type is None and not flag.is_castle and board.is_capture(move):
            victim = board.piece_type_at(move.to_square)
            if victim is not None:
                captured_type = PieceType(victim)

        san = board.san(move)
        board.push(move)

        return MoveResult(
            notation=notation,
            flag=flag,
            from_square=from_chess_square(move.from_square),
            to_square=to_square,
            mover_color=mover,
            captured_color=mover.opposite if captured_type is not None else None,
            captured_type=captured_type,
            captured_at=to_square if captured_type is not None else None,
            promotion=PieceType(move.promotion) if move.promotion is not None else None,
            san=san,
        )

    def _parse(self, notation: str, permissive: bool) -> chess.Move | None:
        board = self._board
        attempts: list[str] = []
        if permissive:
            attempts.append(notation)
            if len(notation) == 4:
                attempts.append(notation + promotion_letter(PieceType.QUEEN))
            for uci in attempts:
                try:
                    move = board.parse_uci(uci)
                except ValueError:
                    continue
                if move:
                    return move
        try:
            move = board.parse_san(notation)
        except ValueError:
            return None
        return move or None
