"""BoardCoordinator — arbitrates pick-up/drag/drop against the rules oracle.

Selection lifecycle::

    Idle ──select(piece)──▶ Selected ──deselect(cell)──▶ Idle
                               │ ▲
                               └─┘ move_selected_to(x, z)

A legal drop is reported to the oracle, and the oracle's answer drives
every side effect: captures are resolved back to piece identities and
removed from the registry, castling rooks are relocated, en passant
victims are taken from behind the destination, promoted pawns are re-keyed.
The coordinator never touches the scene; it returns captured identities
so the caller can remove their visuals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TypeAlias

from chesstable.core.enums import Color, MoveFlag, PieceType
from chesstable.core.errors import (
    BoardDesyncError,
    InvalidPromotionError,
    InvalidSelectionError,
    PieceNotFoundError,
    SelectionStateError,
)
from chesstable.core.special_moves import castling_rook_squares, en_passant_victim, home_row
from chesstable.core.types import Square, parse_square
from chesstable.physics.vector import Vec3
from chesstable.physics.world import PhysicsWorld
from chesstable.rules.oracle import MoveResult, RulesOracle, promotion_letter
from chesstable.table.board import Board, BoardCell
from chesstable.table.pieces import PieceId, PieceRegistry, TablePiece

_LOGGER = logging.getLogger(__name__)

# ── Selection states ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Idle:
    """No piece is held."""


@dataclass(frozen=True, slots=True)
class Selected:
    """One piece is held; *origin* is where it stood when picked up."""

    piece: TablePiece
    origin: Vec3


SelectionState: TypeAlias = Idle | Selected

_IDLE = Idle()


# ── Coordinator ──────────────────────────────────────────────────────────────


class BoardCoordinator:
    """Owns the selection state machine and applies moves to the table.

    Thread-safety: every method must be called from the thread that runs
    the frame loop and input dispatch.
    """

    __slots__ = (
        "_board",
        "_registry",
        "_oracle",
        "_world",
        "_state",
        "_drag_height",
    )

    def __init__(
        self,
        board: Board,
        registry: PieceRegistry,
        oracle: RulesOracle,
        world: PhysicsWorld,
        *,
        drag_height: float = 0.8,
    ) -> None:
        self._board = board
        self._registry = registry
        self._oracle = oracle
        self._world = world
        self._state: SelectionState = _IDLE
        self._drag_height = drag_height

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def registry(self) -> PieceRegistry:
        return self._registry

    @property
    def oracle(self) -> RulesOracle:
        return self._oracle

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def selected(self) -> TablePiece | None:
        state = self._state
        return state.piece if isinstance(state, Selected) else None

    @property
    def turn(self) -> Color:
        return self._oracle.turn

    def is_selection_active(self) -> bool:
        return isinstance(self._state, Selected)

    # ── Selection lifecycle ──────────────────────────────────────────────

    def select(self, piece: TablePiece) -> None:
        """Pick up *piece* and highlight its legal destinations.

        A second ``select`` while a piece is already held does nothing.

        Raises:
            InvalidSelectionError: *piece* is not live on the table.
        """
        if isinstance(self._state, Selected):
            return
        if not self._registry.contains(piece):
            raise InvalidSelectionError(f"{piece!r} is not on the table")

        piece.hold()
        self._world.remove_body(piece.body)
        for square in self._oracle.legal_destinations(piece.square):
            self._board.mark_droppable(square)
        self._state = Selected(piece, piece.body.position)
        _LOGGER.debug(
            "Selected %r, droppable: %s",
            piece,
            sorted(sq.name for sq in self._board.droppable_squares),
        )

    def move_selected_to(self, x: float, z: float) -> None:
        """Carry the held piece over world point ``(x, z)``; no-op when idle."""
        state = self._state
        if not isinstance(state, Selected):
            return
        state.piece.change_world_position(Vec3(x, self._drag_height, z))

    def deselect(
        self,
        cell: BoardCell | None,
        promotion: PieceType | None = None,
    ) -> list[PieceId]:
        """Drop the held piece on *cell* and return captured piece ids.

        A cell that is not droppable (or ``None``, released off the
        table) snaps the piece back to where it was picked up.  A
        droppable cell plays the move.

        Args:
            cell: Cell under the pointer on release.
            promotion: Piece to promote to; a queen when omitted.

        Raises:
            SelectionStateError: no piece is held.
            PieceNotFoundError: a reported capture has no matching piece.
            InvalidPromotionError: *promotion* is not a promotable type, or
                the drop does not take a pawn to its last row.  The piece
                stays held.
            BoardDesyncError: the oracle rejected a droppable move.
        """
        state = self._state
        if not isinstance(state, Selected):
            raise SelectionStateError("deselect() called with no piece selected")

        piece = state.piece
        notation = ""
        if cell is not None and self._board.is_droppable(cell.square):
            notation = piece.square.name + cell.square.name
            if promotion is not None:
                notation += self._promotion_suffix(piece, cell.square, promotion)

        captured: list[PieceId] = []
        try:
            if not notation:
                _LOGGER.debug("Illegal drop of %r, snapping back", piece)
                piece.change_world_position(state.origin)
            else:
                assert cell is not None
                captured = self._play(piece, notation, cell)
        finally:
            self._board.clear_droppable()
            piece.release()
            if self._registry.contains(piece):
                self._world.add_body(piece.body)
            self._state = _IDLE
        return captured

    def apply_engine_move(self, uci: str) -> list[PieceId]:
        """Play a move chosen off-table (the computer opponent).

        *uci* is coordinate notation, e.g. ``"e7e5"`` or ``"a2a1q"``.

        Raises:
            SelectionStateError: a piece is currently held.
            PieceNotFoundError: a reported capture has no matching piece.
            BoardDesyncError: the oracle rejected the move, or its origin
                square is empty on the table.
        """
        if isinstance(self._state, Selected):
            raise SelectionStateError("Cannot apply an engine move while a piece is held")
        origin = parse_square(uci[:2])
        piece = self._registry.piece_at(origin)
        if piece is None:
            raise BoardDesyncError(f"No piece on {origin} for engine move {uci!r}")
        result = self._oracle.apply_move(uci, permissive=True)
        if result.is_error or result.to_square is None:
            _LOGGER.error("Oracle rejected engine move %s", uci)
            raise BoardDesyncError(f"Oracle rejected engine move {uci!r}")
        return self._resolve(piece, result, self._board.cell(result.to_square))

    # ── Frame sync ───────────────────────────────────────────────────────

    def update(self) -> None:
        """Resync board and piece transforms after the physics step."""
        self._board.update()
        self._registry.update_all(Color.BLACK)
        self._registry.update_all(Color.WHITE)

    def is_game_over(self) -> bool:
        return self._oracle.is_game_over()

    def outcome_text(self) -> str | None:
        return self._oracle.outcome_text()

    # ── Move resolution ──────────────────────────────────────────────────

    def _play(self, piece: TablePiece, notation: str, target: BoardCell) -> list[PieceId]:
        result = self._oracle.apply_move(notation, permissive=True)
        if result.is_error:
            _LOGGER.error("Oracle rejected droppable move %s", notation)
            raise BoardDesyncError(f"Oracle rejected move {notation!r} on a droppable cell")
        return self._resolve(piece, result, target)

    def _resolve(self, piece: TablePiece, result: MoveResult, target: BoardCell) -> list[PieceId]:
        captured: list[PieceId] = []
        mover = result.mover_color if result.mover_color is not None else piece.color

        if result.flag == MoveFlag.EN_PASSANT:
            victim = en_passant_victim(target.square, mover)
            captured.append(self._capture(mover.opposite, PieceType.PAWN, victim))
        elif result.is_capture:
            assert result.captured_color is not None
            assert result.captured_type is not None
            assert result.captured_at is not None
            captured.append(
                self._capture(result.captured_color, result.captured_type, result.captured_at)
            )

        if result.flag.is_castle:
            self._castle_rook(mover, result.flag)

        self._registry.relocate(piece, target.square, self._drop_position(target))

        if result.flag == MoveFlag.PROMOTION and result.promotion is not None:
            self._registry.promote(piece, result.promotion)
            _LOGGER.info("%s promoted to %s on %s", mover, result.promotion, target.square)

        _LOGGER.debug("Played %s (%s)", result.san or result.notation, result.flag.name)
        return captured

    @staticmethod
    def _promotion_suffix(piece: TablePiece, target: Square, promotion: PieceType) -> str:
        letter = promotion_letter(promotion)
        if piece.piece_type != PieceType.PAWN or target.row != home_row(piece.color.opposite):
            raise InvalidPromotionError(f"{piece!r} does not promote on {target}")
        return letter

    def _capture(self, color: Color, piece_type: PieceType, square: Square) -> PieceId:
        if self._registry.find(color, piece_type, square) is None:
            _LOGGER.error("Capture of %s %s at %s has no matching piece", color, piece_type, square)
            raise PieceNotFoundError(color, piece_type, square)
        piece_id = self._registry.remove(color, piece_type, square)
        _LOGGER.info("Captured %s %s at %s", color, piece_type, square)
        return piece_id

    def _castle_rook(self, color: Color, flag: MoveFlag) -> None:
        rook_from, rook_to = castling_rook_squares(color, flag)
        rook = self._registry.find(color, PieceType.ROOK, rook_from)
        if rook is None:
            _LOGGER.error("Castling rook missing at %s", rook_from)
            raise PieceNotFoundError(color, PieceType.ROOK, rook_from)
        self._registry.relocate(rook, rook_to, self._drop_position(self._board.cell(rook_to)))
        _LOGGER.info("%s castled, rook %s -> %s", color, rook_from, rook_to)

    def _drop_position(self, cell: BoardCell) -> Vec3:
        return self._registry.rest_position(cell.square)
