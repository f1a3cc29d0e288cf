"""TablePiece and PieceRegistry — the live pieces standing on the table."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator, Mapping
from typing import TypeAlias

from chesstable.core.enums import Color, KinematicState, PieceType
from chesstable.core.errors import BoardDesyncError, CallerError, PieceNotFoundError
from chesstable.core.special_moves import home_row, pawn_row
from chesstable.core.types import BOARD_SIZE, Square
from chesstable.physics.vector import Vec3
from chesstable.physics.world import PhysicsWorld, RigidBody
from chesstable.table.board import Board

_LOGGER = logging.getLogger(__name__)

PieceId: TypeAlias = int
PieceKind: TypeAlias = tuple[Color, PieceType]
Placement: TypeAlias = Mapping[Square, PieceKind]

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _starting_placement() -> dict[Square, PieceKind]:
    placement: dict[Square, PieceKind] = {}
    for color in Color:
        for column in range(BOARD_SIZE):
            placement[Square(home_row(color), column)] = (color, _BACK_RANK[column])
            placement[Square(pawn_row(color), column)] = (color, PieceType.PAWN)
    return placement


STARTING_PLACEMENT: Mapping[Square, PieceKind] = _starting_placement()

_UNICODE: dict[PieceKind, str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_piece_ids = itertools.count(1)


class TablePiece:
    """One physical piece: identity, chess attributes and rigid body.

    ``position`` is the visual transform, resynchronised from the body
    once per frame by :meth:`update`.
    """

    __slots__ = ("id", "color", "piece_type", "square", "body", "state", "position", "_mass")

    def __init__(
        self,
        color: Color,
        piece_type: PieceType,
        square: Square,
        body: RigidBody,
    ) -> None:
        self.id: PieceId = next(_piece_ids)
        self.color = color
        self.piece_type = piece_type
        self.square = square
        self.body = body
        self.state = KinematicState.FREE
        self.position = body.position
        self._mass = body.mass

    @property
    def kind(self) -> PieceKind:
        return self.color, self.piece_type

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[self.kind]

    @property
    def is_held(self) -> bool:
        return self.state == KinematicState.HELD

    # ── Kinematics ───────────────────────────────────────────────────────

    def hold(self) -> None:
        """Freeze the piece: massless, excluded from simulation."""
        self.state = KinematicState.HELD
        self.body.mass = 0.0

    def release(self) -> None:
        """Give the piece its mass back so it responds to gravity."""
        self.state = KinematicState.FREE
        self.body.mass = self._mass

    def change_world_position(self, position: Vec3) -> None:
        self.body.teleport(position)
        self.position = position

    def change_position(self, square: Square, position: Vec3) -> None:
        """Move both the logical square and the physical transform."""
        self.square = square
        self.change_world_position(position)

    def update(self) -> None:
        self.position = self.body.position

    def __repr__(self) -> str:
        return f"TablePiece(id={self.id}, {self.color} {self.piece_type} at {self.square})"


class PieceRegistry:
    """Owns every live piece, keyed by ``(color, type)``.

    A ``(color, type, square)`` index is kept in step with every
    relocation, promotion and removal so that capture resolution is a
    dictionary lookup.
    """

    __slots__ = (
        "_board",
        "_world",
        "_rest_offset",
        "_piece_mass",
        "_piece_half_height",
        "_pieces",
        "_index",
        "_by_id",
        "_occupancy",
    )

    def __init__(
        self,
        board: Board,
        world: PhysicsWorld,
        *,
        rest_offset: float = 0.1,
        piece_mass: float = 0.1,
        piece_half_height: float = 0.01,
    ) -> None:
        self._board = board
        self._world = world
        self._rest_offset = rest_offset
        self._piece_mass = piece_mass
        self._piece_half_height = piece_half_height
        self._pieces: dict[PieceKind, list[TablePiece]] = {
            (color, piece_type): [] for color in Color for piece_type in PieceType
        }
        self._index: dict[tuple[Color, PieceType, Square], TablePiece] = {}
        self._by_id: dict[PieceId, TablePiece] = {}
        self._occupancy: dict[Square, TablePiece] = {}

    # ── Setup ────────────────────────────────────────────────────────────

    def create_all(self) -> None:
        """Create the 32 standard starting pieces."""
        self.populate(STARTING_PLACEMENT)

    def populate(self, placement: Placement) -> None:
        """Create one piece per entry of *placement* and add its body to the world."""
        if self._by_id:
            raise CallerError("Pieces have already been created")
        for square in sorted(placement):
            color, piece_type = placement[square]
            body = RigidBody(
                mass=self._piece_mass,
                position=self.rest_position(square),
                half_height=self._piece_half_height,
            )
            piece = TablePiece(color, piece_type, square, body)
            self._pieces[piece.kind].append(piece)
            self._index[(color, piece_type, square)] = piece
            self._by_id[piece.id] = piece
            self._occupancy[square] = piece
            self._world.add_body(body)
        _LOGGER.debug("Created %d pieces", len(self._by_id))

    def rest_position(self, square: Square) -> Vec3:
        """World position a piece takes when placed on *square*."""
        center = self._board.cell(square).center
        return center.with_y(center.y + self._rest_offset)

    # ── Lookup ───────────────────────────────────────────────────────────

    def find(self, color: Color, piece_type: PieceType, square: Square) -> TablePiece | None:
        return self._index.get((color, piece_type, square))

    def get(self, piece_id: PieceId) -> TablePiece | None:
        return self._by_id.get(piece_id)

    def piece_at(self, square: Square) -> TablePiece | None:
        return self._occupancy.get(square)

    def contains(self, piece: TablePiece) -> bool:
        return self._by_id.get(piece.id) is piece

    def all_pieces(self) -> list[TablePiece]:
        return [piece for pieces in self._pieces.values() for piece in pieces]

    def pieces_of(self, color: Color) -> Iterator[TablePiece]:
        for (kind_color, _), pieces in self._pieces.items():
            if kind_color == color:
                yield from pieces

    def __len__(self) -> int:
        return len(self._by_id)

    # ── Mutation ─────────────────────────────────────────────────────────

    def remove(self, color: Color, piece_type: PieceType, square: Square) -> PieceId:
        """Remove the piece and tear its body out of the world.

        Raises:
            PieceNotFoundError: no such live piece.
        """
        piece = self._index.pop((color, piece_type, square), None)
        if piece is None:
            raise PieceNotFoundError(color, piece_type, square)
        self._pieces[piece.kind].remove(piece)
        del self._by_id[piece.id]
        del self._occupancy[square]
        self._world.remove_body(piece.body)
        _LOGGER.debug("Removed %r", piece)
        return piece.id

    def relocate(self, piece: TablePiece, square: Square, position: Vec3 | None = None) -> None:
        """Move *piece* to *square*, keeping the index in step.

        *position* defaults to the rest position above the target cell.
        """
        self._require_live(piece)
        occupant = self._occupancy.get(square)
        if occupant is not None and occupant is not piece:
            raise BoardDesyncError(f"Cannot move {piece!r} onto occupied {square}: {occupant!r}")
        del self._index[(piece.color, piece.piece_type, piece.square)]
        del self._occupancy[piece.square]
        if position is None:
            position = self.rest_position(square)
        piece.change_position(square, position)
        self._index[(piece.color, piece.piece_type, square)] = piece
        self._occupancy[square] = piece

    def promote(self, piece: TablePiece, piece_type: PieceType) -> None:
        """Change *piece*'s type in place and re-key it."""
        self._require_live(piece)
        self._pieces[piece.kind].remove(piece)
        del self._index[(piece.color, piece.piece_type, piece.square)]
        piece.piece_type = piece_type
        self._pieces[piece.kind].append(piece)
        self._index[(piece.color, piece_type, piece.square)] = piece

    # ── Frame sync ───────────────────────────────────────────────────────

    def update_all(self, color: Color) -> None:
        """Resync every *color* piece's transform from its body."""
        for piece in self.pieces_of(color):
            piece.update()

    def _require_live(self, piece: TablePiece) -> None:
        if not self.contains(piece):
            raise PieceNotFoundError(piece.color, piece.piece_type, piece.square)
