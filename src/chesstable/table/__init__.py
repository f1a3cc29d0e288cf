"""Table layer — board cells, live pieces and the board coordinator.

Quick start::

    from chesstable.core import parse_square
    from chesstable.table import TableSession

    session = TableSession.create()
    coord = session.coordinator
    pawn = session.registry.piece_at(parse_square("e2"))
    coord.select(pawn)
    captured = coord.deselect(session.board.cell(parse_square("e4")))
"""

from chesstable.table.board import Board, BoardCell, BoardEvents, DropIndicator
from chesstable.table.coordinator import BoardCoordinator, Idle, Selected
from chesstable.table.pieces import (
    STARTING_PLACEMENT,
    PieceId,
    PieceRegistry,
    TablePiece,
)
from chesstable.table.session import TableSession

__all__ = [
    "Board",
    "BoardCell",
    "BoardCoordinator",
    "BoardEvents",
    "DropIndicator",
    "Idle",
    "PieceId",
    "PieceRegistry",
    "STARTING_PLACEMENT",
    "Selected",
    "TablePiece",
    "TableSession",
]
