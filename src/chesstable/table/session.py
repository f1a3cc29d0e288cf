"""TableSession — wires world, board, pieces, oracle and coordinator."""

from __future__ import annotations

from dataclasses import dataclass

from chesstable.physics.world import PhysicsWorld
from chesstable.rules.oracle import ChessOracle
from chesstable.settings import TableSettings
from chesstable.table.board import Board
from chesstable.table.coordinator import BoardCoordinator
from chesstable.table.pieces import PieceRegistry


@dataclass(slots=True)
class TableSession:
    """Everything one game on the table needs, built from settings."""

    settings: TableSettings
    world: PhysicsWorld
    board: Board
    registry: PieceRegistry
    oracle: ChessOracle
    coordinator: BoardCoordinator

    @classmethod
    def create(cls, settings: TableSettings | None = None) -> TableSession:
        """Build a session at the standard start, or at ``settings.start_fen``."""
        settings = settings or TableSettings()
        world = PhysicsWorld(gravity=settings.gravity, time_step=settings.time_step)
        board = Board(cell_size=settings.cell_size, thickness=settings.board_thickness)
        world.add_body(board.body)

        oracle = ChessOracle(settings.start_fen)
        registry = PieceRegistry(
            board,
            world,
            rest_offset=settings.piece_rest_offset,
            piece_mass=settings.piece_mass,
            piece_half_height=settings.piece_half_height,
        )
        if settings.start_fen:
            registry.populate(oracle.piece_placement())
        else:
            registry.create_all()

        coordinator = BoardCoordinator(
            board, registry, oracle, world, drag_height=settings.drag_height
        )
        return cls(settings, world, board, registry, oracle, coordinator)

    def step(self) -> None:
        """Advance one frame: physics first, then visual resync."""
        self.world.fixed_step()
        self.coordinator.update()
