"""User-configurable settings for a table session."""

from __future__ import annotations

from dataclasses import dataclass

from chesstable.core.enums import Color

# ── Settings data class ──────────────────────────────────────────────────────


@dataclass
class TableSettings:
    """All tunables for geometry, physics and the opponent."""

    # Geometry (world units)
    cell_size: float = 1.0
    piece_rest_offset: float = 0.1  # height above a cell when placed
    drag_height: float = 0.8  # height of a held piece while dragged
    board_thickness: float = 0.2

    # Physics
    gravity: float = -9.82
    piece_mass: float = 0.1
    piece_half_height: float = 0.01
    frame_rate: int = 60

    # Game
    player_color: Color = Color.WHITE
    opponent: str = "engine"  # "engine" | "human"
    engine_depth: int = 2
    start_fen: str | None = None

    @property
    def time_step(self) -> float:
        return 1.0 / self.frame_rate

    @property
    def plays_engine(self) -> bool:
        return self.opponent == "engine"
