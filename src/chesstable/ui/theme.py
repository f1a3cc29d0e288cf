"""Visual theme constants for the table scene."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class TableTheme:
    """Colour scheme for cells, pieces and drop indicators."""

    light_cell: QColor
    dark_cell: QColor
    indicator: QColor  # droppable marker
    white_piece: QColor
    black_piece: QColor
    piece_outline: QColor
    held_outline: QColor  # piece currently picked up
    background: QColor

    @classmethod
    def default(cls) -> TableTheme:
        return cls(
            light_cell=QColor("#FFFFFF"),
            dark_cell=QColor("#000000"),
            indicator=QColor("orange"),
            white_piece=QColor(235, 228, 214),
            black_piece=QColor(52, 46, 43),
            piece_outline=QColor(90, 90, 90),
            held_outline=QColor(255, 200, 0),
            background=QColor(48, 48, 48),
        )
