"""Board — the 8×8 grid of cells and the current drop indicators.

Pure geometry/rendering index: the board knows where each cell sits in
world space and which cells are currently marked droppable, but holds no
chess-rule knowledge.
"""

from __future__ import annotations

import itertools
import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from chesstable.core.errors import InvalidSquareError
from chesstable.core.types import BOARD_SIZE, Square
from chesstable.physics.vector import Vec3
from chesstable.physics.world import RigidBody

_indicator_ids = itertools.count(1)


@dataclass(slots=True)
class BoardCell:
    """One static cell of the table surface."""

    square: Square
    center: Vec3
    droppable: bool = False


@dataclass(frozen=True, slots=True)
class DropIndicator:
    """Visual marker placed on a droppable cell."""

    id: int
    square: Square
    position: Vec3


IndicatorCallback = Callable[[DropIndicator], None]


@dataclass
class BoardEvents:
    """Observable callbacks for indicator lifecycle."""

    on_indicator_added: list[IndicatorCallback] = field(default_factory=list)
    on_indicator_removed: list[IndicatorCallback] = field(default_factory=list)


class Board:
    """Cells indexed by square, plus the set of droppable cells.

    The board is centred on the world origin with its top face at
    ``y == 0``; cell ``(row, column)`` spans one ``cell_size`` square.
    """

    _INDICATOR_LIFT = 0.01

    __slots__ = (
        "_cell_size",
        "_cells",
        "_indicators",
        "body",
        "position",
        "events",
    )

    def __init__(self, cell_size: float = 1.0, thickness: float = 0.2) -> None:
        self._cell_size = cell_size
        self._cells: list[list[BoardCell]] = [
            [
                BoardCell(Square(row, column), self._cell_center(row, column))
                for column in range(BOARD_SIZE)
            ]
            for row in range(BOARD_SIZE)
        ]
        self._indicators: dict[Square, DropIndicator] = {}
        half = thickness / 2.0
        self.body = RigidBody(mass=0.0, position=Vec3(0.0, -half, 0.0), half_height=half)
        self.position = Vec3()
        self.events = BoardEvents()

    # ── Lookup ───────────────────────────────────────────────────────────

    @property
    def cell_size(self) -> float:
        return self._cell_size

    def cell(self, square: Square) -> BoardCell:
        """Return the cell for *square*.

        Raises:
            InvalidSquareError: *square* is not a valid :class:`Square`.
        """
        if not isinstance(square, Square):
            raise InvalidSquareError(f"Not a square: {square!r}")
        return self._cells[square.row][square.column]

    def cell_at(self, x: float, z: float) -> BoardCell | None:
        """Cell under world point ``(x, z)``, or ``None`` off the table."""
        half = BOARD_SIZE / 2.0
        column = math.floor(x / self._cell_size + half)
        row = math.floor(z / self._cell_size + half)
        if not (0 <= row < BOARD_SIZE and 0 <= column < BOARD_SIZE):
            return None
        return self._cells[row][column]

    def cells(self) -> Iterator[BoardCell]:
        for row in self._cells:
            yield from row

    # ── Droppable marks ──────────────────────────────────────────────────

    @property
    def droppable_squares(self) -> frozenset[Square]:
        return frozenset(self._indicators)

    @property
    def indicators(self) -> list[DropIndicator]:
        return list(self._indicators.values())

    def is_droppable(self, square: Square) -> bool:
        return square in self._indicators

    def mark_droppable(self, square: Square) -> DropIndicator:
        """Mark *square* as a legal drop target and place its indicator.

        Marking the same square again before :meth:`clear_droppable`
        returns the existing indicator.
        """
        cell = self.cell(square)
        existing = self._indicators.get(square)
        if existing is not None:
            return existing

        indicator = DropIndicator(
            id=next(_indicator_ids),
            square=square,
            position=cell.center.with_y(self._INDICATOR_LIFT),
        )
        cell.droppable = True
        self._indicators[square] = indicator
        for cb in self.events.on_indicator_added:
            cb(indicator)
        return indicator

    def clear_droppable(self) -> None:
        """Remove every indicator and reset all droppable flags."""
        indicators = list(self._indicators.values())
        self._indicators.clear()
        for indicator in indicators:
            self.cell(indicator.square).droppable = False
            for cb in self.events.on_indicator_removed:
                cb(indicator)

    # ── Frame sync ───────────────────────────────────────────────────────

    def update(self) -> None:
        """Resync the board transform from its physics body."""
        self.position = self.body.position.with_y(
            self.body.position.y + self.body.half_height
        )

    def _cell_center(self, row: int, column: int) -> Vec3:
        half = (BOARD_SIZE - 1) / 2.0
        return Vec3((column - half) * self._cell_size, 0.0, (row - half) * self._cell_size)
