"""TableScene — top-down QGraphicsScene view of the table.

The scene is the interaction adapter: it turns pointer events into world
coordinates, cells and pieces, calls into the :class:`BoardCoordinator`,
and removes the visuals of captured pieces.  It also drives the frame
loop through :meth:`advance_frame`.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chesstable.core.enums import Color
from chesstable.core.types import BOARD_SIZE
from chesstable.table.board import DropIndicator
from chesstable.table.pieces import PieceId, TablePiece
from chesstable.table.session import TableSession
from chesstable.ui.theme import TableTheme

_LOGGER = logging.getLogger(__name__)


class PieceItem(QGraphicsEllipseItem):
    """Disc with the piece glyph, tracking one :class:`TablePiece`."""

    _RADIUS_RATIO = 0.4
    _LIFT_SCALE = 0.35  # extra scale per world unit of height

    def __init__(self, piece: TablePiece, tile: int, theme: TableTheme) -> None:
        radius = tile * self._RADIUS_RATIO
        super().__init__(-radius, -radius, 2 * radius, 2 * radius)
        self.piece_id: PieceId = piece.id
        self._theme = theme

        self._glyph = QGraphicsSimpleTextItem(self)
        self._glyph.setFont(QFont("DejaVu Sans", max(10, int(tile * 0.45))))
        self.set_piece(piece)
        self.setZValue(2)

    def set_piece(self, piece: TablePiece) -> None:
        """Refresh colours and glyph (the type changes on promotion)."""
        fill = self._theme.white_piece if piece.color == Color.WHITE else self._theme.black_piece
        self.setBrush(QBrush(fill))
        self._glyph.setText(piece.symbol)
        glyph = self._theme.black_piece if piece.color == Color.WHITE else self._theme.white_piece
        self._glyph.setBrush(QBrush(glyph))
        bounds = self._glyph.boundingRect()
        self._glyph.setPos(-bounds.width() / 2, -bounds.height() / 2)

    def set_held(self, held: bool, height: float) -> None:
        outline = self._theme.held_outline if held else self._theme.piece_outline
        self.setPen(QPen(outline, 3 if held else 1))
        self.setScale(1.0 + max(0.0, height) * self._LIFT_SCALE)
        self.setZValue(10 if held else 2)


class TableScene(QGraphicsScene):
    """Renders the table and routes pointer input to the coordinator.

    Signals:
        move_made(list): A move was played (by drop or engine); carries
            the ids of captured pieces.
    """

    move_made = pyqtSignal(list)

    TILE = 80  # px per cell

    def __init__(
        self,
        session: TableSession,
        parent: QObject | None = None,
        *,
        flipped: bool = False,
        theme: TableTheme | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self._flipped = flipped
        self._theme = theme or TableTheme.default()
        self._interactive = True

        self._cell_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[PieceId, PieceItem] = {}
        self._indicator_items: dict[int, QGraphicsEllipseItem] = {}

        board = session.board
        board.events.on_indicator_added.append(self._on_indicator_added)
        board.events.on_indicator_removed.append(self._on_indicator_removed)

        self.setBackgroundBrush(QBrush(self._theme.background))
        self._draw_board()
        self._create_piece_items()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def session(self) -> TableSession:
        return self._session

    @property
    def piece_items(self) -> dict[PieceId, PieceItem]:
        return dict(self._piece_items)

    @property
    def indicator_items(self) -> dict[int, QGraphicsEllipseItem]:
        return dict(self._indicator_items)

    def set_interactive(self, interactive: bool) -> None:
        """Enable / disable picking up pieces."""
        self._interactive = interactive

    def is_interactive(self) -> bool:
        return self._interactive

    def advance_frame(self) -> None:
        """One frame: physics step, transform resync, redraw pieces."""
        self._session.step()
        self._sync_piece_items()

    def apply_engine_move(self, uci: str) -> list[PieceId]:
        """Play the opponent's move on the table."""
        captured = self._session.coordinator.apply_engine_move(uci)
        self._remove_piece_items(captured)
        self._sync_piece_items()
        self.move_made.emit(captured)
        return captured

    # ── Pointer handling ─────────────────────────────────────────────────

    def press_at(self, pos: QPointF) -> bool:
        """Pick up the piece under *pos*; returns whether one was selected."""
        coordinator = self._session.coordinator
        if not self._interactive or coordinator.is_selection_active():
            return False
        item = self._piece_item_at(pos)
        if item is None:
            return False
        piece = self._session.registry.get(item.piece_id)
        if piece is None:
            return False
        coordinator.select(piece)
        self._sync_piece_items()
        return True

    def drag_to(self, pos: QPointF) -> None:
        coordinator = self._session.coordinator
        if not coordinator.is_selection_active():
            return
        x, z = self.scene_to_world(pos)
        coordinator.move_selected_to(x, z)
        self._sync_piece_items()

    def release_at(self, pos: QPointF) -> list[PieceId]:
        """Drop the held piece on the cell under *pos*."""
        coordinator = self._session.coordinator
        if not coordinator.is_selection_active():
            return []
        x, z = self.scene_to_world(pos)
        cell = self._session.board.cell_at(x, z)
        turn_before = coordinator.turn

        captured = coordinator.deselect(cell)

        self._remove_piece_items(captured)
        self._sync_piece_items()
        if coordinator.turn != turn_before:
            self.move_made.emit(captured)
        return captured

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is not None and event.button() == Qt.MouseButton.LeftButton:
            if self.press_at(event.scenePos()):
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is not None and self._session.coordinator.is_selection_active():
            self.drag_to(event.scenePos())
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is not None and self._session.coordinator.is_selection_active():
            self.release_at(event.scenePos())
            event.accept()
            return
        super().mouseReleaseEvent(event)

    # ── Coordinate helpers ───────────────────────────────────────────────

    def world_to_scene(self, x: float, z: float) -> QPointF:
        """World ``(x, z)`` → scene point; white's home edge at the bottom."""
        size = self._session.board.cell_size
        half = BOARD_SIZE / 2.0
        u, v = x / size, z / size
        if self._flipped:
            return QPointF((half - u) * self.TILE, (v + half) * self.TILE)
        return QPointF((u + half) * self.TILE, (half - v) * self.TILE)

    def scene_to_world(self, pos: QPointF) -> tuple[float, float]:
        size = self._session.board.cell_size
        half = BOARD_SIZE / 2.0
        u, v = pos.x() / self.TILE, pos.y() / self.TILE
        if self._flipped:
            return (half - u) * size, (v - half) * size
        return (u - half) * size, (half - v) * size

    # ── Drawing ──────────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        t = self.TILE
        for cell in self._session.board.cells():
            center = self.world_to_scene(cell.center.x, cell.center.z)
            rect = QGraphicsRectItem(center.x() - t / 2, center.y() - t / 2, t, t)
            is_dark = (cell.square.row + cell.square.column) % 2 == 0
            rect.setBrush(QBrush(self._theme.dark_cell if is_dark else self._theme.light_cell))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._cell_items.append(rect)
        self.setSceneRect(QRectF(0, 0, BOARD_SIZE * t, BOARD_SIZE * t))

    def _create_piece_items(self) -> None:
        for piece in self._session.registry.all_pieces():
            item = PieceItem(piece, self.TILE, self._theme)
            self.addItem(item)
            self._piece_items[piece.id] = item
        self._sync_piece_items()

    def _sync_piece_items(self) -> None:
        registry = self._session.registry
        for piece_id, item in self._piece_items.items():
            piece = registry.get(piece_id)
            if piece is None:
                continue
            item.set_piece(piece)
            item.setPos(self.world_to_scene(piece.position.x, piece.position.z))
            item.set_held(piece.is_held, piece.position.y)

    def _remove_piece_items(self, piece_ids: list[PieceId]) -> None:
        for piece_id in piece_ids:
            item = self._piece_items.pop(piece_id, None)
            if item is not None:
                self.removeItem(item)

    def _piece_item_at(self, pos: QPointF) -> PieceItem | None:
        for item in self.items(pos):
            candidate: QGraphicsItem | None = item
            while candidate is not None and not isinstance(candidate, PieceItem):
                candidate = candidate.parentItem()
            if candidate is not None:
                return candidate
        return None

    # ── Indicator callbacks ──────────────────────────────────────────────

    def _on_indicator_added(self, indicator: DropIndicator) -> None:
        radius = self.TILE * 0.3
        center = self.world_to_scene(indicator.position.x, indicator.position.z)
        circle = QGraphicsEllipseItem(
            center.x() - radius, center.y() - radius, 2 * radius, 2 * radius
        )
        circle.setBrush(QBrush(self._theme.indicator))
        circle.setPen(QPen(Qt.PenStyle.NoPen))
        circle.setZValue(1)
        self.addItem(circle)
        self._indicator_items[indicator.id] = circle

    def _on_indicator_removed(self, indicator: DropIndicator) -> None:
        circle = self._indicator_items.pop(indicator.id, None)
        if circle is not None:
            self.removeItem(circle)
