"""MainWindow — hosts the table view, frame loop and computer opponent."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QThread, QTimer, pyqtSignal
from PyQt6.QtGui import QCloseEvent, QPainter
from PyQt6.QtWidgets import QGraphicsView, QLabel, QMainWindow

from chesstable.core.enums import Color
from chesstable.engine.qt_bridge import EngineWorker
from chesstable.settings import TableSettings
from chesstable.table.pieces import PieceId
from chesstable.table.session import TableSession
from chesstable.ui.scene import TableScene

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window for one game on the table."""

    _engine_request = pyqtSignal(str, int)
    _engine_cancel = pyqtSignal()

    _ENGINE_WAIT_MS = 2000

    def __init__(self, settings: TableSettings | None = None) -> None:
        super().__init__()
        self._settings = settings or TableSettings()
        self._session = TableSession.create(self._settings)

        self._scene = TableScene(
            self._session,
            self,
            flipped=self._settings.player_color == Color.BLACK,
        )
        self._view = QGraphicsView(self._scene, self)
        self._view.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._view.setMouseTracking(True)
        self.setCentralWidget(self._view)
        self.setWindowTitle("Chesstable")

        self._status_label = QLabel()
        self.statusBar().addWidget(self._status_label)

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(max(1, round(1000 / self._settings.frame_rate)))
        self._frame_timer.timeout.connect(self._scene.advance_frame)

        self._engine_thread: QThread | None = None
        self._engine_worker: EngineWorker | None = None
        self._engine_request_id = 0
        self._pending_engine_request: int | None = None

        self._scene.move_made.connect(self._on_move_made)
        if self._settings.plays_engine:
            self._setup_engine()

        self._frame_timer.start()
        self._refresh_status()
        self._maybe_request_engine_move()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def session(self) -> TableSession:
        return self._session

    @property
    def scene(self) -> TableScene:
        return self._scene

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    # ── Engine lifecycle ─────────────────────────────────────────────────

    def _setup_engine(self) -> None:
        self._engine_thread = QThread(self)
        self._engine_worker = EngineWorker(max_depth=self._settings.engine_depth)
        self._engine_worker.moveToThread(self._engine_thread)
        self._engine_request.connect(self._engine_worker.request_move)
        self._engine_cancel.connect(self._engine_worker.cancel)
        self._engine_worker.best_move_ready.connect(self._on_engine_best_move)
        self._engine_worker.search_no_move.connect(self._on_engine_no_move)
        self._engine_worker.search_cancelled.connect(self._on_engine_cancelled)
        self._engine_worker.search_error.connect(self._on_engine_error)
        self._engine_thread.start()

    def _shutdown_engine(self) -> None:
        if self._engine_thread is None:
            return
        self._pending_engine_request = None
        self._engine_cancel.emit()
        self._engine_thread.quit()
        self._engine_thread.wait(self._ENGINE_WAIT_MS)
        self._engine_thread = None

    def _is_engine_turn(self) -> bool:
        return (
            self._engine_worker is not None
            and not self._session.coordinator.is_game_over()
            and self._session.coordinator.turn != self._settings.player_color
        )

    def _maybe_request_engine_move(self) -> None:
        if not self._is_engine_turn():
            self._scene.set_interactive(not self._session.coordinator.is_game_over())
            return
        self._scene.set_interactive(False)
        self._engine_request_id += 1
        self._pending_engine_request = self._engine_request_id
        _LOGGER.debug("Requesting engine move #%d", self._engine_request_id)
        self._engine_request.emit(self._session.oracle.fen, self._engine_request_id)

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_move_made(self, captured: list[PieceId]) -> None:
        del captured
        self._refresh_status()
        self._maybe_request_engine_move()

    def _on_engine_best_move(
        self, request_id: int, uci: str, score_cp: int, depth: int, nodes: int
    ) -> None:
        if request_id != self._pending_engine_request:
            return
        self._pending_engine_request = None
        _LOGGER.debug("Engine plays %s (score %d, depth %d, %d nodes)", uci, score_cp, depth, nodes)
        self._scene.apply_engine_move(uci)

    def _on_engine_no_move(self, request_id: int, *_stats: int) -> None:
        if request_id == self._pending_engine_request:
            self._pending_engine_request = None
            self._refresh_status()

    def _on_engine_cancelled(self, request_id: int) -> None:
        if request_id == self._pending_engine_request:
            self._pending_engine_request = None

    def _on_engine_error(self, request_id: int, message: str) -> None:
        _LOGGER.warning("Engine request #%d failed: %s", request_id, message)
        if request_id == self._pending_engine_request:
            self._pending_engine_request = None
            self._status_label.setText(f"Engine error: {message}")

    # ── Status ───────────────────────────────────────────────────────────

    def _refresh_status(self) -> None:
        coordinator = self._session.coordinator
        outcome = coordinator.outcome_text()
        if outcome is not None:
            self._status_label.setText(f"Game over: {outcome}")
        else:
            self._status_label.setText(f"{str(coordinator.turn).capitalize()} to move")

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._frame_timer.stop()
        self._shutdown_engine()
        super().closeEvent(event)
