"""EngineWorker: computes the opponent's move off the GUI thread.

The window posts ``(fen, request_id)`` through a queued connection and
gets exactly one signal back per request, tagged with the same id so
replies to abandoned requests can be told apart.
"""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesstable.engine.negamax import NegamaxEngine
from chesstable.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Runs :class:`IEngine` searches for the table's computer opponent.

    Signals:
        best_move_ready(request_id, uci, score_cp, depth, nodes)
        search_no_move(request_id, score_cp, depth, nodes): side to move
            is mated or stalemated.
        search_cancelled(request_id)
        search_error(request_id, message)
    """

    best_move_ready = pyqtSignal(int, str, int, int, int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_cancelled = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    def __init__(self, *, max_depth: int = 2, time_limit_ms: int | None = None) -> None:
        super().__init__()
        self._engine: IEngine = NegamaxEngine()
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        self._stop = threading.Event()

    @pyqtSlot(str, int)
    def request_move(self, fen: str, request_id: int) -> None:
        """Search *fen* and answer request *request_id*."""
        self._stop.clear()
        _LOGGER.debug(
            "Request #%d: searching %s (depth %d)", request_id, fen, self._limits.max_depth
        )
        try:
            result = self._engine.search(fen, self._limits, is_cancelled=self._stop.is_set)
        except Exception as exc:
            _LOGGER.exception("Request #%d: search failed for %s", request_id, fen)
            self.search_error.emit(request_id, str(exc))
            return
        self._publish(request_id, result)

    @pyqtSlot()
    def cancel(self) -> None:
        """Stop the running search; its reply becomes ``search_cancelled``."""
        self._stop.set()

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Search depth for subsequent requests."""
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=self._limits.time_limit_ms)

    def _publish(self, request_id: int, result: SearchResult) -> None:
        # A cancelled search may still carry a move; it is stale either way.
        if self._stop.is_set():
            self.search_cancelled.emit(request_id)
        elif result.best_move is None:
            self.search_no_move.emit(request_id, result.score_cp, result.depth, result.nodes)
        else:
            _LOGGER.debug("Request #%d: %s (%d cp)", request_id, result.best_move, result.score_cp)
            self.best_move_ready.emit(
                request_id, result.best_move, result.score_cp, result.depth, result.nodes
            )
