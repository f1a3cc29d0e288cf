"""Tests for the Qt engine worker."""

from __future__ import annotations

import chess
from PyQt6.QtTest import QSignalSpy

from chesstable.engine.qt_bridge import EngineWorker
from chesstable.engine.search import CancelCheck, SearchLimits, SearchResult


class _CancellingEngine:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker

    def search(
        self,
        fen: str,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        self._worker.cancel()
        return SearchResult(
            best_move=next(iter(chess.Board(fen).legal_moves)).uci(),
            score_cp=0,
            depth=1,
            nodes=1,
        )


class _NoMoveEngine:
    def search(
        self,
        _fen: str,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        return SearchResult(best_move=None, score_cp=-100_000, depth=0, nodes=0)


class _FailingEngine:
    def search(
        self,
        _fen: str,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        raise RuntimeError("boom")


class _RecordingEngine:
    def __init__(self) -> None:
        self.limits: list[SearchLimits] = []

    def search(
        self,
        _fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        self.limits.append(limits)
        return SearchResult(best_move="e2e4", score_cp=25, depth=limits.max_depth, nodes=9)


class TestEngineWorker:
    def test_emits_best_move(self, qapp: object) -> None:
        worker = EngineWorker(max_depth=1)

        best_moves = QSignalSpy(worker.best_move_ready)
        worker.request_move(chess.STARTING_FEN, 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert chess.Move.from_uci(best_moves[0][1]) in chess.Board().legal_moves

    def test_emits_cancelled_when_search_is_cancelled(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _CancellingEngine(worker)

        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(chess.STARTING_FEN, 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_emits_no_move_when_search_returns_none(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _NoMoveEngine()

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(chess.STARTING_FEN, 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_when_search_raises(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _FailingEngine()

        errors = QSignalSpy(worker.search_error)
        worker.request_move(chess.STARTING_FEN, 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert errors[0][1] == "boom"

    def test_set_depth_applies_to_next_search(self, qapp: object) -> None:
        worker = EngineWorker(max_depth=2, time_limit_ms=500)
        engine = _RecordingEngine()
        worker._engine = engine

        worker.set_depth(4)
        worker.request_move(chess.STARTING_FEN, 1)

        assert engine.limits == [SearchLimits(max_depth=4, time_limit_ms=500)]

    def test_cancel_before_request_does_not_stick(self, qapp: object) -> None:
        worker = EngineWorker()
        worker._engine = _NoMoveEngine()
        no_move = QSignalSpy(worker.search_no_move)
        cancelled = QSignalSpy(worker.search_cancelled)

        worker.cancel()
        worker.request_move(chess.STARTING_FEN, 2)

        assert len(cancelled) == 0
        assert len(no_move) == 1
