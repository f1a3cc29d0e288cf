"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 2
    time_limit_ms: int | None = None


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``best_move`` is in coordinate notation (``"e7e5"``), ready for
    ``BoardCoordinator.apply_engine_move``.
    """

    best_move: str | None
    score_cp: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for the computer opponent.

    Engines receive a FEN string rather than a live board so a search can
    run on a worker thread without sharing state with the table.
    """

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
