"""Computer opponent: search implementation and Qt worker bridge."""

from chesstable.engine.negamax import NegamaxEngine
from chesstable.engine.qt_bridge import EngineWorker
from chesstable.engine.search import IEngine, SearchLimits, SearchResult

__all__ = [
    "EngineWorker",
    "IEngine",
    "NegamaxEngine",
    "SearchLimits",
    "SearchResult",
]
