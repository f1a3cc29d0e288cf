"""Exception hierarchy for the table core.

Two families:

* :class:`CallerError`: the interaction adapter passed something invalid
  (bad square, stale piece, wrong call order).  Raised immediately.
* :class:`InternalConsistencyError`: the piece registry and the rules
  oracle disagree about the position.  Fatal: surfaced and never
  retried.

Illegal drops are *not* errors; they are the snap-back branch of
``BoardCoordinator.deselect``.
"""

from __future__ import annotations


class ChesstableError(Exception):
    """Base class for all errors raised by chesstable."""


# ── Caller errors ────────────────────────────────────────────────────────────


class CallerError(ChesstableError):
    """The caller violated an API contract."""


class InvalidSquareError(CallerError, ValueError):
    """Row/column out of range, or an unparsable square name."""


class InvalidSelectionError(CallerError):
    """Attempt to select a piece that is not live on the board."""


class SelectionStateError(CallerError):
    """Operation not allowed in the coordinator's current selection state."""


class InvalidPromotionError(CallerError, ValueError):
    """Promotion piece that cannot be promoted to, or a drop that is not a promotion."""


# ── Internal-consistency faults ──────────────────────────────────────────────


class InternalConsistencyError(ChesstableError):
    """Registry and rules oracle have desynchronised."""


class PieceNotFoundError(InternalConsistencyError):
    """No live piece with the given color/type at the given square."""

    def __init__(self, color: object, piece_type: object, square: object) -> None:
        super().__init__(f"No {color} {piece_type} at {square}")
        self.color = color
        self.piece_type = piece_type
        self.square = square


class BoardDesyncError(InternalConsistencyError):
    """The oracle rejected a move the board had marked as legal."""
