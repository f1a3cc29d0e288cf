"""Tests for the uncaught-exception hook."""

from __future__ import annotations

import logging

import pytest

from chesstable.core.enums import Color, PieceType
from chesstable.core.errors import PieceNotFoundError
from chesstable.core.types import parse_square
from chesstable.ui.bootstrap import _excepthook


def test_excepthook_logs_fatal_desync(caplog: pytest.LogCaptureFixture) -> None:
    exc = PieceNotFoundError(Color.BLACK, PieceType.PAWN, parse_square("d5"))

    with caplog.at_level(logging.CRITICAL, logger="chesstable.ui.bootstrap"):
        _excepthook(type(exc), exc, None)

    assert "Unhandled exception" in caplog.text
    assert "No black pawn at d5" in caplog.text
