"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from chesstable.core.types import parse_square
from chesstable.table.pieces import PieceId
from chesstable.table.session import TableSession

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _cleanup_qt_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Ensure UI tests do not leak top-level widgets into the next test."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()


@pytest.fixture
def session() -> TableSession:
    """A fresh table at the standard starting position."""
    return TableSession.create()


def _play(session: TableSession, from_name: str, to_name: str) -> list[PieceId]:
    piece = session.registry.piece_at(parse_square(from_name))
    assert piece is not None, f"no piece on {from_name}"
    session.coordinator.select(piece)
    return session.coordinator.deselect(session.board.cell(parse_square(to_name)))


@pytest.fixture
def play() -> Callable[[TableSession, str, str], list[PieceId]]:
    """Pick up the piece on one square and drop it on another."""
    return _play
