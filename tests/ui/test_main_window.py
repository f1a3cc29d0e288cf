"""Tests for MainWindow turn handling and the engine handshake."""

from __future__ import annotations

from chesstable.core.enums import Color
from chesstable.core.types import parse_square
from chesstable.settings import TableSettings
from chesstable.ui.main_window import MainWindow

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


def _human_window(fen: str | None = None) -> MainWindow:
    return MainWindow(TableSettings(opponent="human", start_fen=fen))


def test_human_game_starts_with_white_to_move() -> None:
    window = _human_window()

    assert window.status_text == "White to move"
    assert window.scene.is_interactive()
    window.close()


def test_status_follows_moves() -> None:
    window = _human_window()
    scene = window.scene
    board = window.session.board

    e2 = board.cell(parse_square("e2")).center
    e4 = board.cell(parse_square("e4")).center
    assert scene.press_at(scene.world_to_scene(e2.x, e2.z))
    scene.release_at(scene.world_to_scene(e4.x, e4.z))

    assert window.status_text == "Black to move"
    assert scene.is_interactive()
    window.close()


def test_finished_game_reports_outcome_and_locks_table() -> None:
    window = _human_window(FOOLS_MATE)

    assert window.status_text == "Game over: 0-1 (checkmate)"
    assert not window.scene.is_interactive()
    window.close()


def test_engine_moves_first_when_player_is_black() -> None:
    window = MainWindow(TableSettings(player_color=Color.BLACK, engine_depth=1))

    assert window._pending_engine_request == 1
    assert not window.scene.is_interactive()
    window.close()


def test_stale_engine_reply_is_ignored() -> None:
    window = MainWindow(TableSettings(player_color=Color.BLACK, engine_depth=1))
    registry = window.session.registry

    window._on_engine_best_move(99, "e2e4", 0, 1, 1)
    assert registry.piece_at(parse_square("e2")) is not None

    window._on_engine_best_move(1, "e2e4", 0, 1, 1)
    assert registry.piece_at(parse_square("e4")) is not None
    assert window._pending_engine_request is None
    assert window.status_text == "Black to move"
    assert window.scene.is_interactive()
    window.close()


def test_engine_error_is_shown_in_status() -> None:
    window = MainWindow(TableSettings(player_color=Color.BLACK, engine_depth=1))

    window._on_engine_error(1, "boom")

    assert window.status_text == "Engine error: boom"
    assert window._pending_engine_request is None
    window.close()
