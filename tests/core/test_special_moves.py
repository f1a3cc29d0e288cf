"""Tests for castling and en passant geometry."""

import pytest

from chesstable.core.enums import Color, MoveFlag
from chesstable.core.errors import InvalidSquareError
from chesstable.core.special_moves import (
    castling_rook_squares,
    en_passant_victim,
    home_row,
    pawn_row,
)
from chesstable.core.types import parse_square


class TestCastlingRookSquares:
    @pytest.mark.parametrize(
        "color, flag, rook_from, rook_to",
        [
            (Color.WHITE, MoveFlag.KINGSIDE_CASTLE, "h1", "f1"),
            (Color.WHITE, MoveFlag.QUEENSIDE_CASTLE, "a1", "d1"),
            (Color.BLACK, MoveFlag.KINGSIDE_CASTLE, "h8", "f8"),
            (Color.BLACK, MoveFlag.QUEENSIDE_CASTLE, "a8", "d8"),
        ],
    )
    def test_rook_squares(
        self, color: Color, flag: MoveFlag, rook_from: str, rook_to: str
    ) -> None:
        assert castling_rook_squares(color, flag) == (
            parse_square(rook_from),
            parse_square(rook_to),
        )

    def test_post_castle_columns(self) -> None:
        _, kingside_to = castling_rook_squares(Color.WHITE, MoveFlag.KINGSIDE_CASTLE)
        _, queenside_to = castling_rook_squares(Color.WHITE, MoveFlag.QUEENSIDE_CASTLE)
        assert kingside_to.column == 5
        assert queenside_to.column == 3

    @pytest.mark.parametrize("flag", [MoveFlag.NORMAL, MoveFlag.EN_PASSANT, MoveFlag.ERROR])
    def test_non_castling_flag_rejected(self, flag: MoveFlag) -> None:
        with pytest.raises(ValueError):
            castling_rook_squares(Color.WHITE, flag)


class TestEnPassantVictim:
    def test_white_captures_behind_destination(self) -> None:
        assert en_passant_victim(parse_square("d6"), Color.WHITE) == parse_square("d5")

    def test_black_captures_behind_destination(self) -> None:
        assert en_passant_victim(parse_square("e3"), Color.BLACK) == parse_square("e4")

    def test_no_square_behind_home_edge(self) -> None:
        with pytest.raises(InvalidSquareError):
            en_passant_victim(parse_square("a1"), Color.WHITE)


def test_rows_by_color() -> None:
    assert home_row(Color.WHITE) == 0
    assert home_row(Color.BLACK) == 7
    assert pawn_row(Color.WHITE) == 1
    assert pawn_row(Color.BLACK) == 6
