"""Tests for Square and algebraic conversion."""

import pytest

from chesstable.core.errors import CallerError, InvalidSquareError
from chesstable.core.types import ALL_SQUARES, Square, parse_square, square_name


class TestSquare:
    def test_e2_is_row_one_column_four(self) -> None:
        assert parse_square("e2") == Square(1, 4)
        assert Square(1, 4).name == "e2"

    def test_corners(self) -> None:
        assert square_name(Square(0, 0)) == "a1"
        assert square_name(Square(0, 7)) == "h1"
        assert square_name(Square(7, 0)) == "a8"
        assert square_name(Square(7, 7)) == "h8"

    def test_mapping_is_a_bijection(self) -> None:
        names = {sq.name for sq in ALL_SQUARES}
        assert len(ALL_SQUARES) == 64
        assert len(names) == 64
        for sq in ALL_SQUARES:
            assert parse_square(sq.name) == sq

    @pytest.mark.parametrize("row, column", [(-1, 0), (0, 8), (8, 8), (3, -2)])
    def test_out_of_range_is_an_error(self, row: int, column: int) -> None:
        with pytest.raises(InvalidSquareError):
            Square(row, column)

    def test_non_integer_coordinates_rejected(self) -> None:
        with pytest.raises(InvalidSquareError):
            Square(True, 0)
        with pytest.raises(InvalidSquareError):
            Square(1.0, 2)  # type: ignore[arg-type]

    @pytest.mark.parametrize("name", ["", "e", "e9", "i1", "E2", "e22", "a0"])
    def test_parse_invalid_names(self, name: str) -> None:
        with pytest.raises(InvalidSquareError):
            parse_square(name)

    def test_invalid_square_is_caller_error_and_value_error(self) -> None:
        with pytest.raises(CallerError):
            parse_square("z9")
        with pytest.raises(ValueError):
            parse_square("z9")

    def test_str_is_name(self) -> None:
        assert str(Square(3, 4)) == "e4"
