"""Tests for Board cells and drop indicators."""

import pytest

from chesstable.core.errors import InvalidSquareError
from chesstable.core.types import ALL_SQUARES, Square, parse_square
from chesstable.table.board import Board, DropIndicator


class TestCells:
    def test_sixty_four_cells_tagged_with_their_square(self) -> None:
        board = Board()
        cells = list(board.cells())
        assert len(cells) == 64
        for sq in ALL_SQUARES:
            assert board.cell(sq).square == sq

    def test_cell_rejects_non_square(self) -> None:
        board = Board()
        with pytest.raises(InvalidSquareError):
            board.cell((1, 4))  # type: ignore[arg-type]

    def test_board_is_centred_on_origin(self) -> None:
        board = Board(cell_size=1.0)
        a1 = board.cell(parse_square("a1")).center
        h8 = board.cell(parse_square("h8")).center
        assert (a1.x, a1.y, a1.z) == (-3.5, 0.0, -3.5)
        assert (h8.x, h8.y, h8.z) == (3.5, 0.0, 3.5)

    def test_cell_at_finds_every_cell_centre(self) -> None:
        board = Board(cell_size=0.5)
        for cell in board.cells():
            assert board.cell_at(cell.center.x, cell.center.z) is cell

    @pytest.mark.parametrize("x, z", [(-4.1, 0.0), (0.0, 4.0), (100.0, 100.0)])
    def test_cell_at_off_board(self, x: float, z: float) -> None:
        assert Board().cell_at(x, z) is None

    def test_update_syncs_top_face_from_body(self) -> None:
        board = Board(thickness=0.2)
        board.update()
        assert board.position.y == pytest.approx(0.0)


class TestDroppableMarks:
    def test_mark_creates_indicator_on_cell(self) -> None:
        board = Board()
        e4 = parse_square("e4")

        indicator = board.mark_droppable(e4)

        assert indicator.square == e4
        assert board.cell(e4).droppable
        assert board.is_droppable(e4)
        assert board.droppable_squares == {e4}
        assert indicator.position.x == board.cell(e4).center.x
        assert indicator.position.y > 0.0

    def test_marking_twice_creates_one_indicator(self) -> None:
        board = Board()
        added: list[DropIndicator] = []
        board.events.on_indicator_added.append(added.append)

        first = board.mark_droppable(parse_square("e4"))
        second = board.mark_droppable(parse_square("e4"))

        assert first is second
        assert len(board.indicators) == 1
        assert added == [first]

    def test_mark_invalid_square(self) -> None:
        with pytest.raises(InvalidSquareError):
            Board().mark_droppable("e4")  # type: ignore[arg-type]

    def test_clear_removes_everything(self) -> None:
        board = Board()
        removed: list[DropIndicator] = []
        board.events.on_indicator_removed.append(removed.append)
        marked = [board.mark_droppable(parse_square(n)) for n in ("e3", "e4")]

        board.clear_droppable()

        assert board.indicators == []
        assert board.droppable_squares == frozenset()
        assert not any(cell.droppable for cell in board.cells())
        assert sorted(i.id for i in removed) == sorted(i.id for i in marked)

    def test_square_can_be_marked_again_after_clear(self) -> None:
        board = Board()
        first = board.mark_droppable(Square(3, 4))
        board.clear_droppable()

        second = board.mark_droppable(Square(3, 4))

        assert second.id != first.id
        assert len(board.indicators) == 1
