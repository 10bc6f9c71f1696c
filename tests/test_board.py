import random

import numpy as np
import pytest

from tetris_engine.game import COLUMNS, ROWS, SHAPES, Board, rotate_cw
from tetris_engine.game.shapes import make_shape


def _marked_board() -> Board:
    """Every row carries a distinct single-cell marker so shifts are visible."""
    board = Board()
    for r in range(ROWS):
        board.cells[r, r % COLUMNS] = (r % 7) + 1
    return board


def _naive_collides(cells: np.ndarray, shape: np.ndarray, x: int, y: int) -> bool:
    for r in range(shape.shape[0]):
        for c in range(shape.shape[1]):
            if not shape[r, c]:
                continue
            bx, by = x + c, y + r
            if bx < 0 or bx >= COLUMNS or by >= ROWS:
                return True
            if by >= 0 and cells[by, bx] != 0:
                return True
    return False


def test_bounds_have_no_upper_limit_above_the_grid():
    board = Board()
    assert board.is_in_bounds(0, -3)
    assert board.is_in_bounds(9, 19)
    assert not board.is_in_bounds(-1, 0)
    assert not board.is_in_bounds(10, 0)
    assert not board.is_in_bounds(0, 20)


def test_cells_above_the_grid_are_never_occupied():
    board = Board()
    board.cells[0, :] = 1
    assert not board.is_occupied(0, -1)
    assert board.is_occupied(0, 0)
    assert not board.is_occupied(0, 1)


def test_collides_matches_reference_predicate():
    rng = random.Random(5)
    board = Board()
    for _ in range(60):
        board.cells[rng.randrange(ROWS), rng.randrange(COLUMNS)] = 3
    for entry in SHAPES:
        shape = entry.shape
        for _ in range(4):
            for x in range(-4, COLUMNS + 3):
                for y in range(-4, ROWS + 3):
                    assert board.collides(shape, x, y) == _naive_collides(board.cells, shape, x, y)
            shape = rotate_cw(shape)


def test_x_is_still_checked_above_the_grid():
    board = Board()
    bar = make_shape([[1], [1], [1], [1]])
    assert not board.collides(bar, 0, -4)
    assert board.collides(bar, -1, -4)
    assert board.collides(bar, COLUMNS, -4)


def test_lock_marks_cells_occupied():
    board = Board()
    shape = SHAPES[0].shape  # T
    written = board.lock(shape, 2, 10, 1)
    assert written == 4
    for r, c in zip(*np.nonzero(shape)):
        assert board.is_occupied(2 + int(c), 10 + int(r))
        assert board.color_at(2 + int(c), 10 + int(r)) == 1
    assert int(np.count_nonzero(board.cells)) == 4


def test_lock_drops_cells_above_the_grid():
    board = Board()
    bar = make_shape([[1], [1], [1], [1]])
    written = board.lock(bar, 5, -2, 5)
    assert written == 2
    assert int(np.count_nonzero(board.cells)) == 2
    assert board.is_occupied(5, 0) and board.is_occupied(5, 1)


def test_full_rows_top_to_bottom():
    board = Board()
    board.cells[7, :] = 2
    board.cells[3, :] = 1
    board.cells[12, :-1] = 1
    assert board.full_rows() == [3, 7]


def test_clear_single_row_shifts_rows_above_down():
    board = _marked_board()
    board.cells[12, :] = 4
    before = board.clone_state()
    assert board.clear_rows({12}) == 1
    assert not board.cells[0].any()
    assert np.array_equal(board.cells[1:13], before[0:12])
    assert np.array_equal(board.cells[13:], before[13:])
    assert board.cells.shape == (ROWS, COLUMNS)


def test_clear_non_adjacent_rows_at_once():
    board = _marked_board()
    board.cells[5, :] = 1
    board.cells[10, :] = 2
    before = board.clone_state()
    assert board.clear_rows({10, 5}) == 2
    assert not board.cells[0:2].any()
    kept = [r for r in range(ROWS) if r not in (5, 10)]
    assert np.array_equal(board.cells[2:], before[kept])


def test_clear_nothing_is_a_noop():
    board = _marked_board()
    before = board.clone_state()
    assert board.clear_rows([]) == 0
    assert np.array_equal(board.cells, before)


def test_max_height():
    board = Board()
    assert board.get_max_height() == 0
    board.cells[15, 3] = 1
    assert board.get_max_height() == 5


def test_cell_queries_reject_columns_off_the_board():
    board = Board()
    board.cells[0, COLUMNS - 1] = 4
    with pytest.raises(IndexError):
        board.is_occupied(-1, 0)
    with pytest.raises(IndexError):
        board.is_occupied(COLUMNS, 0)
    with pytest.raises(IndexError):
        board.is_occupied(-1, -2)
    with pytest.raises(IndexError):
        board.color_at(-1, 0)
    with pytest.raises(IndexError):
        board.color_at(0, -1)


def test_lock_off_the_board_writes_nothing():
    board = Board()
    bar = make_shape([[1, 1, 1, 1]])
    with pytest.raises(IndexError):
        board.lock(bar, -1, 5, 5)
    with pytest.raises(IndexError):
        board.lock(make_shape([[1], [1]]), 0, ROWS - 1, 5)
    assert not board.cells.any()
