import pytest

from tetrais_board import BUFFER_ROWS, create_empty_board
from tetrais_eval import (aggregate_height, bumpiness, column_heights, completed_lines,
                          evaluate_board, holes, negative_space_penalty, top_row_bonus, wells)


def test_empty_board_scores_zero(board):
    assert column_heights(board) == [0] * 10
    assert holes(board) == 0
    assert wells(board) == 0
    assert evaluate_board(board) == 0


def test_heights_count_from_the_board_bottom(board, filled):
    filled(board, [(3, 21), (5, BUFFER_ROWS), (7, 0)])
    heights = column_heights(board)
    assert heights[3] == 1
    assert heights[5] == 20
    # buffer rows are not part of a column's height
    assert heights[7] == 0
    assert aggregate_height(board) == 21


def test_holes_are_clear_cells_under_a_block(board, filled):
    filled(board, [(0, 19)])
    assert holes(board) == 2


def test_bumpiness_and_wells(board, filled_rows):
    filled_rows(board, range(18, 22), skip=(5,))
    assert column_heights(board)[5] == 0
    assert bumpiness(board) == 8
    assert wells(board) == 4
    assert completed_lines(board) == 0


def test_single_cell_score(board, filled):
    filled(board, [(0, 21)])
    assert evaluate_board(board) == pytest.approx(-0.6 - 0.3)


def test_full_row_counts_as_a_line(board, filled_rows):
    filled_rows(board, [21])
    assert completed_lines(board) == 1
    assert evaluate_board(board) == pytest.approx(8 - 0.6 * 10)


def test_buffer_cells_are_penalised(board, filled):
    filled(board, [(0, 0), (1, 0), (2, 1)])
    assert negative_space_penalty(board) == pytest.approx(0.3)


def test_top_row_one_short_earns_the_bonus(board, filled):
    filled(board, [(x, BUFFER_ROWS) for x in range(9)])
    assert top_row_bonus(board) == 50
    filled(board, [(9, BUFFER_ROWS)])
    assert top_row_bonus(board) == 0


def test_more_holes_score_lower(filled):
    holey = filled(create_empty_board(), [(0, 20)])
    solid = filled(create_empty_board(), [(0, 20), (0, 21)])
    assert column_heights(holey) == column_heights(solid)
    assert holes(holey) == holes(solid) + 1
    assert evaluate_board(holey) < evaluate_board(solid)
