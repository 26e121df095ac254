import pytest

from tetrais_board import (BOARD_HEIGHT, BOARD_WIDTH, CLEAR, EMPTY, GHOST, MERGED, PLAYER,
                           compose_frame, count_occupied, create_empty_board, fingerprint,
                           is_board_empty, merge_player_to_board)
from tetrais_piece import MINOS, Player


def test_empty_board_dimensions_and_cells():
    board = create_empty_board()
    assert len(board) == BOARD_HEIGHT == 22
    assert all(len(row) == BOARD_WIDTH for row in board)
    assert all(c.state == CLEAR and c.kind == EMPTY and not c.spite for row in board for c in row)
    assert is_board_empty(board)


def test_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        create_empty_board(0, 22)


def test_merge_adds_one_cell_per_block(board):
    before = count_occupied(board)
    merged = merge_player_to_board(Player(4, 20, MINOS["O"]), board)
    assert count_occupied(merged) == before + 4
    assert merged[21][4].state == MERGED and merged[21][4].kind == "O"
    # input board untouched
    assert is_board_empty(board)


def test_merge_drops_cells_above_the_board(board):
    # T's flat top row sits at y=-1, only the stem lands in row 0
    merged = merge_player_to_board(Player(4, -1, MINOS["T"]), board)
    assert count_occupied(merged) == 1
    assert merged[0][5].kind == "T"


def test_merge_carries_spite_flag(board):
    merged = merge_player_to_board(Player(0, 20, MINOS["O"], spite=True), board)
    assert merged[20][0].spite and merged[21][1].spite


def test_compose_frame_overlays_ghost_and_player(board):
    player = Player(4, 0, MINOS["O"])
    frame = compose_frame(board, player, ghost_y=20)
    states = [c.state for row in frame for c in row]
    assert states.count(PLAYER) == 4
    assert states.count(GHOST) == 4
    assert frame[21][5].state == GHOST
    assert frame[0][4].state == PLAYER
    assert is_board_empty(board)


def test_fingerprint_tracks_states_only(board, filled):
    a = filled(create_empty_board(), [(0, 21)], kind="I")
    b = filled(create_empty_board(), [(0, 21)], kind="Z")
    assert fingerprint(a) == fingerprint(b)
    assert fingerprint(a) != fingerprint(board)
