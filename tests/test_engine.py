import json
import random

import pytest

from tetrais_board import GHOST, MERGED, PLAYER, create_empty_board, merge_player_to_board
from tetrais_cascade import full_rows
from tetrais_engine import CASCADING, GAME_OVER, HIGH_SCORE_ENTRY, IDLE, PLAYING, Game
from tetrais_eval import completed_lines, evaluate_board
from tetrais_piece import MINOS, Mino, Player, rotate


def kinds(events):
    return [e.kind for e in events]


def vertical_i(x, y=0):
    return Player(x, y, Mino("I", rotate(MINOS["I"].shape)))


@pytest.fixture
def game():
    g = Game(rng=random.Random(0))
    g.start()
    return g


def test_new_game_is_idle():
    g = Game(rng=random.Random(0))
    assert g.state == IDLE
    assert g.move(1) is False
    assert g.hard_drop() == 0
    assert g.advance(1000) == []


def test_start_spawns_at_the_top(game):
    assert game.state == PLAYING
    assert (game.player.x, game.player.y) == (3, 0)
    assert len(game.suggestions) == 7
    assert game.pieces == 0


def test_start_reports_a_spawn():
    g = Game(rng=random.Random(0))
    events = g.start()
    assert kinds(events) == ["spawn"]
    assert events[0].data["spite"] is False


def test_hard_drop_locks_and_respawns(game):
    distance = game.hard_drop()
    assert distance > 0
    assert game.state == PLAYING
    assert game.pieces == 1
    assert sum(1 for row in game.board for c in row if c.state == MERGED) == 4
    assert kinds(game.drain_events()) == ["lock", "spawn"]
    record = game.move_history[-1]
    assert record.action == "hardDrop"
    assert record.player.y == 0
    assert record.details == {"distance": distance}


def test_moves_stop_at_the_wall(game):
    while game.move(-1):
        pass
    assert min(x for x, _ in game.player.cells()) == 0
    assert game.move_history[-1].action == "move"


def test_gravity_ticks_on_the_drop_period(game):
    game.advance(999)
    assert game.player.y == 0
    game.advance(1)
    assert game.player.y == 1


def test_soft_drop_uses_its_own_period(game):
    game.soft_drop(True)
    assert game.drop_period() == 50
    game.advance(120)
    assert game.player.y == 2
    game.soft_drop(False)
    assert game.drop_period() == 1000
    assert [r.action for r in game.move_history][-1] == "softDrop_end"


def test_suspended_game_does_not_move(game):
    game.suspended = True
    game.advance(5000)
    assert game.player.y == 0
    assert game.move(1) is False
    assert game.rotate() is False
    game.suspended = False
    assert game.move(1) is True


def test_frame_overlays_piece_and_ghost(game):
    frame = game.frame()
    states = [c.state for row in frame for c in row]
    assert states.count(PLAYER) == 4
    assert states.count(GHOST) == 4
    assert all(c.state not in (PLAYER, GHOST) for row in game.board for c in row)


def occupied(board):
    return {(x, y) for y, row in enumerate(board) for x, c in enumerate(row) if c.state == MERGED}


def test_vertical_i_clears_the_bottom_row(game, filled_rows):
    game.board = filled_rows(create_empty_board(), [21], skip=(9,))
    game.player = vertical_i(7)
    game.drain_events()
    landed = merge_player_to_board(vertical_i(7, 18), game.board)
    assert completed_lines(landed) == 1
    assert evaluate_board(landed) > evaluate_board(game.board)

    assert game.hard_drop() == 18
    events = game.drain_events()
    assert kinds(events) == ["lock", "lines_cleared"]
    assert events[1].data == {"lines": 1, "points": 40}
    assert (game.lines, game.score) == (1, 40)
    assert full_rows(game.board) == []
    assert occupied(game.board) == {(9, 19), (9, 20), (9, 21)}

    assert kinds(game.advance(500)) == ["cascade_settled", "spawn"]
    assert game.state == PLAYING


def test_lock_clears_rows_inside_and_below_the_window(game, filled_rows):
    game.board = filled_rows(create_empty_board(), [20, 21], skip=(9,))
    game.player = vertical_i(7)
    game.drain_events()

    assert game.hard_drop() == 18
    events = game.drain_events()
    assert kinds(events) == ["lock", "lines_cleared"]
    assert events[1].data == {"lines": 2, "points": 100}
    assert game.state == CASCADING

    assert kinds(game.advance(500)) == ["cascade_settled", "spawn"]
    assert game.state == PLAYING
    assert occupied(game.board) == {(9, 20), (9, 21)}


def test_falling_block_completes_a_row(game, filled, filled_rows):
    board = filled_rows(create_empty_board(), [20, 21], skip=(0,))
    filled_rows(board, [19], skip=(8, 9))
    filled(board, [(0, 18)])
    game.board = board
    game.player = Player(8, 0, MINOS["O"])
    game.drain_events()

    assert game.hard_drop() == 18
    assert kinds(game.drain_events()) == ["lock", "lines_cleared"]
    assert (game.lines, game.score) == (1, 40)
    assert game.state == CASCADING

    assert kinds(game.advance(500)) == ["cascade_step"]
    assert kinds(game.advance(500)) == ["cascade_step"]
    events = game.advance(500)
    assert kinds(events) == ["cascade_clear"]
    assert events[0].data == {"lines": 1, "points": 60}
    assert (game.lines, game.score) == (2, 100)
    assert game.state == CASCADING

    assert kinds(game.advance(500)) == ["cascade_settled", "spawn"]
    assert game.state == PLAYING
    assert occupied(game.board) == {(x, 21) for x in range(1, 10)} | {(8, 20), (9, 20)}


def test_actions_are_ignored_while_cascading(game, filled_rows):
    game.board = filled_rows(create_empty_board(), [20, 21], skip=(9,))
    game.player = vertical_i(7)
    game.hard_drop()
    assert game.state == CASCADING
    assert game.move(-1) is False
    assert game.hard_drop() == 0


def blocked_spawn_board(filled):
    # row 1 blocks every spawn; the column on the right stays free
    return filled(create_empty_board(), [(x, 1) for x in range(9)])


def test_blocked_spawn_ends_the_game(game, filled):
    game.board = blocked_spawn_board(filled)
    game.player = vertical_i(7)
    game.drain_events()
    game.hard_drop()
    assert game.state == GAME_OVER
    assert kinds(game.drain_events()) == ["lock", "game_over"]

    report = game.game_over_report
    assert report is not None
    assert report.colliding_player.y == 0
    assert report.move_history[-1].action == "hardDrop"
    dump = json.loads(json.dumps(report.to_dict()))
    assert dump["finalBoard"][21][9] == ["I", MERGED]
    assert len(dump["finalSuggestions"]) == 7

    assert game.advance(1000) == []
    assert game.move(1) is False


def test_high_score_entry(filled):
    g = Game(rng=random.Random(0), is_high_score=lambda score, lines: True)
    g.start()
    g.board = blocked_spawn_board(filled)
    g.player = vertical_i(7)
    g.hard_drop()
    assert g.state == HIGH_SCORE_ENTRY
    assert g.finish_high_score_entry() is True
    assert g.state == GAME_OVER
    assert g.finish_high_score_entry() is False


def test_restart_resets_counters(game, filled_rows):
    game.board = filled_rows(create_empty_board(), [20, 21], skip=(9,))
    game.player = vertical_i(7)
    game.hard_drop()
    game.start()
    assert (game.score, game.lines, game.pieces, game.state) == (0, 0, 0, PLAYING)
    assert game.move_history == []
