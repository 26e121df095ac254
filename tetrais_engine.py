"""
Game engine: one authoritative state machine driven by a fixed-step update.

States
------
IDLE -> PLAYING -> PROCESSING_BOARD -> (CASCADING ...) -> PLAYING
PLAYING -> GAME_OVER / HIGH_SCORE_ENTRY when a fresh piece cannot spawn.

`advance(dt_ms)` accumulates time and performs whole drop ticks while PLAYING
and whole cascade steps while CASCADING. PROCESSING_BOARD only lasts for the
lock itself: merge, line clear, then CASCADING or a fresh spawn. Player
actions (move, rotate, drop, hard_drop) apply immediately. Everything that
happened since the last call is returned as a list of Events, so a pygame
loop, a test or the headless simulator drive the engine the same way.

Pausing or opening a menu sets `suspended`; the state itself does not change.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from tetrais_board import (BOARD_HEIGHT, BOARD_WIDTH, BUFFER_ROWS, Board, compose_frame,
                           create_empty_board, merge_player_to_board)
from tetrais_cascade import (clear_lines, compact_board, freeze_falling_blocks, full_rows,
                             mark_floating_blocks, remove_rows, step_cascade)
from tetrais_config import CONFIG
from tetrais_piece import (NO_MINO, Mino, Player, above_visible, is_colliding, landing_y,
                           spawn_player, try_rotate)
from tetrais_rng import PieceSelector
from tetrais_scoring import drop_period_ms, level_for_lines, points_for_lines
from tetrais_suggest import SuggestionCache

logger = logging.getLogger(__name__)

IDLE = "IDLE"
PLAYING = "PLAYING"
PROCESSING_BOARD = "PROCESSING_BOARD"
CASCADING = "CASCADING"
GAME_OVER = "GAME_OVER"
HIGH_SCORE_ENTRY = "HIGH_SCORE_ENTRY"

TERMINAL_STATES = (GAME_OVER, HIGH_SCORE_ENTRY)


@dataclass(frozen=True)
class Event:
    kind: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MoveRecord:
    game_time_ms: float
    action: str
    player: Player
    details: Optional[Dict[str, Any]] = None


@dataclass
class GameOverReport:
    timestamp: str
    final_board: Board
    colliding_player: Player
    score: int
    lines: int
    level: int
    move_history: List[MoveRecord]
    final_suggestions: List[Mino]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready debug dump; pieces are reduced to their tags."""
        def player_dict(p: Player):
            return {"pos": {"x": p.x, "y": p.y}, "minoKey": p.mino.key,
                    "collided": p.collided, "spite": p.spite}

        return {
            "timestamp": self.timestamp,
            "finalBoard": [[[c.kind, c.state] for c in row] for row in self.final_board],
            "collidingPlayer": player_dict(self.colliding_player),
            "score": self.score,
            "lines": self.lines,
            "level": self.level,
            "moveHistory": [{"gameTime": m.game_time_ms, "action": m.action,
                             "player": player_dict(m.player), "details": m.details}
                            for m in self.move_history],
            "finalSuggestions": [m.key for m in self.final_suggestions],
        }


class Game:
    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 rng: Optional[random.Random] = None,
                 is_high_score: Optional[Callable[[int, int], bool]] = None,
                 width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT):
        self.config = dict(CONFIG) if config is None else config
        self.rng = rng if rng is not None else random.Random(self.config.get("SEED"))
        self.is_high_score = is_high_score
        self.width = width
        self.height = height
        self.selector = PieceSelector(self.rng, bool(self.config.get("SPITE_MODE", True)))
        self.cache = SuggestionCache(int(self.config.get("SUGGESTION_CACHE_SIZE", 256)))
        self.state = IDLE
        self.suspended = False
        self._reset()

    def _reset(self):
        self.board = create_empty_board(self.width, self.height)
        self.player = Player(0, 0, NO_MINO)
        self.suggestions: List[Mino] = []
        self.score = 0
        self.lines = 0
        self.level = 0
        self.spite_count = 0
        self.pieces = 0
        self.soft_drop_active = False
        self.move_history: List[MoveRecord] = []
        self.game_over_report: Optional[GameOverReport] = None
        self.selector.reset()
        self._clock_ms = 0.0
        self._drop_acc = 0.0
        self._cascade_acc = 0.0
        self._events: List[Event] = []

    # ---------- lifecycle ----------
    def start(self) -> List[Event]:
        self._reset()
        self.suspended = False
        self.state = PLAYING
        logger.info("game started")
        self._spawn()
        return self.drain_events()

    def drain_events(self) -> List[Event]:
        events, self._events = self._events, []
        return events

    def _emit(self, kind: str, **data):
        self._events.append(Event(kind, data))

    def drop_period(self) -> float:
        if self.soft_drop_active:
            return float(self.config.get("SOFT_DROP_MS", 50))
        return drop_period_ms(self.lines)

    def advance(self, dt_ms: float) -> List[Event]:
        if self.suspended or self.state in (IDLE,) + TERMINAL_STATES:
            return self.drain_events()
        self._clock_ms += dt_ms
        if self.state == PLAYING:
            self._drop_acc += dt_ms
            while self.state == PLAYING and self._drop_acc >= self.drop_period():
                self._drop_acc -= self.drop_period()
                self.drop()
        elif self.state == CASCADING:
            self._cascade_acc += dt_ms
            step = float(self.config.get("CASCADE_STEP_MS", 500))
            while self.state == CASCADING and self._cascade_acc >= step:
                self._cascade_acc -= step
                self._cascade_tick()
        return self.drain_events()

    def frame(self) -> Board:
        """Board for renderers, with ghost and active piece overlaid while playing."""
        if self.state != PLAYING:
            return compose_frame(self.board, None)
        return compose_frame(self.board, self.player, landing_y(self.board, self.player))

    # ---------- player actions ----------
    def _can_act(self) -> bool:
        return self.state == PLAYING and not self.suspended

    def _record(self, action: str, details: Optional[Dict[str, Any]] = None):
        self.move_history.append(MoveRecord(self._clock_ms, action, replace(self.player), details))

    def move(self, dx: int) -> bool:
        if not self._can_act() or is_colliding(self.player, self.board, dx, 0):
            return False
        self._record("move", {"dir": dx})
        self.player.x += dx
        return True

    def rotate(self, direction: str = "cw") -> bool:
        if not self._can_act():
            return False
        rotated = try_rotate(self.board, self.player, direction)
        if rotated is None:
            return False
        self._record("rotate", {"direction": direction})
        self.player = rotated
        return True

    def soft_drop(self, active: bool):
        if self.soft_drop_active == active:
            return
        self.soft_drop_active = active
        if self._can_act():
            self._record("softDrop_start" if active else "softDrop_end")

    def drop(self) -> bool:
        """One row of gravity; locks the piece when it cannot move down."""
        if not self._can_act():
            return False
        self._record("drop")
        if not is_colliding(self.player, self.board, 0, 1):
            self.player.y += 1
            return True
        self.player.collided = True
        self._lock()
        return False

    def hard_drop(self) -> int:
        if not self._can_act():
            return 0
        target = landing_y(self.board, self.player)
        distance = target - self.player.y
        self._record("hardDrop", {"distance": distance})
        self.player.y = target
        self.player.collided = True
        self._lock()
        return distance

    # ---------- board processing ----------
    def _lock(self):
        self.state = PROCESSING_BOARD
        self.board = merge_player_to_board(self.player, self.board)
        self.pieces += 1
        self._emit("lock", key=self.player.mino.key, x=self.player.x, y=self.player.y,
                   spite=self.player.spite)
        self._process_board()

    def _award(self, cleared: int, cascade: bool):
        self.lines += cleared
        self.level = level_for_lines(self.lines)
        points = points_for_lines(cleared, self.level, cascade)
        self.score += points
        return points

    def _process_board(self):
        self.board, cleared = clear_lines(self.board, self.player)
        # The window can miss a row the piece completed, e.g. under a vertical I
        missed = [y for y in full_rows(self.board) if y >= BUFFER_ROWS]
        if missed:
            self.board = remove_rows(self.board, missed)
            cleared += len(missed)
        if not cleared:
            self._spawn()
            return
        points = self._award(cleared, cascade=False)
        self._emit("lines_cleared", lines=cleared, points=points)
        self.board = mark_floating_blocks(self.board)
        self.state = CASCADING
        self._cascade_acc = 0.0

    def _cascade_tick(self):
        self.board, moved = step_cascade(self.board)
        if moved:
            self._emit("cascade_step")
            return
        self.board = freeze_falling_blocks(self.board)
        rows = full_rows(self.board)
        if rows:
            self.board = remove_rows(self.board, rows)
            points = self._award(len(rows), cascade=True)
            logger.debug("cascade cleared %d rows for %d points", len(rows), points)
            self._emit("cascade_clear", lines=len(rows), points=points)
            self.board = mark_floating_blocks(self.board)
            return
        self.board = compact_board(self.board)
        self._emit("cascade_settled")
        self._spawn()

    # ---------- spawning ----------
    def _spawn(self):
        self.suggestions = self.cache.suggestions(self.board, self.rng)
        self.selector.spite_mode = bool(self.config.get("SPITE_MODE", True))
        mino, spite = self.selector.next_piece(self.suggestions,
                                               self.config.get("SUGGESTION_WEIGHTS"))
        player = spawn_player(mino.key, self.width, spite=spite)
        # A spawn that collides entirely inside the visible rows is lifted toward the buffer
        while is_colliding(player, self.board) and not above_visible(player):
            player.y -= 1
        if is_colliding(player, self.board):
            self._game_over(player)
            return
        if spite:
            self.spite_count += 1
        self.player = player
        self.state = PLAYING
        self._drop_acc = 0.0
        logger.debug("spawned %s%s from %s", mino.key, " (spite)" if spite else "",
                     "".join(m.key for m in self.suggestions))
        self._emit("spawn", key=mino.key, spite=spite,
                   suggestions=[m.key for m in self.suggestions])

    def _game_over(self, player: Player):
        self.player = player
        self.game_over_report = GameOverReport(
            timestamp=datetime.now(timezone.utc).isoformat(),
            final_board=[row[:] for row in self.board],
            colliding_player=replace(player),
            score=self.score,
            lines=self.lines,
            level=self.level,
            move_history=list(self.move_history),
            final_suggestions=list(self.suggestions),
        )
        logger.info("game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
        if self.is_high_score is not None and self.is_high_score(self.score, self.lines):
            self.state = HIGH_SCORE_ENTRY
            logger.info("high score entry")
            self._emit("high_score_entry", score=self.score, lines=self.lines)
        else:
            self.state = GAME_OVER
            self._emit("game_over", score=self.score, lines=self.lines)

    def finish_high_score_entry(self) -> bool:
        if self.state != HIGH_SCORE_ENTRY:
            return False
        self.state = GAME_OVER
        self._emit("game_over", score=self.score, lines=self.lines)
        return True
