#!/usr/bin/env python3
"""Play the engine headlessly with a greedy bot and report how it fares.

The bot places every piece where the board heuristic likes it best, so the
numbers show how hard the adversarial piece selection pushes back.

Usage:
  python tetrais_sim.py --games 5 --seed 1
  python tetrais_sim.py --games 1 --max-pieces 300 --log-level DEBUG
"""
import argparse
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from tetrais_config import CONFIG
from tetrais_engine import CASCADING, PLAYING, Game
from tetrais_suggest import best_placement

logger = logging.getLogger("tetrais_sim")


@dataclass
class GameStats:
    score: int
    lines: int
    level: int
    pieces: int
    spite: int
    finished: bool


def place_greedily(game: Game) -> None:
    """Rotate and shift the active piece to its best placement, then hard drop."""
    target = best_placement(game.board, game.player.mino.key)
    if target is not None:
        for _ in range(target.rotation):
            game.rotate("cw")
        step = 1 if target.x > game.player.x else -1
        while game.player.x != target.x and game.move(step):
            pass
    game.hard_drop()


def play_game(seed: Optional[int], max_pieces: int, config: Optional[dict] = None) -> GameStats:
    game = Game(dict(config or CONFIG), rng=random.Random(seed))
    game.start()
    step_ms = float(game.config["CASCADE_STEP_MS"])
    while game.state == PLAYING and game.pieces < max_pieces:
        place_greedily(game)
        while game.state == CASCADING:
            game.advance(step_ms)
    return GameStats(game.score, game.lines, game.level, game.pieces, game.spite_count,
                     finished=game.state != PLAYING)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Headless TetrAIs simulator")
    parser.add_argument("--games", type=int, default=3, help="number of games to play")
    parser.add_argument("--seed", type=int, default=None, help="base RNG seed")
    parser.add_argument("--max-pieces", type=int, default=500, help="piece cap per game")
    parser.add_argument("--no-spite", action="store_true", help="disable spite pieces")
    parser.add_argument("--log-level", default=CONFIG["LOG_LEVEL"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(message)s")
    config = dict(CONFIG)
    config["SPITE_MODE"] = not args.no_spite

    results = []
    for i in range(args.games):
        seed = None if args.seed is None else args.seed + i
        stats = play_game(seed, args.max_pieces, config)
        results.append(stats)
        logger.info("game %d: score=%d lines=%d level=%d pieces=%d spite=%d%s",
                    i + 1, stats.score, stats.lines, stats.level, stats.pieces, stats.spite,
                    "" if stats.finished else " (piece cap)")
    if results:
        logger.info("mean lines %.1f, mean pieces %.1f",
                    sum(r.lines for r in results) / len(results),
                    sum(r.pieces for r in results) / len(results))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
