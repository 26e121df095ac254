"""Piece suggestions: rank every piece by the best board it can reach

Each piece is tried in all four rotations at every column from -2 to the right
wall, hard-dropped, written into a scratch board and scored with
evaluate_board. Pieces are then ordered worst first.
"""
import logging
import random
from collections import OrderedDict
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from tetrais_board import MERGED, Board, Cell, board_size, copy_board, fingerprint, is_board_empty
from tetrais_eval import evaluate_board
from tetrais_piece import MINOS, PIECE_KEYS, Mino, Player, Shape, is_colliding, rotate, shape_cells

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    key: str
    rotation: int  # clockwise quarter turns from the template
    x: int
    y: int
    score: float


def _place(board: Board, key: str, shape: Shape, x: int, y: int) -> Optional[Board]:
    width, height = board_size(board)
    scratch = copy_board(board)
    cell = Cell(key, MERGED)
    for cx, cy in shape_cells(shape):
        by, bx = y + cy, x + cx
        if by >= height or bx < 0 or bx >= width:
            return None
        if by < 0:
            continue
        if scratch[by][bx].state == MERGED:
            return None
        scratch[by][bx] = cell
    return scratch


def placements(board: Board, mino: Mino) -> Iterator[Tuple[Placement, Board]]:
    """Yield every reachable hard-drop placement of the piece with its resulting board."""
    width, _ = board_size(board)
    shape = mino.shape
    for r in range(4):
        for x in range(-2, width):
            if any(x + cx < 0 or x + cx >= width for cx, _ in shape_cells(shape)):
                continue
            probe = Player(x, 0, Mino(mino.key, shape))
            dy = 0
            while not is_colliding(probe, board, 0, dy + 1):
                dy += 1
            result = _place(board, mino.key, shape, x, dy)
            if result is None:
                continue
            yield Placement(mino.key, r, x, dy, evaluate_board(result)), result
        shape = rotate(shape)


def best_placement(board: Board, key: str) -> Optional[Placement]:
    best = None
    for placement, _ in placements(board, MINOS[key]):
        if best is None or placement.score > best.score:
            best = placement
    return best


def rank_pieces(board: Board) -> List[Tuple[str, float]]:
    """(key, best achievable score) pairs sorted worst to best; ties keep piece order."""
    scores = []
    for key in PIECE_KEYS:
        best = best_placement(board, key)
        scores.append((key, best.score if best is not None else float("-inf")))
    scores.sort(key=lambda item: item[1])
    return scores


def get_piece_suggestions(board: Board, rng: Optional[random.Random] = None) -> List[Mino]:
    """All seven pieces ordered worst (index 0) to best.

    An empty board says nothing about the pieces, so they come back shuffled.
    """
    if is_board_empty(board):
        rng = rng or random.Random()
        keys = list(PIECE_KEYS)
        rng.shuffle(keys)
        return [MINOS[k] for k in keys]
    ranking = rank_pieces(board)
    logger.debug("ranking %s", ", ".join(f"{k}={s:.1f}" for k, s in ranking))
    return [MINOS[k] for k, _ in ranking]


class SuggestionCache:
    """LRU memo of rankings keyed on board contents."""

    def __init__(self, maxsize: int = 256):
        self.maxsize = maxsize
        self._entries: "OrderedDict[tuple, List[Mino]]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self):
        return len(self._entries)

    def suggestions(self, board: Board, rng: Optional[random.Random] = None) -> List[Mino]:
        if is_board_empty(board):
            return get_piece_suggestions(board, rng)
        key = fingerprint(board)
        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            return list(self._entries[key])
        self.misses += 1
        ranking = get_piece_suggestions(board, rng)
        self._entries[key] = ranking
        if len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
        return list(ranking)
