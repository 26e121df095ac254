"""Piece selection policy: weighted draw over the ranking, plus the spite override"""
import logging
import math
import random
from typing import List, Optional, Sequence, Tuple

from tetrais_piece import MINOS, PIECE_KEYS, Mino

logger = logging.getLogger(__name__)


def weights_are_valid(weights: Optional[Sequence[float]], count: int) -> bool:
    if weights is None or len(weights) != count:
        return False
    try:
        return all(math.isfinite(w) and w >= 0 for w in weights)
    except TypeError:
        return False


def select_biased_piece(suggestions: List[Mino], weights: Optional[Sequence[float]],
                        rng: random.Random) -> Mino:
    """Walk the cumulative weights with one uniform draw.

    Malformed weights fall back to a uniform pick; rounding shortfalls land on
    the last (best) piece.
    """
    if not suggestions:
        return MINOS[rng.choice(PIECE_KEYS)]
    if not weights_are_valid(weights, len(suggestions)):
        logger.warning("piece weights %r are invalid, falling back to uniform selection", weights)
        return suggestions[rng.randrange(len(suggestions))]
    r = rng.random()
    cumulative = 0.0
    for mino, w in zip(suggestions, weights):
        cumulative += w
        if r <= cumulative:
            return mino
    return suggestions[-1]


class PieceSelector:
    """Chooses the next piece and remembers which piece the player needed last time.

    In spite mode, if this spawn's worst piece is the one that was best on the
    previous spawn, it is dealt without consulting the weights.
    """

    def __init__(self, rng: Optional[random.Random] = None, spite_mode: bool = True):
        self.rng = rng or random.Random()
        self.spite_mode = spite_mode
        self.most_needed: Optional[str] = None

    def reset(self):
        self.most_needed = None

    def next_piece(self, suggestions: List[Mino],
                   weights: Optional[Sequence[float]]) -> Tuple[Mino, bool]:
        spite = bool(self.spite_mode and suggestions and self.most_needed is not None
                     and suggestions[0].key == self.most_needed)
        if spite:
            mino = suggestions[0]
        else:
            mino = select_biased_piece(suggestions, weights, self.rng)
        if suggestions:
            self.most_needed = suggestions[-1].key
        return mino, spite
