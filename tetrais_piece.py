"""Piece model, collision, rotation with a simplified wall kick"""
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Tuple

from tetrais_board import BOARD_WIDTH, BUFFER_ROWS, CLEAR, EMPTY, Board, board_size

Shape = Tuple[Tuple[int, ...], ...]

PIECE_KEYS = ("I", "J", "L", "O", "S", "T", "Z")


@dataclass(frozen=True)
class Mino:
    key: str
    shape: Shape


MINOS: Dict[str, Mino] = {
    "I": Mino("I", ((0, 0, 0, 0), (1, 1, 1, 1), (0, 0, 0, 0), (0, 0, 0, 0))),
    "J": Mino("J", ((0, 1, 0), (0, 1, 0), (1, 1, 0))),
    "L": Mino("L", ((0, 1, 0), (0, 1, 0), (0, 1, 1))),
    "O": Mino("O", ((1, 1), (1, 1))),
    "S": Mino("S", ((0, 1, 1), (1, 1, 0), (0, 0, 0))),
    "T": Mino("T", ((1, 1, 1), (0, 1, 0), (0, 0, 0))),
    "Z": Mino("Z", ((1, 1, 0), (0, 1, 1), (0, 0, 0))),
}

NO_MINO = Mino(EMPTY, ((0,),))


def rotate(shape: Shape, direction: str = "cw") -> Shape:
    """Transpose, then reverse each row (cw) or the row order (ccw).

    Rectangular shapes come back with width and height swapped.
    """
    transposed = list(zip(*shape))
    if direction == "cw":
        return tuple(tuple(reversed(row)) for row in transposed)
    return tuple(reversed(transposed))


def shape_cells(shape: Shape) -> Iterator[Tuple[int, int]]:
    for y, row in enumerate(shape):
        for x, v in enumerate(row):
            if v:
                yield x, y


@dataclass
class Player:
    x: int
    y: int
    mino: Mino
    collided: bool = False
    spite: bool = False

    @property
    def shape(self) -> Shape:
        return self.mino.shape

    def cells(self, dx: int = 0, dy: int = 0) -> Iterator[Tuple[int, int]]:
        for x, y in shape_cells(self.mino.shape):
            yield self.x + x + dx, self.y + y + dy


def spawn_player(key: str, width: int = BOARD_WIDTH, spite: bool = False) -> Player:
    if key not in MINOS:
        raise ValueError(f"unknown piece {key!r}")
    return Player(width // 2 - 2, 0, MINOS[key], spite=spite)


def is_colliding(player: Player, board: Board, dx: int = 0, dy: int = 0) -> bool:
    """True if the moved piece leaves the side walls, passes the floor or overlaps a block.

    Cells above the board only get the wall check; there is no row to look up.
    """
    width, height = board_size(board)
    for bx, by in player.cells(dx, dy):
        if bx < 0 or bx >= width:
            return True
        if by >= height:
            return True
        if by >= 0 and board[by][bx].state != CLEAR:
            return True
    return False


def above_visible(player: Player) -> bool:
    return any(by < BUFFER_ROWS for _, by in player.cells())


def try_rotate(board: Board, player: Player, direction: str = "cw") -> Optional[Player]:
    """Rotate and search x offsets +1, -2, +3, -4... for a free spot.

    Returns the rotated player, or None when the offset outgrows the shape width + 1.
    """
    test = replace(player, mino=replace(player.mino, shape=rotate(player.shape, direction)))
    limit = len(test.shape[0]) + 1
    offset = 1
    while is_colliding(test, board):
        test.x += offset
        offset = -(offset + (1 if offset > 0 else -1))
        if abs(offset) > limit:
            return None
    return test


def landing_y(board: Board, player: Player) -> int:
    """Row the piece would rest on if hard-dropped (the ghost position)."""
    if not any(True for _ in shape_cells(player.shape)):
        return player.y
    dy = 0
    while not is_colliding(player, board, 0, dy + 1):
        dy += 1
    return player.y + dy
