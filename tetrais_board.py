"""Board model: grid of cells, merge, and overlay composition for renderers"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

BOARD_WIDTH = 10
VISIBLE_HEIGHT = 20
BUFFER_ROWS = 2
BOARD_HEIGHT = VISIBLE_HEIGHT + BUFFER_ROWS

EMPTY = "0"

CLEAR = "clear"
MERGED = "merged"
GHOST = "ghost"
FALLING = "falling"
PLAYER = "player"


@dataclass(frozen=True)
class Cell:
    kind: str = EMPTY
    state: str = CLEAR
    spite: bool = False


CLEAR_CELL = Cell()

Board = List[List[Cell]]


def create_empty_board(width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> Board:
    if width <= 0 or height <= 0:
        raise ValueError(f"board dimensions must be positive, got {width}x{height}")
    return [empty_row(width) for _ in range(height)]


def empty_row(width: int) -> List[Cell]:
    return [CLEAR_CELL] * width


def copy_board(board: Board) -> Board:
    # Cells are immutable, so copying the rows is enough
    return [row[:] for row in board]


def board_size(board: Board) -> Tuple[int, int]:
    return len(board[0]), len(board)


def is_board_empty(board: Board) -> bool:
    return all(cell.state == CLEAR for row in board for cell in row)


def count_occupied(board: Board) -> int:
    return sum(1 for row in board for cell in row if cell.state != CLEAR)


def fingerprint(board: Board) -> Tuple[Tuple[str, ...], ...]:
    """Hashable key for the board's cell states (kinds and spite flags ignored)."""
    return tuple(tuple(cell.state for cell in row) for row in board)


def merge_player_to_board(player, board: Board) -> Board:
    """Write the player's occupied cells into a copy of the board as merged.

    Cells outside the board (e.g. above the spawn buffer) are dropped.
    """
    width, height = board_size(board)
    merged = copy_board(board)
    cell = Cell(player.mino.key, MERGED, player.spite)
    for bx, by in player.cells():
        if 0 <= by < height and 0 <= bx < width:
            merged[by][bx] = cell
    return merged


def compose_frame(board: Board, player, ghost_y: Optional[int] = None) -> Board:
    """Board snapshot with the ghost and the active piece overlaid on clear cells."""
    width, height = board_size(board)
    frame = copy_board(board)
    if player is None or player.mino.key == EMPTY:
        return frame
    if ghost_y is not None:
        ghost = Cell(player.mino.key, GHOST, False)
        for bx, by in player.cells(0, ghost_y - player.y):
            if 0 <= by < height and 0 <= bx < width and frame[by][bx].state == CLEAR:
                frame[by][bx] = ghost
    active = Cell(player.mino.key, PLAYER, player.spite)
    for bx, by in player.cells():
        if 0 <= by < height and 0 <= bx < width and frame[by][bx].state in (CLEAR, GHOST):
            frame[by][bx] = active
    return frame
