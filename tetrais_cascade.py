"""Line clearing and cascade physics: sweep, floating detection, gravity steps"""
from collections import deque
from typing import List, Tuple

from tetrais_board import (BUFFER_ROWS, CLEAR, CLEAR_CELL, FALLING, MERGED, Board, Cell,
                           board_size, copy_board, empty_row)


def is_full_row(row: List[Cell]) -> bool:
    return all(cell.state == MERGED for cell in row)


def full_rows(board: Board) -> List[int]:
    return [y for y, row in enumerate(board) if is_full_row(row)]


def clear_lines(board: Board, player) -> Tuple[Board, int]:
    """Clear full rows near the locked piece, NES style.

    Only four rows are checked: two above the piece's anchor row (its second
    bounding-box row), the anchor itself and one below. Clearing the first
    visible row reproduces the NES copy bug: the whole buffer shifts up by one
    and an empty row appears at the bottom.
    """
    width, height = board_size(board)
    anchor = player.y + 1
    start = max(0, anchor - 2)
    end = anchor + 1
    cleared = 0
    new = copy_board(board)
    for y in range(start, min(end + 1, height)):
        if not is_full_row(new[y]):
            continue
        cleared += 1
        if y == BUFFER_ROWS:
            new = new[1:] + [empty_row(width)]
        else:
            del new[y]
            new.insert(0, empty_row(width))
    return new, cleared


def remove_rows(board: Board, rows: List[int]) -> Board:
    """Drop the given rows and pad the top with the same number of empty rows."""
    width, _ = board_size(board)
    doomed = set(rows)
    kept = [row[:] for y, row in enumerate(board) if y not in doomed]
    return [empty_row(width) for _ in range(len(board) - len(kept))] + kept


def mark_floating_blocks(board: Board) -> Board:
    """Relabel merged cells with no path to the floor as falling.

    Support spreads from merged cells on the bottom row to merged neighbours
    above, left and right of an already supported cell.
    """
    width, height = board_size(board)
    new = copy_board(board)
    supported = set()
    queue = deque()
    for x in range(width):
        if new[height - 1][x].state == MERGED:
            supported.add((x, height - 1))
            queue.append((x, height - 1))

    while queue:
        x, y = queue.popleft()
        for nx, ny in ((x, y - 1), (x - 1, y), (x + 1, y)):
            if 0 <= nx < width and 0 <= ny < height and (nx, ny) not in supported:
                if new[ny][nx].state == MERGED:
                    supported.add((nx, ny))
                    queue.append((nx, ny))

    for y in range(height):
        for x in range(width):
            cell = new[y][x]
            if cell.state == MERGED and (x, y) not in supported:
                new[y][x] = Cell(cell.kind, FALLING, cell.spite)
    return new


def step_cascade(board: Board) -> Tuple[Board, bool]:
    """Move every falling cell with a clear cell below it down one row.

    Rows are scanned bottom to top so no cell falls twice in one step.
    """
    width, height = board_size(board)
    new = copy_board(board)
    moved = False
    for y in range(height - 2, -1, -1):
        for x in range(width):
            if new[y][x].state == FALLING and new[y + 1][x].state == CLEAR:
                new[y + 1][x] = new[y][x]
                new[y][x] = CLEAR_CELL
                moved = True
    return new, moved


def has_falling_blocks(board: Board) -> bool:
    return any(cell.state == FALLING for row in board for cell in row)


def freeze_falling_blocks(board: Board) -> Board:
    return [[Cell(c.kind, MERGED, c.spite) if c.state == FALLING else c for c in row]
            for row in board]


def compact_board(board: Board) -> Board:
    """Remove fully clear rows left mid-board and pad with empty rows on top."""
    width, _ = board_size(board)
    kept = [row[:] for row in board if any(cell.state != CLEAR for cell in row)]
    return [empty_row(width) for _ in range(len(board) - len(kept))] + kept
