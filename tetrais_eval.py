"""Board heuristic: higher is a friendlier board for the player"""
from typing import List

from tetrais_board import BUFFER_ROWS, CLEAR, MERGED, Board, board_size
from tetrais_cascade import is_full_row

LINES_WEIGHT = 8
HEIGHT_WEIGHT = 0.6
HOLES_WEIGHT = 5
BUMPINESS_WEIGHT = 0.3
WELLS_WEIGHT = 2
NEGATIVE_SPACE_PENALTY = 0.1  # per merged cell in the hidden buffer rows
TOP_ROW_BONUS = 50


def column_heights(board: Board) -> List[int]:
    """Height of each column's topmost merged cell within the visible rows, 0 if empty."""
    width, height = board_size(board)
    heights = [0] * width
    for x in range(width):
        for y in range(BUFFER_ROWS, height):
            if board[y][x].state == MERGED:
                heights[x] = height - y
                break
    return heights


def aggregate_height(board: Board) -> int:
    return sum(column_heights(board))


def holes(board: Board) -> int:
    width, height = board_size(board)
    count = 0
    for x in range(width):
        covered = False
        for y in range(BUFFER_ROWS, height):
            state = board[y][x].state
            if state == MERGED:
                covered = True
            elif covered and state == CLEAR:
                count += 1
    return count


def bumpiness(board: Board) -> int:
    return _bumpiness(column_heights(board))


def _bumpiness(heights: List[int]) -> int:
    return sum(abs(a - b) for a, b in zip(heights, heights[1:]))


def completed_lines(board: Board) -> int:
    return sum(1 for row in board if is_full_row(row))


def wells(board: Board) -> int:
    """Sum of well depths deeper than one; the walls count as full columns."""
    return _wells(column_heights(board), len(board))


def _wells(heights: List[int], height: int) -> int:
    width = len(heights)
    total = 0
    for x, h in enumerate(heights):
        left = heights[x - 1] if x > 0 else height
        right = heights[x + 1] if x < width - 1 else height
        depth = min(left, right) - h
        if depth > 1:
            total += depth
    return total


def negative_space_penalty(board: Board) -> float:
    return NEGATIVE_SPACE_PENALTY * sum(
        1 for row in board[:BUFFER_ROWS] for cell in row if cell.state == MERGED)


def top_row_bonus(board: Board) -> float:
    # One block short of clearing the first visible row sets up the NES shift bug
    width, _ = board_size(board)
    filled = sum(1 for cell in board[BUFFER_ROWS] if cell.state == MERGED)
    return TOP_ROW_BONUS if filled == width - 1 else 0


def evaluate_board(board: Board) -> float:
    heights = column_heights(board)
    return (LINES_WEIGHT * completed_lines(board)
            - HEIGHT_WEIGHT * sum(heights)
            - HOLES_WEIGHT * holes(board)
            - BUMPINESS_WEIGHT * _bumpiness(heights)
            - WELLS_WEIGHT * _wells(heights, len(board))
            - negative_space_penalty(board)
            + top_row_bonus(board))
