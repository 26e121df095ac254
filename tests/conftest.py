import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from tetrais_board import MERGED, Cell, create_empty_board  # noqa: E402


def fill(board, cells, kind="T", state=MERGED):
    for x, y in cells:
        board[y][x] = Cell(kind, state)
    return board


def fill_rows(board, rows, skip=(), kind="T"):
    for y in rows:
        fill(board, [(x, y) for x in range(len(board[0])) if x not in skip], kind)
    return board


@pytest.fixture
def board():
    return create_empty_board()


@pytest.fixture
def filled():
    return fill


@pytest.fixture
def filled_rows():
    return fill_rows
