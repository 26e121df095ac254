"""Window geometry: the visible playfield on the left, the HUD panel on the right"""
from dataclasses import dataclass
from typing import Any, Dict

from tetrais_board import BOARD_WIDTH, VISIBLE_HEIGHT


@dataclass
class Dims:
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int


def compute_dims(config: Dict[str, Any], cols: int = BOARD_WIDTH,
                 rows: int = VISIBLE_HEIGHT) -> Dims:
    # Only the visible rows are drawn; the spawn buffer stays off screen
    cell = int(config["CELL_SIZE"])
    margin = 16
    panel_w = 240

    board_w = cols * cell
    board_h = rows * cell

    total_w = margin + board_w + margin + panel_w + margin
    total_h = margin + board_h + margin

    board_x = margin
    board_y = margin
    panel_x = board_x + board_w + margin
    panel_y = margin

    return Dims(
        cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y
    )
