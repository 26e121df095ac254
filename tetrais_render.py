"""
Rendering helpers for the pygame front end.

- Pre-render cell sprites per piece kind and per cell state (merged, falling,
  player, ghost outline) and blit them.
- Pre-render the static background (grid + panel frame) once per Dims.
- Cache HUD text surfaces; re-render only when values change.

The renderer only pulls: it reads Game.frame() and the game's counters and
never calls back into the engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pygame

from tetrais_board import (BUFFER_ROWS, CLEAR, FALLING, GHOST, MERGED, PLAYER, Board,
                           board_size)
from tetrais_layout import Dims

COLORS: Dict[str, Tuple[int, int, int]] = {
    "I": (102, 224, 255),
    "J": (106, 119, 255),
    "L": (255, 158, 94),
    "O": (255, 224, 102),
    "S": (94, 224, 142),
    "T": (200, 119, 255),
    "Z": (255, 102, 119),
}
SPITE_MARK = (255, 40, 40)
TEXT = (200, 210, 240)
DIM_TEXT = (165, 175, 215)


def lighten(col: Tuple[int, int, int], amount: float) -> Tuple[int, int, int]:
    return tuple(int(c + (255 - c) * amount) for c in col)


@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    ranking: Tuple[str, ...] = ()
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    ranking_s: List[pygame.Surface] = field(default_factory=list)
    controls: Optional[list] = None


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""

    def __init__(self, dims: Dims, font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10, 13, 34))
        grid_col = (40, 50, 90)
        cols, rows = d.board_w // d.cell, d.board_h // d.cell
        for x in range(cols + 1):
            X = d.board_x + x * d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(rows + 1):
            Y = d.board_y + y * d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21, 25, 53), panel_rect)
        pygame.draw.rect(self.bg, (50, 60, 100), panel_rect, 1)

    # ---------- Cell sprites per kind and state ----------
    def _make_cells(self):
        c = self.dims.cell
        self.sprites: Dict[Tuple[str, str], pygame.Surface] = {}
        for kind, col in COLORS.items():
            for state, shade in ((MERGED, col), (PLAYER, lighten(col, 0.2)),
                                 (FALLING, lighten(col, 0.55))):
                s = pygame.Surface((c - 2, c - 2))
                s.fill(shade)
                self.sprites[(kind, state)] = s
            g = pygame.Surface((c - 8, c - 8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0, 0, c - 8, c - 8), 2)
            self.sprites[(kind, GHOST)] = g
        self.spite_mark = pygame.Surface((c - 2, c - 2), pygame.SRCALPHA)
        pygame.draw.line(self.spite_mark, SPITE_MARK, (3, 3), (c - 6, c - 6), 2)
        pygame.draw.line(self.spite_mark, SPITE_MARK, (c - 6, 3), (3, c - 6), 2)

    def redraw_static(self, screen: pygame.Surface):
        screen.blit(self.bg, (0, 0))

    # ---------- Board ----------
    def draw_board(self, screen: pygame.Surface, frame: Board):
        """Blit the visible rows of a composed frame; buffer rows stay hidden."""
        d = self.dims
        width, height = board_size(frame)
        for y in range(BUFFER_ROWS, height):
            for x in range(width):
                cell = frame[y][x]
                if cell.state == CLEAR:
                    continue
                sprite = self.sprites.get((cell.kind, cell.state))
                if sprite is None:
                    continue
                inset = 4 if cell.state == GHOST else 1
                rx = d.board_x + x * d.cell + inset
                ry = d.board_y + (y - BUFFER_ROWS) * d.cell + inset
                screen.blit(sprite, (rx, ry))
                if cell.spite:
                    screen.blit(self.spite_mark, (rx, ry))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, score: int, level: int, lines: int,
                       ranking: Sequence[str], weights: Optional[Sequence[float]]):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("TetrAIs", True, (197, 202, 233))
        if score != self.hud.score:
            self.hud.score = score
            self.hud.score_s = f.render(f"Score: {score}", True, TEXT)
        if level != self.hud.level:
            self.hud.level = level
            self.hud.level_s = f.render(f"Level: {level}", True, TEXT)
        if lines != self.hud.lines:
            self.hud.lines = lines
            self.hud.lines_s = f.render(f"Lines: {lines}", True, TEXT)
        if tuple(ranking) != self.hud.ranking:
            self.hud.ranking = tuple(ranking)
            self.hud.ranking_s = []
            for i, key in enumerate(ranking):
                odds = f"{weights[i] * 100:4.0f}%" if weights and i < len(weights) else "   ?"
                self.hud.ranking_s.append(f.render(f"{key} {odds}", True, COLORS.get(key, TEXT)))
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        if self.hud.score_s: screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        if self.hud.level_s: screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        if self.hud.lines_s: screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Worst -> best:", True, TEXT), (d.panel_x + 12, d.panel_y + 126))
        y = d.panel_y + 150
        for surf in self.hud.ranking_s:
            screen.blit(surf, (d.panel_x + 20, y)); y += 20
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, TEXT),
                f.render("←/→ Move", True, DIM_TEXT),
                f.render("↓ Soft drop", True, DIM_TEXT),
                f.render("↑ Rot CW  Z Rot CCW", True, DIM_TEXT),
                f.render("Space Hard drop", True, DIM_TEXT),
                f.render("P Pause • R Restart", True, DIM_TEXT),
                f.render("F1 Settings", True, DIM_TEXT),
            ]
        y = d.panel_y + 310
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

    def draw_banner(self, screen: pygame.Surface, big_font: pygame.font.Font, text: str):
        d = self.dims
        msg = big_font.render(text, True, (255, 220, 220))
        rect = msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2))
        screen.blit(msg, rect)
