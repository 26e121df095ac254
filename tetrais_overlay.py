from typing import Any, Dict

import pygame


class Overlay:
    """Live settings panel. Edits the engine's config dict in place."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.active = False
        self.items = [
            ("CASCADE_STEP_MS", "Cascade step (ms)", 50, 2000, 50),
            ("SOFT_DROP_MS", "Soft drop (ms)", 10, 200, 5),
            ("DAS_MS", "DAS (ms)", 0, 400, 10),
            ("ARR_MS", "ARR (ms, 0=instant)", 0, 200, 5),
            ("SPITE_MODE", "Spite pieces", False, True, None),
        ]
        self.index = 0

    def toggle(self):
        self.active = not self.active

    def handle(self, event: pygame.event.Event):
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_ESCAPE, pygame.K_F1):
            self.toggle()
            return
        if event.key == pygame.K_UP:
            self.index = (self.index - 1) % len(self.items)
            return
        if event.key == pygame.K_DOWN:
            self.index = (self.index + 1) % len(self.items)
            return
        key, label, lo, hi, step = self.items[self.index]
        val = self.config[key]
        if isinstance(lo, bool):
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_LEFT, pygame.K_RIGHT):
                self.config[key] = not val
        elif event.key == pygame.K_LEFT:
            self.config[key] = max(lo, val - step)
        elif event.key == pygame.K_RIGHT:
            self.config[key] = min(hi, val + step)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, w: int, h: int):
        if not self.active:
            return
        s = pygame.Surface((w - 80, h - 80), pygame.SRCALPHA)
        s.fill((20, 25, 40, 230))
        screen.blit(s, (40, 40))
        screen.blit(font.render("SETTINGS (F1/Esc to close)", True, (230, 240, 255)), (60, 56))
        y = 100
        for i, (key, label, lo, hi, step) in enumerate(self.items):
            col = (255, 255, 255) if i == self.index else (200, 210, 235)
            screen.blit(font.render(f"{label}: {self.config[key]}", True, col), (60, y))
            y += 28
