import logging
import sys

import pygame

from tetrais_config import CONFIG
from tetrais_engine import CASCADING, HIGH_SCORE_ENTRY, PLAYING, TERMINAL_STATES, Game
from tetrais_input import ShiftRepeat
from tetrais_layout import compute_dims
from tetrais_overlay import Overlay
from tetrais_render import RenderAssets

logger = logging.getLogger("tetrais")


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"], format="%(asctime)s %(name)s %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    best = {"score": 0}

    def is_high_score(score, lines):
        if score > best["score"]:
            best["score"] = score
            return True
        return False

    game = Game(dict(CONFIG), is_high_score=is_high_score)
    dims = compute_dims(game.config)
    screen = recreate_window(dims)
    pygame.display.set_caption("TetrAIs")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 36)
    render = RenderAssets(dims, font)
    clock = pygame.time.Clock()

    shift = ShiftRepeat(game.config)
    overlay = Overlay(game.config)
    paused = False
    game.start()

    while True:
        dt = clock.tick(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                if e.key == pygame.K_F1 or overlay.active:
                    overlay.handle(e)
                    continue
                if e.key == pygame.K_r:
                    paused = False
                    game.start(); continue
                if e.key == pygame.K_p and game.state in (PLAYING, CASCADING):
                    paused = not paused
                if game.state == HIGH_SCORE_ENTRY and e.key == pygame.K_RETURN:
                    game.finish_high_score_entry()
                if e.key == pygame.K_UP:
                    game.rotate("cw")
                if e.key == pygame.K_z:
                    game.rotate("ccw")
                if e.key == pygame.K_SPACE:
                    game.hard_drop()
                if e.key == pygame.K_DOWN:
                    game.soft_drop(True)
            if e.type == pygame.KEYUP and e.key == pygame.K_DOWN:
                game.soft_drop(False)

        # Pause and the settings overlay suspend the engine without touching its state
        game.suspended = paused or overlay.active
        if not game.suspended:
            keys = pygame.key.get_pressed()
            step = shift.update(dt, keys[pygame.K_LEFT], keys[pygame.K_RIGHT])
            if step:
                game.move(step)
        for event in game.advance(dt):
            if event.kind in ("lines_cleared", "cascade_clear"):
                logger.debug("%s: %s", event.kind, event.data)

        render.redraw_static(screen)
        render.draw_board(screen, game.frame())
        render.draw_panel_hud(screen, game.score, game.level, game.lines,
                              [m.key for m in game.suggestions],
                              game.config.get("SUGGESTION_WEIGHTS"))
        if game.state == HIGH_SCORE_ENTRY:
            render.draw_banner(screen, big_font, "HIGH SCORE! (Enter)")
        elif game.state in TERMINAL_STATES:
            render.draw_banner(screen, big_font, "GAME OVER (R to Restart)")
        elif paused:
            render.draw_banner(screen, big_font, "PAUSED (P to Resume)")
        overlay.draw(screen, font, dims.total_w, dims.total_h)
        pygame.display.flip()


if __name__ == '__main__':
    main()
