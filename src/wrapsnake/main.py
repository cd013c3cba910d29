# main.py
from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional

import pygame  # type: ignore

from .config import CFG, Config, DEFAULT_HIGHSCORE_PATH
from .controls import InputRouter
from .game import GameState
from .highscore import HighScore, JsonHighScoreStore, MemoryHighScoreStore
from .loop import GameLoop
from .render import Renderer, window_size

logger = logging.getLogger(__name__)

QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)
RESTART_KEYS = (pygame.K_r, pygame.K_RETURN, pygame.K_SPACE)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="wrapsnake", description="Snake on a wrapping grid.")
    parser.add_argument("--size", type=int, default=CFG.window_size, help="board size in pixels")
    parser.add_argument("--cell", type=int, default=CFG.cell_size, help="cell size in pixels")
    parser.add_argument("--tick-ms", type=int, default=CFG.tick_ms, help="milliseconds between moves")
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument("--swipe-threshold", type=int, default=CFG.swipe_threshold,
                        help="minimum drag in pixels before a swipe turns the snake")
    parser.add_argument("--highscore-file", type=Path, default=DEFAULT_HIGHSCORE_PATH)
    parser.add_argument("--no-save", action="store_true", help="keep the high score in memory only")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        seed=args.seed,
        tick_ms=args.tick_ms,
        window_size=args.size,
        cell_size=args.cell,
        swipe_threshold=args.swipe_threshold,
        highscore_path=args.highscore_file,
        persist=not args.no_save,
    )


class App:
    """Owns the pygame window and pumps its events into the game objects."""

    def __init__(self, cfg: Config):
        self.cfg = cfg
        board_px = cfg.grid_size * cfg.cell_size
        self.screen = pygame.display.set_mode(window_size(board_px))
        pygame.display.set_caption("Snake")
        self.clock = pygame.time.Clock()
        self.renderer = Renderer(self.screen, pygame.font.SysFont(None, 24), board_px, cfg.cell_size)

        store = JsonHighScoreStore(cfg.highscore_path) if cfg.persist else MemoryHighScoreStore()
        self.high_score = HighScore(store)

        self.state = GameState(grid_size=cfg.grid_size, rng=random.Random(cfg.seed))
        self.router = InputRouter(self.state, cfg.swipe_threshold)
        self.loop = GameLoop(self.state, self.draw, cfg.tick_ms, on_game_over=self.high_score.record)
        self.games = 0

    def draw(self, state: GameState) -> None:
        self.renderer.draw(state, self.high_score.value)
        pygame.display.flip()

    def restart(self) -> None:
        # Only from a stopped loop; restarting mid-game would double the tick rate
        if self.loop.active:
            return
        self.loop.start(pygame.time.get_ticks())
        self.games += 1
        logger.info("Game %d started (best so far %d)", self.games, self.high_score.value)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Route one event. Returns False to quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key in QUIT_KEYS:
                return False
            if event.key in RESTART_KEYS and not self.state.running:
                self.restart()
            else:
                self.router.key_down(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if not self.state.running and self.renderer.restart_hit(event.pos):
                self.restart()
                return True
            direction = self.renderer.button_at(event.pos)
            if direction is not None:
                self.router.button(direction)
            elif self.renderer.on_board(event.pos):
                self.router.touch_start(*event.pos)
        elif event.type == pygame.MOUSEMOTION and event.buttons[0]:
            self.router.touch_move(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.router.touch_end(*event.pos)
        elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP):
            # Finger coordinates are normalized to the window
            w, h = self.screen.get_size()
            x, y = event.x * w, event.y * h
            if event.type == pygame.FINGERDOWN:
                self.router.touch_start(x, y)
            elif event.type == pygame.FINGERMOTION:
                self.router.touch_move(x, y)
            else:
                self.router.touch_end(x, y)
        return True

    def run(self) -> int:
        self.restart()
        running = True
        while running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
                    break
            self.loop.pump(pygame.time.get_ticks())
            self.clock.tick(60)  # movement is paced by the loop's deadline
        return self.games


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    cfg = config_from_args(args)

    pygame.init()
    try:
        app = App(cfg)
        games = app.run()
        print(f"Played {games} game(s). Best score: {app.high_score.value}")
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
