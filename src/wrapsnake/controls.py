# controls.py
from __future__ import annotations

from typing import Optional, Tuple
import logging

import pygame  # type: ignore

from .config import CFG
from .game import Direction, GameState

logger = logging.getLogger(__name__)

KEY_BINDINGS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
}


def swipe_direction(dx: float, dy: float, threshold: float = 0) -> Optional[Direction]:
    """
    Turn a drag vector (end - start, screen coordinates, y grows downward)
    into a direction. The dominant axis wins; ties count as vertical.
    """
    if max(abs(dx), abs(dy)) < threshold or (dx == 0 and dy == 0):
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class InputRouter:
    """Feeds keyboard, on-screen button and swipe input into GameState.set_direction."""

    def __init__(self, state: GameState, swipe_threshold: int = CFG.swipe_threshold):
        self.state = state
        self.swipe_threshold = swipe_threshold
        self._touch_start: Optional[Tuple[float, float]] = None

    def request(self, direction: Direction) -> bool:
        if not self.state.running:
            return False
        accepted = self.state.set_direction(direction)
        if not accepted:
            logger.debug("Ignored reversal to %s", direction.name)
        return accepted

    def key_down(self, key: int) -> bool:
        direction = KEY_BINDINGS.get(key)
        if direction is None:
            return False
        return self.request(direction)

    def button(self, direction: Direction) -> bool:
        return self.request(direction)

    # ----- swipe -----
    def touch_start(self, x: float, y: float) -> None:
        if not self.state.running:
            self._touch_start = None
            return
        self._touch_start = (x, y)

    def touch_move(self, x: float, y: float) -> bool:
        """Fire as soon as the drag passes the threshold, then wait for the next touch."""
        return self._try_swipe(x, y)

    def touch_end(self, x: float, y: float) -> bool:
        fired = self._try_swipe(x, y)
        self._touch_start = None
        return fired

    def _try_swipe(self, x: float, y: float) -> bool:
        if self._touch_start is None or not self.state.running:
            return False
        sx, sy = self._touch_start
        direction = swipe_direction(x - sx, y - sy, self.swipe_threshold)
        if direction is None:
            return False
        self._touch_start = None
        return self.request(direction)
