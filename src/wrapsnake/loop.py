# loop.py
from __future__ import annotations

from typing import Callable, Optional
import logging

from .config import CFG
from .game import GameState, TickOutcome

logger = logging.getLogger(__name__)


class LoopAlreadyRunning(RuntimeError):
    """start() was called while a previous loop was still ticking."""


class GameLoop:
    """
    Fixed-interval tick -> render -> reschedule driver.

    The host event loop calls pump() with its clock (pygame.time.get_ticks()
    in the app, a plain int in tests). A tick runs when its deadline has
    passed; the next deadline is set only after tick and render completed,
    and only while the game is still running. Once the snake dies the loop
    clears its deadline and stays idle until start() is called again.
    """

    def __init__(
        self,
        state: GameState,
        render: Callable[[GameState], None],
        interval_ms: int = CFG.tick_ms,
        on_game_over: Optional[Callable[[int], object]] = None,
    ):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.state = state
        self.render = render
        self.interval_ms = interval_ms
        self.on_game_over = on_game_over
        self._next_tick: Optional[int] = None

    @property
    def active(self) -> bool:
        return self._next_tick is not None

    @property
    def next_tick(self) -> Optional[int]:
        return self._next_tick

    def start(self, now_ms: int) -> None:
        """Begin ticking. Starts a fresh game unless the state is already running."""
        if self.active:
            raise LoopAlreadyRunning("game loop is already running")
        if not self.state.running:
            self.state.reset()
        self.render(self.state)
        self._next_tick = now_ms
        logger.debug("Loop started at %d ms, interval %d ms", now_ms, self.interval_ms)

    def pump(self, now_ms: int) -> bool:
        """Run at most one due tick. Returns True if a tick happened."""
        if self._next_tick is None or now_ms < self._next_tick:
            return False

        outcome = self.state.tick()

        if self.state.running:
            self.render(self.state)
            self._next_tick = now_ms + self.interval_ms
            return True

        # Self-terminating: no reschedule once the game is over.
        # Game-over hook runs before the final frame is drawn
        self._next_tick = None
        logger.debug("Loop stopped after %s at %d ms", outcome.value, now_ms)
        if outcome is TickOutcome.DIED and self.on_game_over is not None:
            self.on_game_over(self.state.score)
        self.render(self.state)
        return True
