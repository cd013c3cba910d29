import os
import random

import pytest

# Headless pygame for the renderer tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from wrapsnake.game import Direction, GameState, Phase, new_game_state  # noqa: E402


@pytest.fixture
def make_state():
    """Build a running GameState with an explicit body, heading and food."""

    def _make(snake, direction=Direction.RIGHT, food=(0, 0), grid_size=5, score=0, pending=None):
        return GameState(
            grid_size=grid_size,
            snake=list(snake),
            direction=direction,
            pending=pending or direction,
            food=food,
            score=score,
            phase=Phase.RUNNING,
            rng=random.Random(0),
        )

    return _make


@pytest.fixture
def state():
    return new_game_state(grid_size=10, seed=0)


@pytest.fixture
def dying_state(make_state):
    """Length-5 snake heading down whose queued right turn runs into its own body."""
    return make_state(
        [(2, 2), (2, 1), (3, 1), (3, 2), (3, 3)],
        direction=Direction.DOWN,
        pending=Direction.RIGHT,
        grid_size=6,
        score=30,
    )
