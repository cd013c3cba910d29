# game.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import logging
import random

import numpy as np  # type: ignore

from .config import FOOD_REWARD, GRID_SIZE, START_LENGTH

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# ----- Board cell codes (see GameState.board) -----
EMPTY, BODY, HEAD, FOOD = 0, 1, 2, 3


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


class Phase(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


class TickOutcome(Enum):
    IDLE = "idle"      # state was not running, nothing changed
    MOVED = "moved"
    ATE = "ate"
    DIED = "died"


# ---------- Helpers ----------
def is_opposite(a: Direction, b: Direction) -> bool:
    return a.dx == -b.dx and a.dy == -b.dy


def wrap(position: Position, grid_size: int) -> Position:
    """Fold a position that stepped off one edge back in from the opposite edge."""
    x, y = position
    return (x % grid_size, y % grid_size)


def spawn_food(snake: List[Position], grid_size: int, rng: random.Random) -> Optional[Position]:
    """
    Pick a random free cell by rejection sampling.

    There is no retry cap: on a nearly full board this may take many draws.
    Returns None only when every cell is occupied, since no draw could succeed.
    """
    if len(set(snake)) >= grid_size * grid_size:
        return None
    while True:
        fx = rng.randrange(grid_size)
        fy = rng.randrange(grid_size)
        if (fx, fy) not in snake:
            return (fx, fy)


# ---------- State ----------
@dataclass
class GameState:
    grid_size: int = GRID_SIZE
    snake: List[Position] = field(default_factory=list)   # head at index 0
    direction: Direction = Direction.RIGHT                 # direction of the last move
    pending: Direction = Direction.RIGHT                   # requested direction for the next tick
    food: Optional[Position] = None
    score: int = 0
    phase: Phase = Phase.NOT_STARTED
    final_score: Optional[int] = None
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def head(self) -> Position:
        return self.snake[0]

    def reset(self, grid_size: Optional[int] = None) -> None:
        """Start a fresh game: 3-cell snake centred on the grid, heading right."""
        if grid_size is not None:
            self.grid_size = grid_size
        if self.grid_size < START_LENGTH:
            raise ValueError(f"grid_size must be at least {START_LENGTH}, got {self.grid_size}")

        cx = cy = self.grid_size // 2
        self.snake = [(cx - i, cy) for i in range(START_LENGTH)]
        self.food = spawn_food(self.snake, self.grid_size, self.rng)
        self.direction = Direction.RIGHT
        self.pending = Direction.RIGHT
        self.score = 0
        self.final_score = None
        self.phase = Phase.RUNNING
        logger.info("New game on a %dx%d grid", self.grid_size, self.grid_size)

    def set_direction(self, candidate: Direction) -> bool:
        """Request a turn for the next tick. 180° reversals are ignored."""
        if is_opposite(candidate, self.direction):
            return False
        self.pending = candidate
        return True

    def tick(self) -> TickOutcome:
        """Advance the game by one grid step."""
        if not self.running:
            return TickOutcome.IDLE

        # Commit direction once per tick
        self.direction = self.pending

        hx, hy = self.head
        new_head = wrap((hx + self.direction.dx, hy + self.direction.dy), self.grid_size)

        # Self collision, tail included
        if new_head in self.snake:
            self.phase = Phase.GAME_OVER
            self.final_score = self.score
            logger.info("Game over at %s, score %d", new_head, self.score)
            return TickOutcome.DIED

        self.snake.insert(0, new_head)
        if new_head == self.food:
            self.score += FOOD_REWARD
            self.food = spawn_food(self.snake, self.grid_size, self.rng)
            if self.food is None:
                logger.info("Board is full, no food left to place")
            logger.debug("Ate at %s, score %d, next food %s", new_head, self.score, self.food)
            return TickOutcome.ATE

        self.snake.pop()
        return TickOutcome.MOVED

    def board(self) -> np.ndarray:
        """Grid of cell codes indexed [y, x]: EMPTY, BODY, HEAD, FOOD."""
        grid = np.full((self.grid_size, self.grid_size), EMPTY, dtype=np.int8)
        for x, y in self.snake[1:]:
            grid[y, x] = BODY
        if self.food is not None:
            fx, fy = self.food
            grid[fy, fx] = FOOD
        if self.snake:
            hx, hy = self.head
            grid[hy, hx] = HEAD
        return grid


def new_game_state(grid_size: int = GRID_SIZE, seed: Optional[int] = None) -> GameState:
    """Build a GameState with its own RNG and start it."""
    state = GameState(grid_size=grid_size, rng=random.Random(seed))
    state.reset()
    return state
