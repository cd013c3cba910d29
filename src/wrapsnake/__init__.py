# src/wrapsnake/__init__.py
"""Snake on a wrapping grid, rendered with pygame."""

from .game import Direction, GameState, Phase, TickOutcome, new_game_state
from .loop import GameLoop, LoopAlreadyRunning
from .controls import InputRouter, swipe_direction
from .highscore import HighScore, JsonHighScoreStore, MemoryHighScoreStore

__all__ = [
    "Direction", "GameState", "Phase", "TickOutcome", "new_game_state",
    "GameLoop", "LoopAlreadyRunning",
    "InputRouter", "swipe_direction",
    "HighScore", "JsonHighScoreStore", "MemoryHighScoreStore",
]
