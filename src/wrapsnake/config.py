from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# ----- Window & grid -----
WINDOW_SIZE = 400
CELL_SIZE = 20
GRID_SIZE = WINDOW_SIZE // CELL_SIZE
HUD_HEIGHT = 32
PAD_HEIGHT = 144

# ----- Colors -----
BG    = (15, 17, 35)
PANEL = (28, 31, 58)
GREEN = (131, 212, 108)
HEAD  = (170, 240, 150)
RED   = (255, 68, 68)
TEXT  = (220, 220, 230)
BUTTON = (52, 57, 98)

# ----- Rules -----
FOOD_REWARD = 10
START_LENGTH = 3

DEFAULT_HIGHSCORE_PATH = Path.home() / ".wrapsnake" / "highscore.json"


# ----- Tunables -----
@dataclass
class Config:
    seed: Optional[int] = None
    tick_ms: int = 150
    window_size: int = WINDOW_SIZE
    cell_size: int = CELL_SIZE
    swipe_threshold: int = 30
    highscore_path: Path = DEFAULT_HIGHSCORE_PATH
    persist: bool = True

    def __post_init__(self):
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.window_size // self.cell_size < START_LENGTH:
            raise ValueError(
                f"window_size={self.window_size} with cell_size={self.cell_size} "
                f"gives fewer than {START_LENGTH} cells per side"
            )
        if self.swipe_threshold < 0:
            raise ValueError("swipe_threshold must be >= 0")
        self.highscore_path = Path(self.highscore_path).expanduser()

    @property
    def grid_size(self) -> int:
        return self.window_size // self.cell_size


CFG = Config()
