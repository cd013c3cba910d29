"""
High score persistence.

A store only knows how to load and save one integer. HighScore wraps a
store, loads once when constructed and writes back only when a finished
game beats the stored value, so the persisted number never goes down.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


def _coerce_score(value) -> Optional[int]:
    # bool is an int subclass; a stored true/false is not a score
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


class MemoryHighScoreStore:
    """Process-local store, used by tests and by --no-save."""

    def __init__(self, value: Optional[int] = None):
        self.value = value
        self.saves = 0

    def load(self) -> Optional[int]:
        return self.value

    def save(self, value: int) -> None:
        self.value = value
        self.saves += 1


class JsonHighScoreStore:
    """Keeps {"high_score": N} in a small JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[int]:
        """Return the stored score, or None when the file is missing or unusable."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return None

        score = _coerce_score(data.get("high_score")) if isinstance(data, dict) else None
        if score is None:
            logger.warning("Ignoring malformed high score file %s", self.path)
        return score

    def save(self, value: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"high_score": value}, f, indent=2)


class HighScore:
    def __init__(self, store):
        self.store = store
        self.value = store.load() or 0

    def record(self, score: int) -> bool:
        """
        Offer a finished game's score.

        Returns True when it set a new high score. A failed save is logged
        and the in-memory value still updates for this session.
        """
        if score <= self.value:
            return False
        self.value = score
        logger.info("New high score: %d", score)
        try:
            self.store.save(score)
        except OSError as e:
            logger.warning("Could not save high score: %s", e)
        return True
