# lanerunner/game/highscore.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from .config import HISCORE_FILE

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Best score on disk as a tiny JSON file: {"best": <int>}."""

    def __init__(self, path: str | Path = HISCORE_FILE):
        self.path = Path(path).expanduser()

    def best(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return max(0, int(data.get("best", 0)))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("ignoring unreadable high score file %s: %s", self.path, e)
            return 0

    def submit(self, score: int) -> int:
        """Record a finished run; returns the best score after it."""
        best = max(int(score), self.best())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"best": best}), encoding="utf-8")
        return best
