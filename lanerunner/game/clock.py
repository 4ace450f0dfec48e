# lanerunner/game/clock.py
from __future__ import annotations
import math
from .config import MAX_DT


class SimulationClock:
    """Turns host frame timestamps (seconds) into clamped step deltas."""

    def __init__(self, max_dt: float = MAX_DT):
        self.max_dt = float(max_dt)
        self.last_timestamp: float | None = None

    def reset(self):
        self.last_timestamp = None

    def tick(self, now: float) -> float:
        now = float(now)
        if not math.isfinite(now):
            return 0.0
        if self.last_timestamp is None:
            self.last_timestamp = now
            return 0.0
        dt = now - self.last_timestamp
        self.last_timestamp = now
        if dt < 0.0:
            return 0.0
        return min(self.max_dt, dt)
