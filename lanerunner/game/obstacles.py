# lanerunner/game/obstacles.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from .config import (
    LANES, TRACK_LENGTH, SPAWN_Y, PRUNE_MARGIN,
    BASE_SPAWN_INTERVAL_MS, MIN_SPAWN_INTERVAL_MS, SPAWN_DECAY_RATE,
    ROCK_CHANCE, BAR_CHANCE
)
from .rng import RandomSequence

logger = logging.getLogger(__name__)


class ObstacleKind(Enum):
    ROCK = "rock"   # ground hazard, cleared by a jump
    BAR = "bar"     # overhead hazard, cleared by a slide
    WALL = "wall"   # full block, only a lane change avoids it


@dataclass
class Obstacle:
    kind: ObstacleKind
    lane: int
    y: float   # progress along the track, grows as the world scrolls


def spawn_interval(distance: float) -> float:
    """Current spawn interval (ms): shrinks linearly with distance down to the floor."""
    return max(MIN_SPAWN_INTERVAL_MS, BASE_SPAWN_INTERVAL_MS - distance * SPAWN_DECAY_RATE)


class ObstacleField:
    """
    Owns the live obstacles of one run.
    Spawns on a timer whose interval follows the difficulty ramp, scrolls
    everything toward the player and drops what has left the track.
    """
    def __init__(self, rng: RandomSequence, track_length: float = TRACK_LENGTH):
        self.rng = rng
        self.track_length = float(track_length)
        self.obstacles: List[Obstacle] = []
        self.spawn_timer = 0.0   # ms
        self.spawn_count = 0

    def clear(self):
        self.obstacles = []
        self.spawn_timer = 0.0
        self.spawn_count = 0

    def place(self, kind: ObstacleKind, lane: int, y: float) -> Obstacle:
        """Insert an obstacle directly (scripted setups, tests)."""
        if not 0 <= lane < LANES:
            raise ValueError(f"lane must be in [0, {LANES - 1}], got {lane}")
        obstacle = Obstacle(kind=kind, lane=int(lane), y=float(y))
        self.obstacles.append(obstacle)
        return obstacle

    def spawn_one(self) -> List[Obstacle]:
        """Roll one spawn event: a rock, a bar, or a pair of walls with one lane left open."""
        type_roll = self.rng.next()
        lane = int(self.rng.next() * LANES)
        self.spawn_count += 1

        if type_roll < ROCK_CHANCE:
            created = [self.place(ObstacleKind.ROCK, lane, SPAWN_Y)]
        elif type_roll < BAR_CHANCE:
            created = [self.place(ObstacleKind.BAR, lane, SPAWN_Y)]
        else:
            # second lane is offset by 1 or 2, so with 3 lanes the two never coincide
            blocked = int(self.rng.next() * LANES)
            blocked2 = (blocked + (1 if self.rng.next() < 0.5 else 2)) % LANES
            created = [
                self.place(ObstacleKind.WALL, blocked, SPAWN_Y),
                self.place(ObstacleKind.WALL, blocked2, SPAWN_Y),
            ]

        logger.debug("spawn #%d: %s", self.spawn_count,
                     ", ".join(f"{o.kind.value}@{o.lane}" for o in created))
        return created

    def update(self, dt: float, speed: float, distance: float) -> Optional[List[Obstacle]]:
        """Run the spawn timer, then scroll and prune. Returns the obstacles spawned this tick, if any."""
        spawned = None
        self.spawn_timer += dt * 1000.0
        if self.spawn_timer >= spawn_interval(distance):
            self.spawn_timer = 0.0
            spawned = self.spawn_one()
        self.advance(dt, speed)
        return spawned

    def advance(self, dt: float, speed: float):
        dy = speed * dt
        for obstacle in self.obstacles:
            obstacle.y += dy

        # Remove everything that has scrolled past the track (rebuild keeps insertion order)
        limit = self.track_length + PRUNE_MARGIN
        self.obstacles = [o for o in self.obstacles if o.y <= limit]

    def in_band(self, ground_y: float, band: float) -> List[Obstacle]:
        return [o for o in self.obstacles if abs(o.y - ground_y) < band]
