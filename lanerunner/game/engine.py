# lanerunner/game/engine.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple
from .config import (
    TRACK_LENGTH, GROUND_LINE_RATIO, BASE_SPEED, ACCEL_RATE, SCORE_SCALE,
    COLLISION_BAND
)
from .obstacles import Obstacle, ObstacleField, ObstacleKind, spawn_interval
from .player import PlayerMode, PlayerState
from .rng import RandomSequence

logger = logging.getLogger(__name__)


class Intent(Enum):
    """Fire-once player requests, batched per tick by the input layer."""
    LANE_LEFT = "lane_left"
    LANE_RIGHT = "lane_right"
    JUMP = "jump"
    SLIDE = "slide"


@dataclass(frozen=True)
class StepResult:
    score: int
    alive: bool


@dataclass(frozen=True)
class ObstacleView:
    kind: ObstacleKind
    lane: int
    y: float


@dataclass(frozen=True)
class RunSnapshot:
    """Read-only view of a run for drawing and observation building."""
    lane: int
    vertical_offset: float
    mode: PlayerMode
    obstacles: Tuple[ObstacleView, ...]
    score: int
    alive: bool
    speed_multiplier: float
    ground_y: float
    track_length: float


def collides(obstacle: Obstacle, player: PlayerState) -> bool:
    """Clearance rules: a jump clears a rock, a slide clears a bar, nothing clears a wall."""
    if obstacle.lane != player.lane:
        return False
    if obstacle.kind is ObstacleKind.ROCK:
        return not player.cleared_ground_hazard()
    if obstacle.kind is ObstacleKind.BAR:
        return player.mode is not PlayerMode.SLIDING
    return True


def _sanitize_dt(dt) -> float:
    dt = float(dt)
    if not math.isfinite(dt) or dt < 0.0:
        return 0.0
    return dt


class RunEngine:
    """
    One endless run: player, obstacle field and RNG behind a single step().
    step() is a no-op once the run is over; call reset() to play again.
    """
    def __init__(self,
                 seed: int | None = None,
                 track_length: float = TRACK_LENGTH,
                 on_game_over: Optional[Callable[[int], None]] = None):
        self.rng = RandomSequence(seed)
        self.track_length = float(track_length)
        self.ground_y = self.track_length * GROUND_LINE_RATIO
        self.base_speed = BASE_SPEED
        self.on_game_over = on_game_over
        self.reset()

    @property
    def seed(self) -> int:
        """Seed of the current run: reset(seed=engine.seed) replays it."""
        return self.rng.seed

    @property
    def score(self) -> int:
        return int(math.floor(self.distance))

    @property
    def speed(self) -> float:
        return self.base_speed * self.speed_multiplier

    @property
    def spawn_interval(self) -> float:
        return spawn_interval(self.distance)

    def reset(self, seed: int | None = None):
        # Without a seed the stream carries on; its current state becomes the run's seed
        self.rng.reseed(seed if seed is not None else self.rng.state)
        self.player = PlayerState()
        self.field = ObstacleField(self.rng, self.track_length)
        self.distance = 0.0
        self.speed_multiplier = 1.0
        self.elapsed = 0.0
        self.alive = True
        self.death_cause: Optional[ObstacleKind] = None

    def apply_intents(self, intents: Iterable[Intent]):
        for intent in intents:
            if intent is Intent.LANE_LEFT:
                self.player.request_lane_change(-1)
            elif intent is Intent.LANE_RIGHT:
                self.player.request_lane_change(+1)
            elif intent is Intent.JUMP:
                self.player.request_jump()
            elif intent is Intent.SLIDE:
                self.player.request_slide()

    def step(self, dt: float, intents: Iterable[Intent] = ()) -> StepResult:
        if not self.alive:
            return StepResult(self.score, False)

        dt = _sanitize_dt(dt)

        # Input lands before physics so it counts on this very frame
        self.apply_intents(intents)

        # Difficulty ramp + score
        self.speed_multiplier += dt * ACCEL_RATE
        speed = self.speed
        self.distance += speed * dt / SCORE_SCALE
        self.elapsed += dt

        self.player.advance(dt)
        self.field.update(dt, speed, self.distance)

        hit = self._first_collision()
        if hit is not None:
            self._end_run(hit)

        return StepResult(self.score, self.alive)

    def _first_collision(self) -> Optional[Obstacle]:
        for obstacle in self.field.in_band(self.ground_y, COLLISION_BAND):
            if collides(obstacle, self.player):
                return obstacle
        return None

    def _end_run(self, obstacle: Obstacle):
        self.alive = False
        self.death_cause = obstacle.kind
        logger.info("run over: hit %s in lane %d after %.1fs, score=%d, seed=%d",
                    obstacle.kind.value, obstacle.lane, self.elapsed, self.score, self.seed)
        if self.on_game_over is not None:
            self.on_game_over(self.score)

    def snapshot(self) -> RunSnapshot:
        return RunSnapshot(
            lane=self.player.lane,
            vertical_offset=self.player.vertical_offset,
            mode=self.player.mode,
            obstacles=tuple(ObstacleView(o.kind, o.lane, o.y) for o in self.field.obstacles),
            score=self.score,
            alive=self.alive,
            speed_multiplier=self.speed_multiplier,
            ground_y=self.ground_y,
            track_length=self.track_length,
        )
