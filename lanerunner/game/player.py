# lanerunner/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from .config import (
    LANES, START_LANE, GRAVITY, JUMP_VELOCITY, LIFT_OFF_OFFSET,
    SLIDE_DURATION, JUMP_CLEAR_THRESHOLD
)


class PlayerMode(Enum):
    GROUNDED = "grounded"
    JUMPING = "jumping"
    SLIDING = "sliding"


@dataclass
class PlayerState:
    """
    Lane runner avatar:
    - lane is discrete, clamped to [0, LANES-1]
    - vertical_offset = 0 on the ground, negative while airborne
    - jump and slide are only accepted from GROUNDED, never chained
    """
    lane: int = START_LANE
    vertical_offset: float = 0.0
    vertical_velocity: float = 0.0
    mode: PlayerMode = PlayerMode.GROUNDED
    slide_remaining: float = 0.0

    @property
    def grounded(self) -> bool:
        return self.mode is PlayerMode.GROUNDED

    @property
    def sliding(self) -> bool:
        return self.mode is PlayerMode.SLIDING

    def cleared_ground_hazard(self) -> bool:
        """True once the jump is high enough to pass over a rock."""
        return self.vertical_offset < JUMP_CLEAR_THRESHOLD

    def request_lane_change(self, direction: int):
        if direction == 0:
            return
        step = 1 if direction > 0 else -1
        self.lane = max(0, min(LANES - 1, self.lane + step))

    def request_jump(self) -> bool:
        if not self.grounded:
            return False
        self.mode = PlayerMode.JUMPING
        self.vertical_velocity = JUMP_VELOCITY
        self.vertical_offset = LIFT_OFF_OFFSET
        return True

    def request_slide(self) -> bool:
        if not self.grounded:
            return False
        self.mode = PlayerMode.SLIDING
        self.slide_remaining = SLIDE_DURATION
        return True

    def advance(self, dt: float):
        """Integrate the jump arc or count down the slide."""
        if self.mode is PlayerMode.JUMPING:
            self.vertical_velocity += GRAVITY * dt
            self.vertical_offset += self.vertical_velocity * dt
            if self.vertical_offset >= 0.0:
                # landed
                self.vertical_offset = 0.0
                self.vertical_velocity = 0.0
                self.mode = PlayerMode.GROUNDED
        elif self.mode is PlayerMode.SLIDING:
            self.slide_remaining -= dt
            if self.slide_remaining <= 0.0:
                self.slide_remaining = 0.0
                self.mode = PlayerMode.GROUNDED
