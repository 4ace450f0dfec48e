# lanerunner/env/observations.py
from __future__ import annotations
from typing import List, Tuple
import numpy as np

from lanerunner.game.config import LANES, JUMP_VELOCITY, GRAVITY, COLLISION_BAND
from lanerunner.game.engine import RunSnapshot
from lanerunner.game.obstacles import ObstacleKind
from lanerunner.game.player import PlayerMode

KIND_ORDER: Tuple[ObstacleKind, ...] = (ObstacleKind.ROCK, ObstacleKind.BAR, ObstacleKind.WALL)
OBS_SIZE = 5 + LANES * len(KIND_ORDER)

# Apex of a jump: v^2 / 2g
MAX_LIFT = (JUMP_VELOCITY * JUMP_VELOCITY) / (2.0 * GRAVITY)
# Multiplier gain mapped onto [0,1]; reached after ~4.8 min at the default ramp
SPEED_NORM_SPAN = 10.0


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _nearest_ahead(snap: RunSnapshot, lane: int, kind: ObstacleKind) -> float:
    """
    Normalised distance from the ground line up the track to the nearest obstacle
    of this kind in this lane that can still hit the player.
    1.0 = nothing coming.
    """
    best = 1.0
    span = max(1.0, snap.ground_y + COLLISION_BAND)
    for o in snap.obstacles:
        if o.lane != lane or o.kind is not kind:
            continue
        gap = snap.ground_y - o.y
        if gap <= -COLLISION_BAND:
            continue  # already behind the player
        best = min(best, _clamp01(max(0.0, gap) / span))
    return best


def build_observation(snap: RunSnapshot) -> np.ndarray:
    """
    Returns a fixed (14,) float32 vector:
      [ lane_norm, lift_norm, jumping, sliding, speed_norm,
        rock@L0, bar@L0, wall@L0,
        rock@L1, bar@L1, wall@L1,
        rock@L2, bar@L2, wall@L2 ]
    - lane_norm  in [0,1] (0 = leftmost lane)
    - lift_norm  in [0,1] (height above ground / jump apex)
    - jumping, sliding are 0.0/1.0
    - per-lane distances in [0,1], 1.0 sentinel when nothing is ahead
    """
    lane_norm = snap.lane / max(1, LANES - 1)
    lift_norm = _clamp01(-snap.vertical_offset / MAX_LIFT)
    jumping = 1.0 if snap.mode is PlayerMode.JUMPING else 0.0
    sliding = 1.0 if snap.mode is PlayerMode.SLIDING else 0.0
    speed_norm = _clamp01((snap.speed_multiplier - 1.0) / SPEED_NORM_SPAN)

    feats: List[float] = [lane_norm, lift_norm, jumping, sliding, speed_norm]
    for lane in range(LANES):
        for kind in KIND_ORDER:
            feats.append(_nearest_ahead(snap, lane, kind))

    return np.asarray(feats, dtype=np.float32)
