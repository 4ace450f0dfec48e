# lanerunner/env/lr_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from lanerunner.game.config import WIDTH, HEIGHT
from lanerunner.game.engine import Intent, RunEngine
from lanerunner.game.render import draw_world
from lanerunner.env.observations import build_observation, OBS_SIZE

# Action index -> intents applied at the start of the decision step
ACTIONS = (
    (),                    # 0 = NOOP
    (Intent.LANE_LEFT,),   # 1
    (Intent.LANE_RIGHT,),  # 2
    (Intent.JUMP,),        # 3
    (Intent.SLIDE,),       # 4
)


class LREnv(gym.Env):
    """
    Lane Runner Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (14,), float32, see observations.build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        # Internal sim timing
        self.sim_fps = 60
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.Discrete(len(ACTIONS))
        self.observation_space = gym.spaces.Box(
            low=np.zeros(OBS_SIZE, dtype=np.float32),
            high=np.ones(OBS_SIZE, dtype=np.float32),
            dtype=np.float32,
        )

        # --- Runtime state ---
        self.engine: Optional[RunEngine] = None
        self.timestep: int = 0
        self.scroll_px: float = 0.0

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # An explicit seed drives the obstacle RNG directly; without one every
        # episode gets a fresh seed (reported in info, so it can be replayed).
        # Drawn from `random`, not np_random, so a seedless reset leaves np_random alone.
        run_seed = int(seed) if seed is not None else random.randrange(1, 2**32)

        if self.engine is None:
            self.engine = RunEngine(seed=run_seed, track_length=HEIGHT)
        else:
            self.engine.reset(seed=run_seed)

        self.timestep = 0
        self.scroll_px = 0.0

        obs = build_observation(self.engine.snapshot())
        info = {"seed": self.engine.seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.engine is not None, "call reset() before step()"

        # Intents only on the first sub-step: they are fire-once
        intents = ACTIONS[int(action)]
        for _ in range(self.frame_skip):
            result = self.engine.step(self.dt, intents)
            self.scroll_px += self.engine.speed * self.dt
            intents = ()
            if not result.alive:
                break

        reward = 1.0 if result.alive else -1.0

        self.timestep += 1
        terminated = not result.alive
        truncated = (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions)

        obs = build_observation(self.engine.snapshot())
        info = {
            "score": result.score,
            "timestep": self.timestep,
            "seed": self.engine.seed,
            "mode": self.engine.player.mode.value,
            "death_cause": self.engine.death_cause.value if self.engine.death_cause else None,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, bool(truncated), info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.engine is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Lane Runner — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()

        draw_world(self.screen, self.engine.snapshot(), self.scroll_px)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
