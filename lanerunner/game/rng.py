# lanerunner/game/rng.py
from __future__ import annotations
import random
from .config import RNG_FALLBACK_STATE, RNG_RESOLUTION

_MASK32 = 0xFFFFFFFF


class RandomSequence:
    """
    xorshift32 generator used by the obstacle spawner.
    - one 32-bit unsigned state word
    - next() returns a float in [0, 1)
    Same seed -> same sequence, so runs can be reproduced from the HUD seed.
    """
    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.randrange(1, 2**32)
        self.seed = int(seed) & _MASK32
        self.state = self.seed

    def next(self) -> float:
        x = self.state or RNG_FALLBACK_STATE
        x ^= (x << 13) & _MASK32
        x ^= x >> 17
        x ^= (x << 5) & _MASK32
        self.state = x & _MASK32
        return (self.state % RNG_RESOLUTION) / RNG_RESOLUTION

    def reseed(self, seed: int):
        self.seed = int(seed) & _MASK32
        self.state = self.seed
