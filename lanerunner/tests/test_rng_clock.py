# lanerunner/tests/test_rng_clock.py
import math

import pytest

from lanerunner.game.clock import SimulationClock
from lanerunner.game.config import MAX_DT
from lanerunner.game.rng import RandomSequence


def test_xorshift_reference_values():
    rng = RandomSequence(42)
    assert rng.next() == pytest.approx(0.355432)
    assert rng.state == 11355432
    assert rng.next() == pytest.approx(0.018348)
    assert rng.next() == pytest.approx(0.557059)


def test_zero_seed_falls_back_to_fixed_state():
    rng = RandomSequence(0)
    rng.next()
    assert rng.state == 2714967881


def test_same_seed_same_sequence_and_range():
    a, b = RandomSequence(2024), RandomSequence(2024)
    for _ in range(500):
        x = a.next()
        assert x == b.next()
        assert 0.0 <= x < 1.0


def test_default_seed_is_32_bit_and_reseed_restarts():
    rng = RandomSequence()
    assert 0 <= rng.seed < 2**32
    first = [rng.next() for _ in range(3)]
    rng.reseed(rng.seed)
    assert [rng.next() for _ in range(3)] == first


def test_clock_first_tick_is_zero_then_clamped():
    clock = SimulationClock()
    assert clock.tick(10.0) == 0.0
    assert clock.tick(10.016) == pytest.approx(0.016)
    # a long stall is clamped
    assert clock.tick(15.0) == MAX_DT


def test_clock_rejects_backwards_and_nan():
    clock = SimulationClock()
    clock.tick(5.0)
    assert clock.tick(4.0) == 0.0
    assert clock.tick(math.nan) == 0.0
    assert clock.tick(4.02) == pytest.approx(0.02)


def test_clock_reset_restarts_timing():
    clock = SimulationClock()
    clock.tick(1.0)
    clock.reset()
    assert clock.tick(100.0) == 0.0
