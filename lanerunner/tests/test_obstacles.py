# lanerunner/tests/test_obstacles.py
import pytest

from lanerunner.game.config import (
    LANES, SPAWN_Y, BASE_SPAWN_INTERVAL_MS, MIN_SPAWN_INTERVAL_MS
)
from lanerunner.game.obstacles import ObstacleField, ObstacleKind, spawn_interval
from lanerunner.game.rng import RandomSequence


class ScriptedRandom:
    """Feeds fixed rolls to the spawner."""
    def __init__(self, values):
        self.values = list(values)

    def next(self):
        return self.values.pop(0)


def test_rock_and_bar_rolls():
    field = ObstacleField(ScriptedRandom([0.10, 0.70, 0.70, 0.10]))
    rock, = field.spawn_one()
    assert (rock.kind, rock.lane, rock.y) == (ObstacleKind.ROCK, 2, SPAWN_Y)
    bar, = field.spawn_one()
    assert (bar.kind, bar.lane) == (ObstacleKind.BAR, 0)


def test_wall_pair_blocks_two_distinct_lanes():
    # type roll -> wall pair, lane roll unused, blocked=2, offset +1 -> lane 0
    field = ObstacleField(ScriptedRandom([0.95, 0.10, 0.70, 0.30]))
    walls = field.spawn_one()
    assert [w.kind for w in walls] == [ObstacleKind.WALL, ObstacleKind.WALL]
    assert [w.lane for w in walls] == [2, 0]
    assert walls[0].y == walls[1].y


def test_every_wall_pair_leaves_exactly_one_lane_open():
    pairs = 0
    for seed in range(1, 40):
        field = ObstacleField(RandomSequence(seed))
        for _ in range(50):
            created = field.spawn_one()
            if created[0].kind is ObstacleKind.WALL:
                pairs += 1
                lanes = {w.lane for w in created}
                assert len(created) == 2 and len(lanes) == 2
                assert len(set(range(LANES)) - lanes) == 1
            else:
                assert len(created) == 1
    assert pairs > 0


def test_spawn_interval_ramp_and_floor():
    assert spawn_interval(0.0) == BASE_SPAWN_INTERVAL_MS
    assert spawn_interval(100.0) == pytest.approx(700.0)
    assert spawn_interval(5000.0) == MIN_SPAWN_INTERVAL_MS
    values = [spawn_interval(d) for d in range(0, 1500, 10)]
    assert all(b <= a for a, b in zip(values, values[1:]))


def test_update_spawns_when_timer_reaches_interval():
    field = ObstacleField(RandomSequence(42))
    assert field.update(0.5, 300.0, 0.0) is None
    assert field.obstacles == []
    spawned = field.update(0.25, 300.0, 0.0)
    assert spawned
    assert field.spawn_timer == 0.0
    # freshly spawned obstacles scroll on the same tick
    assert all(o.y == pytest.approx(SPAWN_Y + 75.0) for o in spawned)


def test_advance_moves_and_prunes_past_track():
    field = ObstacleField(RandomSequence(1), track_length=500)
    keep = field.place(ObstacleKind.ROCK, 0, 519.0)
    gone = field.place(ObstacleKind.BAR, 1, 521.0)
    field.advance(0.0, 300.0)
    assert field.obstacles == [keep]
    assert gone not in field.obstacles
    field.advance(0.1, 300.0)
    assert field.obstacles == []


def test_pruning_keeps_insertion_order_of_survivors():
    field = ObstacleField(RandomSequence(1), track_length=500)
    a = field.place(ObstacleKind.ROCK, 0, 100.0)
    field.place(ObstacleKind.WALL, 1, 600.0)
    field.place(ObstacleKind.WALL, 2, 610.0)
    b = field.place(ObstacleKind.BAR, 2, 200.0)
    field.advance(0.01, 100.0)
    assert field.obstacles == [a, b]
    assert a.y == pytest.approx(101.0)


def test_place_rejects_bad_lane():
    field = ObstacleField(RandomSequence(1))
    with pytest.raises(ValueError):
        field.place(ObstacleKind.ROCK, LANES, 0.0)


def test_in_band_and_clear():
    field = ObstacleField(RandomSequence(1))
    near = field.place(ObstacleKind.ROCK, 0, 400.0)
    field.place(ObstacleKind.ROCK, 0, 300.0)
    assert field.in_band(410.0, 40.0) == [near]
    field.clear()
    assert field.obstacles == [] and field.spawn_timer == 0.0
