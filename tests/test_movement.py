"""Greedy pursuit and collision checks."""
import pytest
from conftest import ScriptedRNG, make_unit
from engine.model import UnitClass
from engine.movement import SAME_ROW_DISTANCE, nearest_enemy, pursuit_distance, resolve_movement
from engine.rng import DRNG


def ready(**kw):
    """A barbarian that will try to step this tick."""
    return make_unit(movement_cooldown=1, **kw)


def test_same_row_enemy_uses_epsilon_distance():
    a = make_unit(x=0, y=4)
    assert pursuit_distance(a, make_unit(side="RED", x=30, y=4)) == SAME_ROW_DISTANCE
    assert pursuit_distance(a, make_unit(side="RED", x=3, y=8)) == pytest.approx(5.0)


def test_same_row_enemy_preferred_over_closer_off_row_enemy():
    units = [
        make_unit(x=10, y=4),
        make_unit(side="RED", x=11, y=5),
        make_unit(side="RED", x=40, y=4),
    ]
    assert nearest_enemy(units, 0) == 2


def test_nearest_enemy_skips_friends_and_dead():
    units = [
        make_unit(x=10, y=4),
        make_unit(x=11, y=5),
        make_unit(side="RED", x=12, y=5, hp=0),
        make_unit(side="RED", x=20, y=9),
    ]
    assert nearest_enemy(units, 0) == 3


def test_steps_diagonally_towards_enemy():
    units = [ready(x=10, y=4), make_unit(side="RED", x=20, y=9)]
    resolve_movement(units, ScriptedRNG())
    assert (units[0].x, units[0].y) == (11, 5)
    assert units[0].movement_cooldown == units[0].movement_rate


def test_cooldown_counts_down_before_moving():
    units = [make_unit(x=10, y=4, movement_cooldown=3), make_unit(side="RED", x=20, y=4)]
    resolve_movement(units, ScriptedRNG())
    assert (units[0].x, units[0].movement_cooldown) == (10, 2)


def test_blocked_step_keeps_position_and_cooldown():
    units = [
        ready(x=10, y=4),
        make_unit(x=11, y=4),  # friend in the way
        make_unit(side="RED", x=20, y=4, movement_cooldown=50),
    ]
    resolve_movement(units, ScriptedRNG())
    assert (units[0].x, units[0].y) == (10, 4)
    assert units[0].movement_cooldown == 0


def test_dead_units_do_not_block():
    units = [
        ready(x=10, y=4),
        make_unit(x=11, y=4, hp=-2),
        make_unit(side="RED", x=20, y=4, movement_cooldown=50),
    ]
    resolve_movement(units, ScriptedRNG())
    assert units[0].x == 11


def test_dead_and_attacking_units_never_move():
    dead = ready(x=10, y=4, hp=0)
    busy = ready(x=10, y=6, is_attacking=True)
    units = [dead, busy, make_unit(side="RED", x=20, y=4)]
    resolve_movement(units, ScriptedRNG())
    assert (dead.x, dead.movement_cooldown) == (10, 1)
    assert (busy.x, busy.movement_cooldown) == (10, 1)


def test_no_enemy_means_no_move_and_no_negative_cooldown():
    units = [ready(x=10, y=4), make_unit(x=30, y=4)]
    for _ in range(20):
        resolve_movement(units, ScriptedRNG())
    assert units[0].x == 10
    assert all(u.movement_cooldown >= 0 for u in units)


def test_contested_cell_goes_to_first_in_shuffle():
    a = ready(x=10, y=4)
    b = ready(side="RED", x=12, y=4)
    resolve_movement([a, b], ScriptedRNG(order=[1, 0]))
    assert (a.x, b.x) == (10, 11)


@pytest.mark.parametrize("seed", range(5))
def test_no_two_living_units_share_a_cell(seed):
    rng = DRNG(seed)
    cells = set()
    units = []
    classes = list(UnitClass)
    while len(units) < 16:
        x, y = rng.integers(0, 70), rng.integers(0, 20)
        if (x, y) in cells:
            continue
        cells.add((x, y))
        side = "RED" if len(units) % 2 else "GREEN"
        units.append(make_unit(classes[len(units) % 3], side=side, x=x, y=y,
                               movement_cooldown=rng.integers(1, 4)))
    for _ in range(200):
        resolve_movement(units, rng)
        living = [(u.x, u.y) for u in units if u.alive]
        assert len(living) == len(set(living))
        assert all(u.movement_cooldown >= 0 for u in units)
