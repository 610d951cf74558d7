"""Shared builders for engine tests."""
from typing import Iterable, List

import pytest

from engine.model import UNIT_TYPES, Unit, UnitClass


class ScriptedRNG:
    """Stand-in for DRNG with scripted dice and damage.

    Orders default to collection order so tests can reason about who acts
    first; pass ``order`` to force a specific permutation.
    """

    def __init__(self, dice: Iterable[int] = (), damage: Iterable[int] = (), order: List[int] | None = None):
        self._dice = list(dice)
        self._damage = list(damage)
        self._order = order

    def permutation(self, n: int) -> List[int]:
        return list(self._order) if self._order is not None else list(range(n))

    def d6(self) -> int:
        return self._dice.pop(0)

    def integers(self, low: int, high: int) -> int:
        value = self._damage.pop(0)
        assert low <= value < high
        return value

    def unit_id(self) -> int:
        return 7

    def match_id(self) -> str:
        return "0" * 32


def make_unit(unit_class: UnitClass = UnitClass.BARBARIAN, side: str = "GREEN",
              x: int = 0, y: int = 0, **overrides) -> Unit:
    t = UNIT_TYPES[unit_class]
    fields = dict(
        id=1, side=side, x=x, y=y, glyph=t.glyph, hp=t.hp,
        attack_skill=t.attack_skill, defence_class=t.defence_class,
        attack_range=t.attack_range, damage_range=t.damage_range,
        attack_rate=t.attack_rate, attack_cooldown=t.attack_rate,
        movement_rate=t.movement_rate, movement_cooldown=t.movement_rate,
    )
    fields.update(overrides)
    return Unit(**fields)


@pytest.fixture
def unit():
    return make_unit
