from dataclasses import dataclass, field
from typing import Dict, List, Literal, Tuple
from enum import Enum

Side = Literal["RED", "GREEN"]
SIDES: Tuple[Side, Side] = ("RED", "GREEN")
DamageRange = Tuple[int, int]  # [min, max) half-open

FIELD_WIDTH = 70

class UnitClass(Enum):
    """Unit classification, keyed by the protocol class byte"""
    BARBARIAN = "b"
    ARCHER = "a"
    GIANT = "g"

@dataclass(frozen=True)
class UnitType:
    """Template defining the fixed stats of a unit class"""
    glyph: str
    hp: int
    attack_skill: int
    defence_class: int
    attack_range: int  # square window, not circular
    damage_range: DamageRange
    attack_rate: int  # ticks between attacks
    movement_rate: int  # ticks between steps

# Predefined unit types
UNIT_TYPES: Dict[UnitClass, UnitType] = {
    UnitClass.BARBARIAN: UnitType(
        glyph="B",
        hp=12,
        attack_skill=3,
        defence_class=9,
        attack_range=1,
        damage_range=(1, 7),
        attack_rate=5,
        movement_rate=7,
    ),
    UnitClass.ARCHER: UnitType(
        glyph="A",
        hp=6,
        attack_skill=2,
        defence_class=7,
        attack_range=5,  # glass cannon
        damage_range=(1, 4),
        attack_rate=10,
        movement_rate=13,
    ),
    UnitClass.GIANT: UnitType(
        glyph="G",
        hp=30,
        attack_skill=4,
        defence_class=12,
        attack_range=1,
        damage_range=(6, 12),
        attack_rate=15,
        movement_rate=30,
    ),
}

@dataclass
class Unit:
    id: int  # 16-bit draw, not guaranteed unique
    side: Side
    x: int
    y: int
    glyph: str
    hp: int
    attack_skill: int
    defence_class: int
    attack_range: int
    damage_range: DamageRange
    attack_rate: int
    attack_cooldown: int
    movement_rate: int
    movement_cooldown: int
    is_attacking: bool = False

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def label(self) -> str:
        """Glyph plus hex id, as shown in the diagnostic log"""
        return f"{self.glyph}{self.id:x}"

@dataclass
class Event:
    kind: str
    tick: int
    data: Dict

@dataclass
class State:
    tick: int = 0
    units: List[Unit] = field(default_factory=list)  # dead units are never removed
    battle_id: str = "local"
