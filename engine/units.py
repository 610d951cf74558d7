from .model import FIELD_WIDTH, UNIT_TYPES, Side, Unit, UnitClass
from .rng import DRNG

GREEN_SPAWN_X = 1
RED_SPAWN_X = FIELD_WIDTH - 2

def spawn_x(side: Side) -> int:
    """Edge column a side spawns on; the two sides face each other."""
    return GREEN_SPAWN_X if side == "GREEN" else RED_SPAWN_X

def row_to_y(row: int) -> int:
    """Map a row digit (0-9) to a field y coordinate."""
    return row * 2

def create_unit(unit_class: UnitClass, side: Side, y: int, rng: DRNG) -> Unit:
    """Build a unit from its class template with both cooldowns primed."""
    t = UNIT_TYPES[unit_class]
    return Unit(
        id=rng.unit_id(),
        side=side,
        x=spawn_x(side),
        y=y,
        glyph=t.glyph,
        hp=t.hp,
        attack_skill=t.attack_skill,
        defence_class=t.defence_class,
        attack_range=t.attack_range,
        damage_range=t.damage_range,
        attack_rate=t.attack_rate,
        attack_cooldown=t.attack_rate,
        movement_rate=t.movement_rate,
        movement_cooldown=t.movement_rate,
    )
