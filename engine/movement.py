import math
from typing import List, Optional, Tuple
from .model import Event, Unit
from .rng import DRNG

# Distance reported for any enemy on the mover's own row. Smaller than any
# real distance, so a same-row enemy always wins the nearest-enemy search.
SAME_ROW_DISTANCE = 0.0001

def pursuit_distance(mover: Unit, target: Unit) -> float:
    """Euclidean distance used to pick a pursuit target."""
    if mover.y == target.y:
        return SAME_ROW_DISTANCE
    dx = target.x - mover.x
    dy = target.y - mover.y
    return math.sqrt(dx * dx + dy * dy)

def nearest_enemy(units: List[Unit], i: int) -> Optional[int]:
    """Index of the closest living enemy of units[i], or None.

    Ties keep the earlier index in collection order.
    """
    mover = units[i]
    best: Optional[int] = None
    best_dist = math.inf
    for j, other in enumerate(units):
        if other.side == mover.side or not other.alive:
            continue
        dist = pursuit_distance(mover, other)
        if dist < best_dist:
            best, best_dist = j, dist
    return best

def _sign(v: int) -> int:
    return (v > 0) - (v < 0)

def step_towards(mover: Unit, target: Unit) -> Tuple[int, int]:
    """One cell per axis towards target; diagonals are not normalized."""
    return _sign(target.x - mover.x), _sign(target.y - mover.y)

def is_occupied(units: List[Unit], x: int, y: int, ignore: int) -> bool:
    """True if any living unit other than units[ignore] stands on (x, y)."""
    for j, other in enumerate(units):
        if j == ignore or not other.alive:
            continue
        if other.x == x and other.y == y:
            return True
    return False

def resolve_movement(units: List[Unit], rng: DRNG) -> List[Event]:
    """Advance every eligible unit by at most one cell.

    Units are visited in a fresh shuffled order each call so no index gets a
    standing advantage when two units contest the same cell.
    """
    evts: List[Event] = []
    for i in rng.permutation(len(units)):
        u = units[i]
        if not u.alive or u.is_attacking:
            continue

        u.movement_cooldown = max(0, u.movement_cooldown - 1)
        if u.movement_cooldown > 0:
            continue

        target = nearest_enemy(units, i)
        if target is None:
            continue

        dx, dy = step_towards(u, units[target])
        if is_occupied(units, u.x + dx, u.y + dy, ignore=i):
            continue  # blocked, try again next tick

        u.x += dx
        u.y += dy
        u.movement_cooldown = u.movement_rate
        # Don't emit move events - too noisy for the diagnostic log
    return evts
