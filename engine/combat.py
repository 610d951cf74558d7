from typing import List
from .model import Event, Unit
from .rng import DRNG

def in_attack_window(attacker: Unit, target: Unit) -> bool:
    """Square reach check: both axis offsets within attack_range."""
    r = attacker.attack_range
    return abs(target.x - attacker.x) <= r and abs(target.y - attacker.y) <= r

def attack_roll(rng: DRNG, attack_skill: int) -> int:
    """2d6 + attack_skill."""
    return rng.d6() + rng.d6() + attack_skill

def attack_hits(roll: int, defence_class: int) -> bool:
    return roll >= defence_class

def roll_damage(rng: DRNG, attacker: Unit) -> int:
    lo, hi = attacker.damage_range
    return rng.integers(lo, hi)

def _attack(attacker: Unit, target: Unit, rng: DRNG, tick: int) -> List[Event]:
    """Resolve one attack and put the attacker back on cooldown."""
    evts: List[Event] = [Event("AttackDeclared", tick,
                               {"attacker": attacker.label, "target": target.label})]

    # Pause moving while attacking, hit or miss
    attacker.is_attacking = True

    roll = attack_roll(rng, attacker.attack_skill)
    hit = attack_hits(roll, target.defence_class)
    evts.append(Event("AttackRoll", tick,
                      {"attacker": attacker.label, "roll": roll,
                       "defence": target.defence_class, "hit": hit}))

    if hit:
        dmg = roll_damage(rng, attacker)
        target.hp -= dmg
        evts.append(Event("Damage", tick,
                          {"attacker": attacker.label, "target": target.label,
                           "dmg": dmg, "hp": target.hp}))
        if target.hp <= 0:
            attacker.is_attacking = False
            evts.append(Event("Defeated", tick,
                              {"unit": target.label, "killer": attacker.label}))

    attacker.attack_cooldown = attacker.attack_rate
    return evts

def resolve_combat(units: List[Unit], rng: DRNG, tick: int = 0) -> List[Event]:
    """Let every ready unit attack the first enemy found in reach.

    The shuffled order decides both who swings first and which enemy is
    found first; only one target is attacked per swing.
    """
    evts: List[Event] = []
    order = rng.permutation(len(units))
    for i in order:
        a = units[i]
        if not a.alive:
            continue

        if a.attack_cooldown > 0:
            a.attack_cooldown -= 1
            continue

        a.is_attacking = False
        for j in order:
            t = units[j]
            if t.side == a.side or not t.alive:
                continue
            if in_attack_window(a, t):
                evts += _attack(a, t, rng, tick)
                break
    return evts
