"""Binary snapshot codec for the unit collection.

Layout (network byte order)::

    header  magic "SKRM" | version u8 | count u32
    unit    id u16 | x i16 | y i16 | glyph 1 byte | side u8 |
            hp, attack_skill, defence_class, attack_range,
            damage_min, damage_max, attack_rate, attack_cooldown,
            movement_rate, movement_cooldown (i16 each) | is_attacking bool

Dead units are encoded like any other. Encoder and decoder only need to agree
on ``VERSION``; this is not a public format.
"""
import struct
from typing import List, Sequence
from engine.model import SIDES, Unit

MAGIC = b"SKRM"
VERSION = 1

HEADER = struct.Struct("!4sBI")
UNIT = struct.Struct("!Hhh1sB10h?")


class SnapshotDecodeError(ValueError):
    """Raised when a payload is not a snapshot this codec can read."""


def encode_unit(u: Unit) -> bytes:
    return UNIT.pack(
        u.id, u.x, u.y, u.glyph.encode("ascii"), SIDES.index(u.side),
        u.hp, u.attack_skill, u.defence_class, u.attack_range,
        u.damage_range[0], u.damage_range[1],
        u.attack_rate, u.attack_cooldown,
        u.movement_rate, u.movement_cooldown,
        u.is_attacking,
    )


def decode_unit(buf: bytes, offset: int = 0) -> Unit:
    (uid, x, y, glyph, side, hp, skill, defence, reach, dmin, dmax,
     arate, acool, mrate, mcool, attacking) = UNIT.unpack_from(buf, offset)
    if side >= len(SIDES):
        raise SnapshotDecodeError(f"unknown side tag {side}")
    try:
        glyph_str = glyph.decode("ascii")
    except UnicodeDecodeError as e:
        raise SnapshotDecodeError(f"bad glyph byte {glyph!r}") from e
    return Unit(
        id=uid, side=SIDES[side], x=x, y=y, glyph=glyph_str, hp=hp,
        attack_skill=skill, defence_class=defence, attack_range=reach,
        damage_range=(dmin, dmax),
        attack_rate=arate, attack_cooldown=acool,
        movement_rate=mrate, movement_cooldown=mcool,
        is_attacking=attacking,
    )


def encode_snapshot(units: Sequence[Unit]) -> bytes:
    """Serialize units in order."""
    parts = [HEADER.pack(MAGIC, VERSION, len(units))]
    parts.extend(encode_unit(u) for u in units)
    return b"".join(parts)


def decode_snapshot(data: bytes) -> List[Unit]:
    """Inverse of encode_snapshot. Raises SnapshotDecodeError on any mismatch."""
    if len(data) < HEADER.size:
        raise SnapshotDecodeError(f"snapshot too short: {len(data)} bytes")
    magic, version, count = HEADER.unpack_from(data, 0)
    if magic != MAGIC:
        raise SnapshotDecodeError(f"bad magic {magic!r}")
    if version != VERSION:
        raise SnapshotDecodeError(f"unsupported snapshot version {version}")
    expected = HEADER.size + count * UNIT.size
    if len(data) != expected:
        raise SnapshotDecodeError(f"expected {expected} bytes for {count} units, got {len(data)}")
    return [decode_unit(data, HEADER.size + i * UNIT.size) for i in range(count)]
