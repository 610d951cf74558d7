"""Three-command text protocol, one command per connection.

=================  =====================================  =================
payload            effect                                 reply
=================  =====================================  =================
``new game``       issue a match id                       32 hex chars
``update``         none                                   binary snapshot
``<s><c><d>``      spawn: side ``r`` = RED, else GREEN;   none
                   class ``b``/``a``/``g``; row digit
anything else      none                                   none
=================  =====================================  =================

The whole (truncated) payload is matched; there is no framing.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union
from engine.engine import Engine
from engine.model import Side, UnitClass
from .codec import encode_snapshot

logger = logging.getLogger(__name__)

READ_LIMIT = 1024
NEW_GAME = "new game"
UPDATE = "update"
SPAWN_LEN = 3


@dataclass(frozen=True)
class NewGame:
    pass


@dataclass(frozen=True)
class Update:
    pass


@dataclass(frozen=True)
class Spawn:
    side: Side
    unit_class: UnitClass
    row: int


Command = Union[NewGame, Update, Spawn]


def parse_command(payload: bytes, limit: int = READ_LIMIT) -> Optional[Command]:
    """Classify a request. None means "ignore silently"."""
    try:
        request = payload[:limit].decode("utf-8")
    except UnicodeDecodeError:
        request = ""

    if request == NEW_GAME:
        return NewGame()
    if request == UPDATE:
        return Update()

    raw = request.encode("utf-8")
    if len(raw) != SPAWN_LEN:
        return None
    side_b, class_b, row_b = raw[0:1], raw[1:2], raw[2:3]
    side: Side = "RED" if side_b == b"r" else "GREEN"
    try:
        unit_class = UnitClass(class_b.decode("ascii"))
    except (UnicodeDecodeError, ValueError):
        return None
    if not row_b.isdigit():
        return None
    return Spawn(side=side, unit_class=unit_class, row=int(row_b))


def dispatch(cmd: Optional[Command], engine: Engine) -> Optional[bytes]:
    """Apply a parsed command to the engine and build the reply, if any."""
    if isinstance(cmd, NewGame):
        match_id = engine.new_match()
        print(f"[Server] New game {match_id}")
        return match_id.encode("ascii")
    if isinstance(cmd, Update):
        return encode_snapshot(engine.snapshot().units)
    if isinstance(cmd, Spawn):
        u = engine.spawn(cmd.side, cmd.unit_class, cmd.row)
        logger.info(f"Spawned {u.label} for {u.side} at ({u.x}, {u.y})")
    return None


def handle_request(payload: bytes, engine: Engine, limit: int = READ_LIMIT) -> Optional[bytes]:
    return dispatch(parse_command(payload, limit), engine)
