import asyncio
import logging
from typing import Callable, Optional, Tuple
from engine.model import Side, Unit, UnitClass
from .codec import SnapshotDecodeError, decode_snapshot
from .config import ClientConfig
from .protocol import NEW_GAME, UPDATE

logger = logging.getLogger(__name__)

async def call(payload: bytes, host: str, port: int, timeout: float = 2.0) -> bytes:
    """Send one request and return the full reply (empty on any transport error).

    The server closes the connection after replying, so the reply runs to EOF.
    """
    try:
        reader, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout)
    except (OSError, asyncio.TimeoutError) as e:
        logger.warning(f"Err Connect {host}:{port}: {e!r}")
        return b""
    try:
        writer.write(payload)
        await asyncio.wait_for(writer.drain(), timeout)
        return await asyncio.wait_for(reader.read(), timeout)
    except (OSError, asyncio.TimeoutError) as e:
        logger.warning(f"Err Call {payload[:16]!r}: {e!r}")
        return b""
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass

def spawn_payload(side: Side, unit_class: UnitClass, row: int) -> bytes:
    """Build the 3-byte spawn command."""
    if not 0 <= row <= 9:
        raise ValueError(f"row must be a single digit, got {row}")
    side_b = "r" if side == "RED" else "g"
    return f"{side_b}{unit_class.value}{row}".encode("ascii")

class BattleClient:
    """Thin request helpers for one battle server."""

    def __init__(self, config: ClientConfig):
        self.config = config

    async def _call(self, payload: bytes) -> bytes:
        return await call(payload, self.config.host, self.config.port, self.config.io_timeout_s)

    async def new_game(self) -> str:
        """Ask for a match id; empty string when the server can't be reached."""
        reply = await self._call(NEW_GAME.encode("utf-8"))
        try:
            return reply.decode("ascii")
        except UnicodeDecodeError:
            return ""

    async def spawn(self, side: Side, unit_class: UnitClass, row: int) -> None:
        await self._call(spawn_payload(side, unit_class, row))

    async def fetch_snapshot(self) -> Optional[Tuple[Unit, ...]]:
        """Latest unit collection, or None when nothing usable came back."""
        reply = await self._call(UPDATE.encode("utf-8"))
        if not reply:
            return None
        try:
            return tuple(decode_snapshot(reply))
        except SnapshotDecodeError as e:
            logger.warning(f"Dropping snapshot: {e}")
            return None

class ClientSyncLoop:
    """Polls the server for snapshots and hands each one to a render callback.

    Each successful poll replaces ``units`` wholesale; a failed poll keeps the
    previous copy and the loop carries on.
    """

    def __init__(self, client: BattleClient, on_snapshot: Optional[Callable[[Tuple[Unit, ...]], None]] = None):
        self.client = client
        self.on_snapshot = on_snapshot
        self.units: Tuple[Unit, ...] = ()
        self.sleep_s = client.config.poll_ms / 1000.0
        self._task: asyncio.Task | None = None

    async def start(self):
        """Start polling."""
        if self._task:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self):
        """Stop polling."""
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self):
        while True:
            await self.poll_once()
            await asyncio.sleep(self.sleep_s)

    async def poll_once(self) -> bool:
        """Fetch one snapshot. Returns True if the local copy was replaced."""
        units = await self.client.fetch_snapshot()
        if units is None:
            return False
        self.units = units
        if self.on_snapshot:
            try:
                self.on_snapshot(units)
            except Exception:
                # A broken renderer skips this frame; polling carries on
                logger.exception("Snapshot callback failed")
        return True
