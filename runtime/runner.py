import asyncio
import logging
from typing import Callable, List, TypeVar
from engine.engine import Engine
from engine.model import Event, State
from .diaglog import describe

logger = logging.getLogger(__name__)

T = TypeVar("T")

class TickRunner:
    """Async driver that runs the engine on a fixed tick cadence.

    A single lock guards the engine: either one tick or one command holds it,
    never both.
    """

    def __init__(self, engine: Engine, tick_ms: int = 10):
        self.engine = engine
        self.tick_ms = tick_ms
        self.sleep_s = tick_ms / 1000.0
        self._task: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._task is not None

    async def start(self):
        """Start the tick loop."""
        if self._task:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self):
        """Stop the tick loop gracefully."""
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self):
        """Main tick loop - step engine, log events to the diagnostic log."""
        while True:
            await self.tick()
            await asyncio.sleep(self.sleep_s)

    async def tick(self) -> List[Event]:
        """Run exactly one engine step under the lock."""
        async with self._lock:
            evts: List[Event] = self.engine.step()
        for e in evts:
            logger.info(describe(e))
        return evts

    async def run_exclusive(self, fn: Callable[[Engine], T]) -> T:
        """Run fn against the engine with no tick in progress."""
        async with self._lock:
            return fn(self.engine)

    async def snapshot(self) -> State:
        """Get current state between ticks."""
        async with self._lock:
            return self.engine.snapshot()
