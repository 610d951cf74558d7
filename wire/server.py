import asyncio
import logging
from typing import Optional
from runtime.runner import TickRunner
from .config import ServerConfig
from .protocol import handle_request

logger = logging.getLogger(__name__)

class BattleServer:
    """Stream server answering one protocol command per connection.

    Socket I/O happens outside the runner lock and is bounded by
    ``io_timeout_s``; only the command itself runs under the lock.
    """

    def __init__(self, runner: TickRunner, config: ServerConfig | None = None):
        self.runner = runner
        self.config = config or ServerConfig()
        self._server: Optional[asyncio.AbstractServer] = None

    @property
    def port(self) -> int:
        if not self._server or not self._server.sockets:
            return 0
        return self._server.sockets[0].getsockname()[1]

    async def start(self) -> int:
        """Bind and start accepting. Raises OSError if the port can't be bound."""
        if self._server:
            return self.port
        self._server = await asyncio.start_server(self._handle, self.config.host, self.config.port)
        print(f"[Server] Listening on {self.config.host}:{self.port}")
        return self.port

    async def stop(self):
        if not self._server:
            return
        self._server.close()
        await self._server.wait_closed()
        self._server = None

    async def serve_forever(self):
        await self.start()
        await self.runner.start()
        try:
            await self._server.serve_forever()
        finally:
            await self.runner.stop()
            await self.stop()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        peer = writer.get_extra_info("peername")
        timeout = self.config.io_timeout_s
        try:
            try:
                payload = await asyncio.wait_for(reader.read(self.config.read_limit), timeout)
            except (OSError, asyncio.TimeoutError) as e:
                logger.warning(f"Err Read from {peer}: {e!r}")
                return

            limit = self.config.read_limit
            response = await self.runner.run_exclusive(lambda eng: handle_request(payload, eng, limit))
            if not response:
                return

            try:
                writer.write(response)
                await asyncio.wait_for(writer.drain(), timeout)
            except (OSError, asyncio.TimeoutError) as e:
                logger.warning(f"Err Write to {peer}: {e!r}")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError as e:
                logger.debug(f"Close {peer}: {e!r}")
