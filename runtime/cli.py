import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Tuple
from engine.engine import Engine
from engine.model import SIDES, Unit, UnitClass
from wire.client import BattleClient, ClientSyncLoop
from wire.config import ClientConfig, ServerConfig
from wire.server import BattleServer
from .diaglog import configure_diagnostic_log
from .runner import TickRunner

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="skirmish", description="Two-faction battle simulator")
    sub = p.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the authoritative server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=0)
    serve.add_argument("--tick-ms", type=int, default=10)
    serve.add_argument("--io-timeout", type=float, default=2.0)
    serve.add_argument("--log", default="logging.txt", help="diagnostic log file ('' to disable)")
    serve.add_argument("--seed", type=int, default=None)

    for name, help_ in (("new-game", "request a match id"),
                        ("spawn", "spawn one unit"),
                        ("watch", "poll snapshots and print a summary")):
        c = sub.add_parser(name, help=help_)
        c.add_argument("port", type=int)
        c.add_argument("--host", default="127.0.0.1")
        if name == "spawn":
            c.add_argument("side", choices=[s.lower() for s in SIDES])
            c.add_argument("unit_class", choices=[uc.name.lower() for uc in UnitClass])
            c.add_argument("row", type=int, choices=range(10))
        if name == "watch":
            c.add_argument("--poll-ms", type=int, default=500)
    return p

def summarize(units: Tuple[Unit, ...]) -> str:
    parts = []
    for side in SIDES:
        alive = [u for u in units if u.side == side and u.alive]
        parts.append(f"{side}: {len(alive)} alive")
    return " | ".join(parts)

async def _serve(args: argparse.Namespace) -> None:
    cfg = ServerConfig(host=args.host, port=args.port, tick_ms=args.tick_ms,
                       io_timeout_s=args.io_timeout, log_path=args.log, seed=args.seed)
    configure_diagnostic_log(cfg.log_path)
    runner = TickRunner(Engine(seed=cfg.seed), tick_ms=cfg.tick_ms)
    server = BattleServer(runner, cfg)
    await server.serve_forever()

async def _client(args: argparse.Namespace) -> None:
    kwargs = {"host": args.host, "port": args.port}
    if args.command == "watch":
        kwargs["poll_ms"] = args.poll_ms
    client = BattleClient(ClientConfig(**kwargs))
    if args.command == "new-game":
        print(await client.new_game())
    elif args.command == "spawn":
        await client.spawn(args.side.upper(), UnitClass[args.unit_class.upper()], args.row)
    elif args.command == "watch":
        loop = ClientSyncLoop(client, on_snapshot=lambda units: print(summarize(units)))
        await loop.start()
        try:
            await asyncio.Event().wait()
        finally:
            await loop.stop()

CONSOLE_HANDLER = "skirmish-console"

def install_console_log() -> logging.Handler:
    """Attach the operator console handler to the root logger, once."""
    root = logging.getLogger()
    for h in root.handlers:
        if h.get_name() == CONSOLE_HANDLER:
            return h
    # Operator console only sees problems; the diagnostic file gets the battle feed
    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(console)
    return console

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    install_console_log()
    try:
        if args.command == "serve":
            asyncio.run(_serve(args))
        else:
            asyncio.run(_client(args))
    except KeyboardInterrupt:
        return 0
    except OSError as e:
        logger.error(f"Cannot start: {e}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
