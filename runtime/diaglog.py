"""Best-effort diagnostic file log.

Lines look like ``1718000000  B1f3a will attack G9c0``: unix seconds, two
spaces, message. A failing disk must never stop the simulation, so the file
handler drops records it cannot write instead of reporting them.
"""
import logging
from typing import Optional
from engine.model import Event

DIAG_FORMAT = "%(created)d  %(message)s"


class QuietFileHandler(logging.FileHandler):
    """FileHandler that swallows its own I/O errors."""

    def __init__(self, filename: str):
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)

    def emit(self, record: logging.LogRecord) -> None:
        # Opening the file happens outside the base class error handling
        try:
            super().emit(record)
        except OSError:
            pass

    def handleError(self, record: logging.LogRecord) -> None:
        pass


def configure_diagnostic_log(path: str = "logging.txt", level: int = logging.INFO) -> Optional[logging.Handler]:
    """Attach the diagnostic file handler to the root logger.

    Returns the handler, or None when ``path`` is empty.
    """
    if not path:
        return None
    handler = QuietFileHandler(path)
    handler.setFormatter(logging.Formatter(DIAG_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    if root.level > level or root.level == logging.NOTSET:
        root.setLevel(level)
    return handler


def describe(evt: Event) -> str:
    """Render an engine event as a diagnostic log line."""
    d = evt.data
    if evt.kind == "AttackDeclared":
        return f"{d['attacker']} will attack {d['target']}"
    if evt.kind == "AttackRoll":
        verdict = "passed" if d["hit"] else "failed"
        return f"{d['attacker']} rolled to attack: {d['roll']} vs enemy defence: {d['defence']} ({verdict})"
    if evt.kind == "Damage":
        return f"{d['attacker']} causes {d['dmg']} damage, leaving {d['hp']} hp"
    if evt.kind == "Defeated":
        return f"{d['killer']} defeated {d['unit']}"
    return f"{evt.kind} {d}"
