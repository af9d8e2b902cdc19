# eventhook/core/logging_setup.py
from __future__ import annotations
import json, logging, os
from datetime import datetime, UTC

# Per-level files plus a combined one, same layout as the console output
LEVEL_FILES = {
    logging.ERROR: "error.log",
    logging.WARNING: "warn.log",
    logging.INFO: "info.log",
    logging.DEBUG: "debug.log",
}
ALL_FILE = "all.log"

_COLORS = {
    logging.ERROR: "\x1b[31m",
    logging.WARNING: "\x1b[33m",
    logging.INFO: "\x1b[36m",
}
_RESET = "\x1b[0m"

class EventFormatter(logging.Formatter):
    """`[2026-01-01T10:00:00.000Z] [INFO] message` + optional JSON `data` block."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds")
        out = f"[{ts.replace('+00:00', 'Z')}] [{record.levelname}] {record.getMessage()}"
        data = getattr(record, "data", None)
        if data is not None:
            out += "\n" + json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if record.exc_info:
            out += "\n" + self.formatException(record.exc_info)
        return out

class ColorFormatter(EventFormatter):
    def format(self, record: logging.LogRecord) -> str:
        color = _COLORS.get(record.levelno)
        text = super().format(record)
        return f"{color}{text}{_RESET}" if color else text

class _ExactLevel(logging.Filter):
    def __init__(self, levelno: int):
        super().__init__()
        self.levelno = levelno

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == self.levelno

def configure_logging(log_dir: str, debug: bool = False, console: bool = True) -> list[logging.Handler]:
    """
    Installe console + fichiers sur le root logger. Rappelable: les handlers
    posés par un appel précédent sont retirés avant.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        if getattr(h, "_eventhook", False):
            root.removeHandler(h)
            h.close()

    os.makedirs(log_dir, exist_ok=True)
    level = logging.DEBUG if debug else logging.INFO
    handlers: list[logging.Handler] = []

    if console:
        sh = logging.StreamHandler()
        sh.setFormatter(ColorFormatter())
        handlers.append(sh)

    for levelno, filename in LEVEL_FILES.items():
        if levelno < level:
            continue
        fh = logging.FileHandler(os.path.join(log_dir, filename), encoding="utf-8")
        fh.addFilter(_ExactLevel(levelno))
        fh.setFormatter(EventFormatter())
        handlers.append(fh)

    all_fh = logging.FileHandler(os.path.join(log_dir, ALL_FILE), encoding="utf-8")
    all_fh.setFormatter(EventFormatter())
    handlers.append(all_fh)

    for h in handlers:
        h.setLevel(level)
        h._eventhook = True  # type: ignore[attr-defined]
        root.addHandler(h)
    root.setLevel(level)

    # discord.py est bavard en DEBUG (payloads gateway)
    logging.getLogger("discord").setLevel(logging.INFO)
    return handlers
