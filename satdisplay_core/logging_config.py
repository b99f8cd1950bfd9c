"""
Logging configuration for SatDisplay.

Console output is either ``human`` (one coloured line per record) or
``json`` (one object per line).  A log file, when configured, is always
JSON.  Fields passed through ``extra=`` (``unit``, ``currency`` ...) are
kept as top-level keys in JSON output.

Usage:
    from satdisplay_core.logging_config import setup_logging
    setup_logging(level="DEBUG", fmt="json")
    logging.getLogger("satdisplay_units").info("switched", extra={"unit": "BTC"})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Optional

from satdisplay_core.config import LoggingConfig

LOG_FORMATS = ("human", "json")

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Marks handlers installed here so a second setup replaces only those.
_OWNED = "_satdisplay_handler"


class JsonLineFormatter(logging.Formatter):
    """Record -> single-line JSON object, ``extra`` fields included."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info and record.exc_info[1]:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL   logger: message``, tinted by level on a terminal."""

    LEVEL_TINT = {
        logging.DEBUG: "\033[2m",
        logging.INFO: "",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, tint: bool = False):
        super().__init__(fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                         datefmt="%H:%M:%S")
        self.tint = tint

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        colour = self.LEVEL_TINT.get(record.levelno, "") if self.tint else ""
        return f"{colour}{line}{self.RESET}" if colour else line


def _install(root: logging.Logger, handler: logging.Handler,
             formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    setattr(handler, _OWNED, True)
    root.addHandler(handler)


def _console_formatter(fmt: str, stream: IO[str]) -> logging.Formatter:
    if fmt == "json":
        return JsonLineFormatter()
    return ConsoleFormatter(tint=stream.isatty())


def setup_logging(
    level: str = "INFO",
    fmt: str = "human",
    log_file: Optional[str] = None,
) -> None:
    """
    Route the root logger to stderr (and optionally a JSON file).

    Handlers from an earlier call are closed and replaced; handlers that
    other code attached to the root logger are left alone.

    Raises ``ValueError`` for a *fmt* outside :data:`LOG_FORMATS`.  An
    unknown *level* name means INFO.
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {fmt!r}, expected one of {LOG_FORMATS}")

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    for handler in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(handler)
        handler.close()

    _install(root, logging.StreamHandler(sys.stderr), _console_formatter(fmt, sys.stderr))

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _install(root, logging.FileHandler(path, encoding="utf-8"), JsonLineFormatter())


def setup_logging_from_config(cfg: LoggingConfig) -> None:
    """Apply a ``[logging]`` config section."""
    setup_logging(level=cfg.level, fmt=cfg.format, log_file=cfg.file)
