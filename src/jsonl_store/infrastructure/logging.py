"""Logging & console helpers.

Library modules only call ``logging.getLogger(__name__)``; handler setup lives
here and is invoked by the CLI bootstrap (or by an embedding application).

Features:
    * RichHandler based console logging (color, tracebacks)
    * Optional JSON-lines logging mode (machine ingest)
    * Shared rich Console accessor so the CLI does not build its own
"""

from __future__ import annotations

import logging
import os
import sys

import orjson
from rich.console import Console
from rich.logging import RichHandler

_INITIALIZED = False
_JSON_MODE = False
_CONSOLE: Console | None = None


class _JsonHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            data = {
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info:
                data["exc_info"] = logging.Formatter().formatException(record.exc_info)
            sys.stderr.write(orjson.dumps(data).decode("utf-8") + "\n")
        except Exception:
            self.handleError(record)


def setup_logging(level: str | None = None, json_mode: bool | None = None) -> None:
    """Install root handlers once (LOG_LEVEL env var is the fallback level)."""
    global _INITIALIZED, _JSON_MODE
    if _INITIALIZED:
        return
    if json_mode is not None:
        _JSON_MODE = json_mode
    lvl_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    lvl = getattr(logging, lvl_name, logging.INFO)
    handler: logging.Handler
    if _JSON_MODE:
        handler = _JsonHandler()
    else:
        handler = RichHandler(
            console=Console(stderr=True), rich_tracebacks=True, show_path=False
        )
    logging.basicConfig(level=lvl, handlers=[handler], force=True, format="%(message)s")
    _INITIALIZED = True


def reset_logging() -> None:
    """Allow a later setup_logging() call to reconfigure (used by tests)."""
    global _INITIALIZED, _JSON_MODE
    _INITIALIZED = False
    _JSON_MODE = False


def get_console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console()
    return _CONSOLE


__all__ = ["get_console", "reset_logging", "setup_logging"]
