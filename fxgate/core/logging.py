"""Logging setup shared by the CLI and the HTTP API.

Two line formats:

``json`` (default), one object per record for build agents and log collectors::

    {"ts": "2026-03-01T12:00:00+00:00", "level": "ERROR", "logger": "fxgate.diagnostics",
     "msg": "...", "run_id": "3f2a9c1d0b7e", "error_code": "CA1014:...", "file": "Foo.dll", "line": 0}

``text``, for people reading a console::

    2026-03-01 12:00:00 | ERROR    | fxgate.diagnostics - ... [run_id=3f2a9c1d0b7e file=Foo.dll]

Pick one with ``LOG_FORMAT`` or the ``fmt`` argument; ``LOG_LEVEL`` sets the level.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

# Context a run attaches through ``extra={}``
RUN_FIELDS = ("run_id", "error_code", "file", "line")

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"


def run_context(record: logging.LogRecord) -> dict[str, Any]:
    return {name: getattr(record, name) for name in RUN_FIELDS if hasattr(record, name)}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **run_context(record),
        }
        if record.exc_info and record.exc_info[0] is not None:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Plain console lines with the run context appended in brackets."""

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = run_context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{line} [{pairs}]"


FORMATTERS = {"json": JSONFormatter, "text": TextFormatter}


def setup_logging(
    level_name: str | None = None,
    stream: TextIO | None = None,
    fmt: str | None = None,
) -> None:
    """Install a single root handler writing to ``stream`` (stdout by default).

    The CLI passes ``sys.stderr`` so its stdout stays machine-readable.
    Unknown levels fall back to INFO and unknown formats to json.
    """
    level_name = (level_name or os.getenv("LOG_LEVEL", "INFO")).upper()
    fmt = (fmt or os.getenv("LOG_FORMAT", "json")).lower()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(FORMATTERS.get(fmt, JSONFormatter)())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for noisy in ("uvicorn.access", "httpcore", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
