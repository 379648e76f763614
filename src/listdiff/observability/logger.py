"""Structured JSON logging for listdiff.

All listdiff modules log through children of the ``listdiff`` package
logger, which owns the single JSON handler.  A diff can involve two
processes, so every record carries the ``pid`` that wrote it::

    {"ts": "2026-01-01T12:00:00.123456+00:00", "level": "DEBUG",
     "logger": "listdiff.worker", "pid": 4242, "message": "worker ready",
     "stage": "handshake"}

Usage::

    from listdiff.observability import configure_logging, get_logger

    configure_logging("DEBUG")          # once, by the application
    log = get_logger("listdiff.worker")  # in each module
    log.debug("worker ready", extra={"extra_fields": {"stage": "handshake"}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from listdiff.errors import ListDiffError

PACKAGE_LOGGER = "listdiff"


class StructuredFormatter(logging.Formatter):
    """Render a record as one JSON line.

    Fields from ``extra={"extra_fields": {...}}`` are merged at the top
    level.  When the record carries a :class:`~listdiff.errors.ListDiffError`
    its ``code`` and ``context`` are emitted as ``error_code`` and
    ``error_context`` next to the formatted traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "pid": record.process,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", None) or {})

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            if isinstance(error, ListDiffError):
                entry["error_code"] = error.code.value
                entry["error_context"] = error.context
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=repr)


_handler: logging.Handler | None = None


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: int | str = logging.WARNING,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Install (or replace) the JSON handler on the ``listdiff`` logger.

    Calling it again swaps the handler instead of adding a second one.
    The package logger does not propagate, so records are written once.
    """
    global _handler

    resolved = _resolve_level(level)
    package = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package.removeHandler(_handler)
    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(StructuredFormatter())
    package.addHandler(_handler)
    package.setLevel(resolved)
    package.propagate = False
    return package


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return the logger *name*, which must live under ``listdiff``.

    The package handler is installed with its defaults (``WARNING`` to
    stderr) the first time any listdiff logger is requested.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        raise ValueError(f"{name!r} is not a listdiff logger")
    if _handler is None:
        configure_logging()
    return logging.getLogger(name)
