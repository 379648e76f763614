"""Observability: structured logging and metrics hooks for listdiff."""

from __future__ import annotations

from .logger import PACKAGE_LOGGER, StructuredFormatter, configure_logging, get_logger
from .metrics import MetricsHook, NoopMetricsHook, resolve_metrics

__all__ = [
    "PACKAGE_LOGGER",
    "MetricsHook",
    "NoopMetricsHook",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "resolve_metrics",
]
