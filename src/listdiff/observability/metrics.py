"""Metrics hook protocol and no-op default implementation.

listdiff reports counters and timings for every diff call.  By default a
:class:`NoopMetricsHook` swallows them; pass any object satisfying
:class:`MetricsHook` as ``DiffConfig.metrics`` to forward them to StatsD,
Prometheus, or a test recorder.

Emitted metric names:

* ``listdiff.diff_total``               -- counter, tag ``mode``
* ``listdiff.diff_duration_ms``         -- timing, tag ``mode``
* ``listdiff.ops_total``                -- counter
* ``listdiff.trimmed_items_total``      -- counter
* ``listdiff.equality_queries_total``   -- counter (remote mode only)
* ``listdiff.worker_faults_total``      -- counter
* ``listdiff.table_cells``              -- gauge, tag ``mode``; cells in the
  trimmed table
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* are optional string key-value pairs; backends translate them
    into whatever tagging mechanism they support.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment the counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set the gauge *name* to *value*."""
        ...


class NoopMetricsHook:
    """Metrics backend that discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass


def resolve_metrics(hook: object | None) -> MetricsHook:
    """Return *hook*, or a :class:`NoopMetricsHook` when it is ``None``."""
    return hook if hook is not None else NoopMetricsHook()  # type: ignore[return-value]
