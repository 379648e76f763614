"""Public entry points.

:func:`diff` is a coroutine that may move large computations into a
worker process; :func:`diff_sync` always computes in the calling thread.
Both trim the common prefix and suffix first and shift the resulting
indices back afterwards.

Usage::

    from listdiff import diff_sync

    for operation in diff_sync(["coconut", "nut", "peanut"],
                               ["kiwi", "coconut", "maracuja", "nut", "banana"]):
        print(operation)
"""

from __future__ import annotations

import dataclasses
import sys
import time
from collections.abc import Sequence
from typing import Any

from listdiff.config import DiffConfig
from listdiff.engine import calculate_diff_sync, should_run_remote, trim
from listdiff.errors import ListDiffConfigError
from listdiff.models import Operation, TrimResult
from listdiff.observability import get_logger, resolve_metrics
from listdiff.worker import calculate_diff_in_worker

log = get_logger("listdiff.api")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _resolve_config(config: DiffConfig | None, overrides: dict[str, Any]) -> DiffConfig:
    """Merge keyword overrides into *config*, validating the result."""
    if config is None:
        return DiffConfig(**overrides)
    if overrides:
        return dataclasses.replace(config, **overrides)
    return config


def _finish(
    config: DiffConfig,
    mode: str,
    old: Sequence[Any],
    new: Sequence[Any],
    trimmed: TrimResult,
    operations: list[Operation],
    started: float,
) -> list[Operation]:
    """Shift indices past the trimmed prefix and report the call."""
    result = [operation.shifted(trimmed.start) for operation in operations]

    elapsed_ms = (time.monotonic() - started) * 1000
    metrics = resolve_metrics(config.metrics)
    metrics.increment("listdiff.diff_total", tags={"mode": mode})
    metrics.timing("listdiff.diff_duration_ms", elapsed_ms, tags={"mode": mode})
    metrics.increment("listdiff.ops_total", len(result))
    metrics.increment(
        "listdiff.trimmed_items_total",
        len(old) + len(new) - len(trimmed.old) - len(trimmed.new),
    )
    metrics.gauge(
        "listdiff.table_cells",
        len(trimmed.old) * len(trimmed.new),
        tags={"mode": mode},
    )
    log.debug(
        "diff complete",
        extra={
            "extra_fields": {
                "op": "diff",
                "mode": mode,
                "old_len": len(old),
                "new_len": len(new),
                "trim_start": trimmed.start,
                "ops": len(result),
                "duration_ms": round(elapsed_ms, 3),
            }
        },
    )

    if config.debug_dump_ops:
        print("[listdiff] Operations:", file=sys.stderr)
        for operation in result:
            print(f"  {operation}", file=sys.stderr)

    return result


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def diff_sync(
    old: Sequence[Any],
    new: Sequence[Any],
    config: DiffConfig | None = None,
    **kwargs: Any,
) -> list[Operation]:
    """Calculate a minimal list of operations that turn *old* into *new*.

    Never starts a worker.  Applying the returned operations in order to a
    copy of *old* yields *new*.

    Parameters
    ----------
    old, new:
        The lists to compare.
    config:
        Optional :class:`DiffConfig`.  Remaining keyword arguments are
        forwarded to (or override fields of) it.

    Returns
    -------
    list[Operation]

    Raises
    ------
    ListDiffConfigError
        For inconsistent options, including ``force_remote=True``.
    """
    resolved = _resolve_config(config, kwargs)
    if resolved.force_remote:
        raise ListDiffConfigError(
            "diff_sync never uses a worker; use diff() with force_remote=True.",
            context={"field": "force_remote", "value": True},
        )

    started = time.monotonic()
    are_equal = resolved.equality_predicate()
    trimmed = trim(old, new, are_equal)
    operations = calculate_diff_sync(trimmed.old, trimmed.new, are_equal)
    return _finish(resolved, "local", old, new, trimmed, operations, started)


async def diff(
    old: Sequence[Any],
    new: Sequence[Any],
    config: DiffConfig | None = None,
    **kwargs: Any,
) -> list[Operation]:
    """Calculate a minimal list of operations that turn *old* into *new*.

    Large inputs (see :data:`~listdiff.config.DEFAULT_REMOTE_THRESHOLD`) are
    computed in a worker process so the event loop stays responsive.  Only
    item hashes cross the process boundary; whenever two hashes match the
    worker asks this process to compare the real items.

    Parameters
    ----------
    old, new:
        The lists to compare.
    config:
        Optional :class:`DiffConfig`.  Remaining keyword arguments are
        forwarded to (or override fields of) it, e.g. ``force_remote=True``
        or ``are_equal=..., get_hash=...``.

    Returns
    -------
    list[Operation]

    Raises
    ------
    ListDiffConfigError
        For inconsistent options.
    ListDiffProtocolError
        If the worker conversation fails.  No partial result is returned.
    """
    resolved = _resolve_config(config, kwargs)

    started = time.monotonic()
    are_equal = resolved.equality_predicate()
    trimmed = trim(old, new, are_equal)

    # With an empty side there is no table to fill, whatever force_remote says.
    remote = bool(trimmed.old and trimmed.new) and should_run_remote(
        len(trimmed.old),
        len(trimmed.new),
        threshold=resolved.remote_threshold,
        force=resolved.force_remote,
    )
    if remote:
        operations = await calculate_diff_in_worker(trimmed.old, trimmed.new, resolved)
    else:
        operations = calculate_diff_sync(trimmed.old, trimmed.new, are_equal)

    mode = "remote" if remote else "local"
    return _finish(resolved, mode, old, new, trimmed, operations, started)
