"""listdiff: minimal insert/delete edit scripts between two lists.

Public re-exports
-----------------

* **Entry points:** :func:`diff` (async, may use a worker process) and
  :func:`diff_sync`
* **Configuration:** :class:`DiffConfig`, :func:`configure_logging`
* **Errors:** :class:`ListDiffError`, its subclasses, and :class:`ErrorCode`
* **Models:** :class:`Operation`, :class:`OperationType`,
  :func:`apply_operations`

Usage::

    import asyncio
    from listdiff import apply_operations, diff

    old = ["coconut", "nut", "peanut"]
    new = ["kiwi", "coconut", "maracuja", "nut", "banana"]
    operations = asyncio.run(diff(old, new))

    items = list(old)
    apply_operations(items, operations)
    assert items == new
"""

from __future__ import annotations

# ── Entry points ───────────────────────────────────────────────────────
from listdiff.api import diff, diff_sync

# ── Configuration ───────────────────────────────────────────────────────
from listdiff.config import DEFAULT_REMOTE_THRESHOLD, DiffConfig
from listdiff.observability import configure_logging

# ── Errors ──────────────────────────────────────────────────────────────
from listdiff.errors import (
    ErrorCode,
    ListDiffApplyError,
    ListDiffConfigError,
    ListDiffError,
    ListDiffProtocolError,
)

# ── Models ──────────────────────────────────────────────────────────────
from listdiff.models import Operation, OperationType, TrimResult, apply_operations

__all__ = [
    # Entry points
    "diff",
    "diff_sync",
    # Configuration
    "DiffConfig",
    "DEFAULT_REMOTE_THRESHOLD",
    "configure_logging",
    # Errors
    "ErrorCode",
    "ListDiffError",
    "ListDiffConfigError",
    "ListDiffProtocolError",
    "ListDiffApplyError",
    # Models
    "Operation",
    "OperationType",
    "TrimResult",
    "apply_operations",
]
