"""Configuration for listdiff.

:class:`DiffConfig` captures every tuneable knob of a diff call.  Instances
can be passed to :func:`listdiff.diff` / :func:`listdiff.diff_sync`, or the
same fields can be given as keyword arguments.

:data:`DEFAULT_REMOTE_THRESHOLD` is the cell count above which the async
entry point moves the computation into a worker process.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from listdiff.errors import ListDiffConfigError

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_REMOTE_THRESHOLD: int = 50_000
"""Table cells (``len(old) * len(new)`` after trimming) above which a worker
is used.  Spawning a worker and completing the handshake takes tens of
milliseconds in CPython while one cell costs roughly a microsecond, so
smaller tables finish locally before a worker would even be ready."""

DEFAULT_HANDSHAKE_TIMEOUT: float = 10.0
"""Seconds to wait for the worker's handshake reply."""


def same_item(a: Any, b: Any) -> bool:
    """Default equality: identity first, then ``==``, as list comparison does.

    Keeps values that are not equal to themselves (``float("nan")``) matched
    against their own occurrence.
    """
    return a is b or a == b


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class DiffConfig:
    """Complete configuration for a diff call.

    Parameters
    ----------
    force_remote:
        ``True`` always runs in a worker, ``False`` never does, ``None``
        lets the dispatch heuristic decide from the trimmed lengths.
    are_equal:
        Equality predicate ``(a, b) -> bool``.  Must be given together with
        *get_hash*.  Defaults to :func:`same_item`.
    get_hash:
        Hash function ``item -> int`` consistent with *are_equal*: equal
        items must hash equal.  Defaults to the builtin :func:`hash`.
    remote_threshold:
        Cell count above which the heuristic picks the worker.
    handshake_timeout_seconds:
        Maximum wait for the worker handshake.  A missing reply is a
        protocol fault.
    reply_timeout_seconds:
        Maximum wait for any later worker message.  ``None`` waits
        indefinitely; large tables can take a long time to fill.
    metrics:
        A :class:`~listdiff.observability.MetricsHook`.  ``None`` uses the
        no-op hook.
    debug_dump_ops:
        Write the resulting operation script to *stderr*.
    """

    force_remote: bool | None = None

    are_equal: Callable[[Any, Any], bool] | None = None

    get_hash: Callable[[Any], int] | None = None

    remote_threshold: int = DEFAULT_REMOTE_THRESHOLD

    handshake_timeout_seconds: float = DEFAULT_HANDSHAKE_TIMEOUT

    reply_timeout_seconds: float | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ops: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if (self.are_equal is None) != (self.get_hash is None):
            missing = "get_hash" if self.get_hash is None else "are_equal"
            raise ListDiffConfigError(
                "are_equal and get_hash must be supplied together or not at all; "
                f"{missing} is missing.",
                context={"field": missing, "value": None},
            )
        if self.remote_threshold < 0:
            raise ListDiffConfigError(
                f"remote_threshold must be >= 0, got {self.remote_threshold}",
                context={"field": "remote_threshold", "value": self.remote_threshold},
            )
        if self.handshake_timeout_seconds <= 0:
            raise ListDiffConfigError(
                f"handshake_timeout_seconds must be > 0, got {self.handshake_timeout_seconds}",
                context={
                    "field": "handshake_timeout_seconds",
                    "value": self.handshake_timeout_seconds,
                },
            )
        if self.reply_timeout_seconds is not None and self.reply_timeout_seconds <= 0:
            raise ListDiffConfigError(
                f"reply_timeout_seconds must be > 0, got {self.reply_timeout_seconds}",
                context={"field": "reply_timeout_seconds", "value": self.reply_timeout_seconds},
            )

    def equality_predicate(self) -> Callable[[Any, Any], bool]:
        return self.are_equal if self.are_equal is not None else same_item

    def hash_function(self) -> Callable[[Any], int]:
        return self.get_hash if self.get_hash is not None else hash
