"""Local-vs-worker dispatch heuristic."""

from __future__ import annotations

from listdiff.config import DEFAULT_REMOTE_THRESHOLD


def should_run_remote(
    old_len: int,
    new_len: int,
    threshold: int = DEFAULT_REMOTE_THRESHOLD,
    force: bool | None = None,
) -> bool:
    """Decide whether a diff of the given (trimmed) sizes goes to a worker.

    The engine fills ``old_len * new_len`` cells.  Below *threshold* the
    fill is cheaper than starting a worker process.  An explicit *force*
    wins over the heuristic.
    """
    if force is not None:
        return force
    return old_len * new_len > threshold
