"""Common prefix/suffix trimming.

Lists handed to a diff usually share long leading and trailing runs.
Cutting those off shrinks the ``N * M`` table before the engine (or the
dispatch heuristic) ever sees it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from listdiff.models import TrimResult


def trim(
    old: Sequence[Any],
    new: Sequence[Any],
    are_equal: Callable[[Any, Any], bool],
) -> TrimResult:
    """Strip the longest common prefix and suffix of *old* and *new*.

    The suffix scan only covers what the prefix scan left over, so an item
    is never counted twice (``[a]`` vs ``[a, a]`` keeps one ``a`` in the
    new slice).

    Parameters
    ----------
    old, new:
        The lists to compare.
    are_equal:
        Equality predicate, called as ``are_equal(old_item, new_item)``.

    Returns
    -------
    TrimResult
        The prefix length and the two middle slices.
    """
    old_len = len(old)
    new_len = len(new)

    start = 0
    while start < old_len and start < new_len and are_equal(old[start], new[start]):
        start += 1

    end = 0
    while (
        end < old_len - start
        and end < new_len - start
        and are_equal(old[old_len - 1 - end], new[new_len - 1 - end])
    ):
        end += 1

    return TrimResult(
        start=start,
        old=list(old[start:old_len - end]),
        new=list(new[start:new_len - end]),
    )
