"""Edit-distance engine producing a minimal insert/delete script.

The engine fills a table with the old list along the x axis and the new
list along the y axis.  Cell ``(x, y)`` holds the cheapest way to turn the
first ``x`` old items into the first ``y`` new items.  For old ``[a, b]``
and new ``[a, c]``::

        a b
      0 1 2
    a 1 0 1
    c 2 1 2

Row 0 and column 0 are plain counts: deleting every old item, or
inserting every new one.  Every other cell follows two rules:

* If the items are equal, nothing has to happen, so the cell copies its
  upper-left neighbour.
* Otherwise it extends the cell above with an insertion, or the cell to
  the left with a deletion, whichever is cheaper.  The insertion is taken
  only when strictly cheaper; on a tie the deletion is chained last, so
  the insertion comes first in the emitted script.

Instead of bare counts the cells hold :class:`Sequence` chains, so the
chosen path can be walked back at the end.  Only the row being built and
the one before it are referenced; older rows survive only through shared
tails.

Cells are filled strictly in order, and the async variant awaits one
equality check at a time.  The worker protocol relies on that: it has
exactly one outstanding question to the caller at any moment.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence as SequenceABC
from typing import Any

from listdiff.models import Operation

from .equality import Equality
from .sequence import Sequence


def _first_row(old: SequenceABC[Any]) -> list[Sequence]:
    row = [Sequence.root()]
    for item in old:
        row.append(row[-1].delete(item))
    return row


def _changed_cell(
    row: list[Sequence],
    next_row: list[Sequence],
    x: int,
    old_item: Any,
    new_item: Any,
) -> Sequence:
    above = row[x]
    left = next_row[x - 1]
    if above.is_better_than(left):
        return above.insert(new_item)
    return left.delete(old_item)


def calculate_diff_sync(
    old: SequenceABC[Any],
    new: SequenceABC[Any],
    are_equal: Callable[[Any, Any], bool],
) -> list[Operation]:
    """Compute the edit script from *old* to *new* synchronously.

    *are_equal* is called as ``are_equal(old_item, new_item)``.
    """
    row = _first_row(old)

    for new_item in new:
        next_row = [row[0].insert(new_item)]
        for x in range(1, len(old) + 1):
            old_item = old[x - 1]
            if are_equal(old_item, new_item):
                next_row.append(row[x - 1].unchanged())
            else:
                next_row.append(_changed_cell(row, next_row, x, old_item, new_item))
        row = next_row

    return row[-1].to_operations()


async def calculate_diff(
    old: SequenceABC[Any],
    new: SequenceABC[Any],
    equality: Equality,
) -> list[Operation]:
    """Compute the edit script from *old* to *new*, awaiting each equality check.

    Produces exactly the same script as :func:`calculate_diff_sync` for the
    same items and predicate.
    """
    row = _first_row(old)

    for new_item in new:
        next_row = [row[0].insert(new_item)]
        for x in range(1, len(old) + 1):
            old_item = old[x - 1]
            if await equality.are_equal(old_item, new_item):
                next_row.append(row[x - 1].unchanged())
            else:
                next_row.append(_changed_cell(row, next_row, x, old_item, new_item))
        row = next_row

    return row[-1].to_operations()
