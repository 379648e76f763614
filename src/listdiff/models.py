"""Public data models for listdiff.

:class:`Operation` is the only result type: a single insertion or deletion
of one item at one index.  Indices are only meaningful when the operations
of a script are applied sequentially, in order, to the old list.
"""

from __future__ import annotations

from collections.abc import Iterable, MutableSequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from listdiff.errors import ListDiffApplyError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class OperationType(str, Enum):
    """Kinds of operation emitted by the diff engine."""

    INSERTION = "insertion"
    """Insert the item at the index, shifting later items right."""

    DELETION = "deletion"
    """Remove the item at the index, shifting later items left."""


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Operation:
    """A single operation on a list.

    Attributes
    ----------
    type:
        Either :attr:`OperationType.INSERTION` or
        :attr:`OperationType.DELETION`.
    index:
        Position in the list *at the time this operation is applied*.
    item:
        The inserted item, or the item expected at ``index`` for a
        deletion.
    """

    type: OperationType
    index: int
    item: Any

    @property
    def is_insertion(self) -> bool:
        return self.type == OperationType.INSERTION

    @property
    def is_deletion(self) -> bool:
        return self.type == OperationType.DELETION

    def shifted(self, amount: int) -> Operation:
        """Return a copy whose index is moved by *amount*."""
        if amount == 0:
            return self
        return replace(self, index=self.index + amount)

    def apply_to(self, items: MutableSequence[Any]) -> None:
        """Apply this operation to *items* in place.

        Raises
        ------
        ListDiffApplyError
            If the index is out of range, or for a deletion, if the item
            currently at ``index`` does not equal the expected item.
        """
        if self.is_insertion:
            if not 0 <= self.index <= len(items):
                raise ListDiffApplyError(
                    f"Cannot insert {self.item!r} at index {self.index} "
                    f"into a list of length {len(items)}.",
                    context={"index": self.index, "expected": self.item, "actual": None},
                )
            items.insert(self.index, self.item)
            return

        if not 0 <= self.index < len(items):
            raise ListDiffApplyError(
                f"Cannot remove {self.item!r} at index {self.index} "
                f"from a list of length {len(items)}.",
                context={"index": self.index, "expected": self.item, "actual": None},
            )
        actual = items[self.index]
        if actual is not self.item and actual != self.item:
            raise ListDiffApplyError(
                f"Tried to remove item {self.item!r} at index {self.index}, "
                f"but there's a different item at that position: {actual!r}.",
                context={"index": self.index, "expected": self.item, "actual": actual},
            )
        del items[self.index]

    def __str__(self) -> str:
        kind = "Insertion" if self.is_insertion else "Deletion"
        return f"{kind} of {self.item!r} at {self.index}."


def apply_operations(items: MutableSequence[Any], operations: Iterable[Operation]) -> None:
    """Apply an edit script to *items* in place, in order."""
    for operation in operations:
        operation.apply_to(items)


# ---------------------------------------------------------------------------
# Trimming
# ---------------------------------------------------------------------------

@dataclass
class TrimResult:
    """Output of the prefix/suffix trimming step.

    Attributes
    ----------
    start:
        Length of the common prefix.  Must be added to every operation
        index computed on the trimmed lists.
    old:
        The middle slice of the old list.
    new:
        The middle slice of the new list.
    """

    start: int
    old: list[Any] = field(default_factory=list)
    new: list[Any] = field(default_factory=list)
