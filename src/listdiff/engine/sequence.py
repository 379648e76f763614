"""Immutable backtrace chains built by the edit-distance engine.

A :class:`Sequence` records one decision of the dynamic program (insert,
delete, or keep an item) and links to the decision before it.  Cells of
the same row share tails, so the live nodes form a tree rooted at a single
``unchanged`` node and no chain is ever copied.

The index of each operation is not stored; it is derived from the chain
using a cursor over the *new* list.  Insertions and unchanged nodes
advance the cursor by one, deletions leave it where it is.

Example: the chain ``insert(a) -> unchanged -> delete(c)`` means insert
``a`` at 0, keep the item now at 1, then remove the item at 2.
"""

from __future__ import annotations

from typing import Any

from listdiff.models import Operation, OperationType


class Sequence:
    """One node of a backtrace chain.

    Attributes
    ----------
    type:
        :attr:`OperationType.INSERTION`, :attr:`OperationType.DELETION`, or
        ``None`` for an unchanged item.
    parent:
        The previous decision, or ``None`` for the root.
    item:
        The inserted or deleted item; ``None`` when unchanged.
    length:
        Number of insertions and deletions in the chain up to and
        including this node.
    """

    __slots__ = ("item", "length", "parent", "type")

    def __init__(
        self,
        type: OperationType | None,
        parent: Sequence | None,
        item: Any,
        length: int,
    ) -> None:
        self.type = type
        self.parent = parent
        self.item = item
        self.length = length

    @classmethod
    def root(cls) -> Sequence:
        return cls(None, None, None, 0)

    def insert(self, item: Any) -> Sequence:
        return Sequence(OperationType.INSERTION, self, item, self.length + 1)

    def delete(self, item: Any) -> Sequence:
        return Sequence(OperationType.DELETION, self, item, self.length + 1)

    def unchanged(self) -> Sequence:
        return Sequence(None, self, None, self.length)

    def is_better_than(self, other: Sequence) -> bool:
        return self.length < other.length

    def to_operations(self) -> list[Operation]:
        """Materialise the chain ending at this node as operations.

        The chain is walked iteratively so very long scripts do not hit the
        recursion limit.
        """
        chain: list[Sequence] = []
        node: Sequence | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()

        operations: list[Operation] = []
        # The root counts as an unchanged node, so the cursor starts at -1.
        cursor = -1
        for node in chain:
            if node.type is not None:
                operations.append(Operation(node.type, cursor, node.item))
            if node.type is not OperationType.DELETION:
                cursor += 1
        return operations

    def __repr__(self) -> str:
        kind = self.type.value if self.type is not None else "unchanged"
        return f"Sequence({kind}, item={self.item!r}, length={self.length})"
