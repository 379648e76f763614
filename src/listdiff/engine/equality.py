"""Equality strategies for the suspension-capable engine.

The strategy is chosen once per engine run:

* :class:`LocalEquality` wraps a plain predicate over real items.
* :class:`RemoteEquality` runs inside a worker, where the items are
  :class:`ItemProxy` stand-ins.  Proxies with different hashes are unequal
  without any traffic; for matching hashes the worker asks the caller,
  which owns the real items, and waits for the answer.

The engine awaits one comparison at a time, so a remote query is always
answered before the next one is sent.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from listdiff.errors import ListDiffProtocolError

if TYPE_CHECKING:
    from listdiff.worker.channel import Channel


@dataclass(frozen=True)
class ItemProxy:
    """Worker-side reference to an item that lives in the caller process.

    Attributes
    ----------
    is_from_old_list:
        Which of the caller's lists the item belongs to.
    index:
        Position of the item in that list.
    hash:
        The caller's hash of the item.
    """

    is_from_old_list: bool
    index: int
    hash: int


@dataclass(frozen=True)
class LocalEquality:
    """Compare real items with a predicate; never suspends for long."""

    predicate: Callable[[Any, Any], bool]

    async def are_equal(self, old_item: Any, new_item: Any) -> bool:
        return bool(self.predicate(old_item, new_item))


@dataclass(frozen=True)
class RemoteEquality:
    """Compare :class:`ItemProxy` objects by asking the caller over *channel*."""

    channel: Channel

    async def are_equal(self, old_item: ItemProxy, new_item: ItemProxy) -> bool:
        if old_item.is_from_old_list == new_item.is_from_old_list:
            raise ListDiffProtocolError(
                "Asked to compare two items from the same list.",
                context={
                    "stage": "equality",
                    "expected": "one old and one new item",
                    "received": (old_item, new_item),
                },
            )
        if old_item.hash != new_item.hash:
            return False
        if not old_item.is_from_old_list:
            old_item, new_item = new_item, old_item

        self.channel.send(False)
        self.channel.send(old_item.index)
        self.channel.send(new_item.index)
        return await self.channel.receive(bool, stage="equality")


Equality = LocalEquality | RemoteEquality
