"""Shared test fixtures for the listdiff test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from listdiff.config import DiffConfig


class Item:
    """Test item whose identity is ``id`` and whose payload is ``value``.

    Default ``==`` / ``hash`` use ``id`` only, so two items can be equal
    under a custom value-based predicate while differing by default.
    """

    def __init__(self, id: int, value: int) -> None:
        self.id = id
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Item) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Item({self.id}, {self.value})"


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []
        self.gauges: list[dict[str, Any]] = []

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.gauges.append({"name": name, "value": value, "tags": tags})

    def names(self) -> list[str]:
        return [entry["name"] for entry in self.increments]


def _apply_all(old: list[Any], operations: list[Any]) -> list[Any]:
    items = list(old)
    for operation in operations:
        operation.apply_to(items)
    return items


@pytest.fixture
def items() -> list[Item]:
    """Four items with distinct ids and values 0..3."""
    return [Item(i, i) for i in range(4)]


@pytest.fixture
def value_config() -> DiffConfig:
    """Configuration comparing :class:`Item` objects by ``value``."""
    return DiffConfig(
        are_equal=lambda a, b: a.value == b.value,
        get_hash=lambda item: hash(item.value),
    )


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()


@pytest.fixture
def make_item() -> type[Item]:
    """The :class:`Item` class, for tests that build their own items."""
    return Item


@pytest.fixture
def apply_all() -> Callable[[list[Any], list[Any]], list[Any]]:
    """Apply operations to a copy of a list and return the copy."""
    return _apply_all
