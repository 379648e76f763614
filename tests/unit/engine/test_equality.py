"""Tests for the local and remote equality strategies."""

from __future__ import annotations

import pytest

from listdiff.engine.equality import ItemProxy, LocalEquality, RemoteEquality
from listdiff.errors import ListDiffProtocolError


class FakeChannel:
    """Records sent messages and replays queued answers."""

    def __init__(self, answers=()):
        self.sent = []
        self.answers = list(answers)

    def send(self, value):
        self.sent.append(value)

    async def receive(self, expected, *, stage, timeout=None):
        value = self.answers.pop(0)
        assert isinstance(value, expected)
        return value


class TestLocalEquality:
    @pytest.mark.asyncio
    async def test_wraps_predicate(self):
        equality = LocalEquality(lambda a, b: a.lower() == b.lower())
        assert await equality.are_equal("A", "a") is True
        assert await equality.are_equal("A", "b") is False


class TestRemoteEquality:
    @pytest.mark.asyncio
    async def test_different_hashes_need_no_round_trip(self):
        channel = FakeChannel()
        equality = RemoteEquality(channel)
        result = await equality.are_equal(ItemProxy(True, 0, 1), ItemProxy(False, 0, 2))
        assert result is False
        assert channel.sent == []

    @pytest.mark.asyncio
    async def test_matching_hashes_ask_the_caller(self):
        channel = FakeChannel(answers=[True])
        equality = RemoteEquality(channel)
        result = await equality.are_equal(ItemProxy(True, 3, 7), ItemProxy(False, 5, 7))
        assert result is True
        assert channel.sent == [False, 3, 5]

    @pytest.mark.asyncio
    async def test_caller_can_deny_hash_collision(self):
        channel = FakeChannel(answers=[False])
        equality = RemoteEquality(channel)
        assert await equality.are_equal(ItemProxy(True, 0, 7), ItemProxy(False, 0, 7)) is False

    @pytest.mark.asyncio
    async def test_query_always_sends_old_index_first(self):
        channel = FakeChannel(answers=[True])
        equality = RemoteEquality(channel)
        await equality.are_equal(ItemProxy(False, 9, 7), ItemProxy(True, 2, 7))
        assert channel.sent == [False, 2, 9]

    @pytest.mark.asyncio
    async def test_same_list_comparison_is_a_fault(self):
        equality = RemoteEquality(FakeChannel())
        with pytest.raises(ListDiffProtocolError) as exc_info:
            await equality.are_equal(ItemProxy(True, 0, 1), ItemProxy(True, 1, 1))
        assert exc_info.value.context["stage"] == "equality"
