"""Run the diff engine in a worker process that shares no memory with the caller.

Items cannot (and should not) be copied to the worker.  Instead the caller
sends each item's hash, and the worker compares :class:`ItemProxy` objects.
When two hashes match, the worker asks the caller whether the real items
are equal.  The conversation over the channel is:

* The caller starts the worker, which greets it with
  ``(WORKER_HELLO, PROTOCOL_VERSION, pid)``.
* For the old list, then the new list, the caller sends the length
  followed by the hash of every item.
* While filling the table, for every pair of matching hashes the worker
  sends ``False`` (not done), the old index and the new index, then waits
  for a ``bool`` from the caller.
* When done, the worker sends ``True``, the number of operations and, per
  operation, whether it is an insertion, its index, and the index of its
  item in the new list (insertions) or the old list (deletions).
* The caller rebuilds the operations from its own lists.

The engine asks one question at a time, so no correlation ids are needed.
Any message that breaks this order is a :class:`ListDiffProtocolError`.
"""

from __future__ import annotations

import asyncio
import multiprocessing
import os
from collections.abc import Callable, Sequence
from multiprocessing.connection import Connection
from typing import Any

from listdiff.config import DiffConfig
from listdiff.engine.calculate import calculate_diff
from listdiff.engine.equality import ItemProxy, RemoteEquality
from listdiff.errors import ListDiffConfigError, ListDiffError, ListDiffProtocolError
from listdiff.models import Operation, OperationType
from listdiff.observability import get_logger, resolve_metrics

from .channel import Channel

log = get_logger("listdiff.worker")

WORKER_HELLO = "listdiff-worker"
PROTOCOL_VERSION = 1

_JOIN_TIMEOUT = 2.0


# ---------------------------------------------------------------------------
# Caller side
# ---------------------------------------------------------------------------

def compute_hashes(items: Sequence[Any], get_hash: Callable[[Any], int]) -> list[int]:
    """Hash every item, rejecting hash functions that do not return ints."""
    hashes: list[int] = []
    for index, item in enumerate(items):
        value = get_hash(item)
        if not isinstance(value, int) or isinstance(value, bool):
            raise ListDiffConfigError(
                f"get_hash must return an int, got {type(value).__name__} "
                f"for item at index {index}.",
                context={"field": "get_hash", "value": value},
            )
        hashes.append(value)
    return hashes


def _check_index(value: int, limit: int, stage: str, what: str) -> int:
    if not 0 <= value < limit:
        raise ListDiffProtocolError(
            f"{what} index {value} out of range during {stage} (length {limit}).",
            context={"stage": stage, "expected": f"0 <= index < {limit}", "received": value},
        )
    return value


async def handshake(channel: Channel, timeout: float) -> int:
    """Wait for the worker's greeting and return its pid."""
    greeting = await channel.receive(tuple, stage="handshake", timeout=timeout)
    if (
        len(greeting) != 3
        or greeting[0] != WORKER_HELLO
        or greeting[1] != PROTOCOL_VERSION
        or not isinstance(greeting[2], int)
    ):
        raise ListDiffProtocolError(
            "Unexpected handshake from worker.",
            context={
                "stage": "handshake",
                "expected": (WORKER_HELLO, PROTOCOL_VERSION, "pid"),
                "received": greeting,
            },
        )
    return greeting[2]


async def send_item_list(channel: Channel, hashes: Sequence[int]) -> None:
    await channel.send_all([len(hashes), *hashes])


async def answer_queries(
    channel: Channel,
    old: Sequence[Any],
    new: Sequence[Any],
    are_equal: Callable[[Any, Any], bool],
) -> int:
    """Answer equality questions until the worker reports completion.

    Returns the number of questions answered.
    """
    queries = 0
    while not await channel.receive(bool, stage="query"):
        old_index = _check_index(
            await channel.receive(int, stage="query"), len(old), "query", "Old",
        )
        new_index = _check_index(
            await channel.receive(int, stage="query"), len(new), "query", "New",
        )
        channel.send(bool(are_equal(old[old_index], new[new_index])))
        queries += 1
    return queries


async def receive_operations(
    channel: Channel,
    old: Sequence[Any],
    new: Sequence[Any],
) -> list[Operation]:
    """Read the final operation list and rebuild it from the caller's items."""
    count = await channel.receive(int, stage="result")
    if not 0 <= count <= len(old) + len(new):
        raise ListDiffProtocolError(
            f"Worker announced {count} operations for lists of "
            f"length {len(old)} and {len(new)}.",
            context={
                "stage": "result",
                "expected": f"0 <= count <= {len(old) + len(new)}",
                "received": count,
            },
        )

    operations: list[Operation] = []
    for _ in range(count):
        is_insertion = await channel.receive(bool, stage="result")
        index = await channel.receive(int, stage="result")
        if index < 0:
            raise ListDiffProtocolError(
                f"Negative operation index {index}.",
                context={"stage": "result", "expected": "index >= 0", "received": index},
            )
        source = await channel.receive(int, stage="result")
        if is_insertion:
            item = new[_check_index(source, len(new), "result", "New")]
            operations.append(Operation(OperationType.INSERTION, index, item))
        else:
            item = old[_check_index(source, len(old), "result", "Old")]
            operations.append(Operation(OperationType.DELETION, index, item))
    return operations


async def run_caller(
    channel: Channel,
    old: Sequence[Any],
    new: Sequence[Any],
    old_hashes: Sequence[int],
    new_hashes: Sequence[int],
    are_equal: Callable[[Any, Any], bool],
    handshake_timeout: float,
) -> tuple[list[Operation], int]:
    """Drive a full conversation with an already started worker.

    Returns the operations and the number of equality questions answered.
    """
    pid = await handshake(channel, handshake_timeout)
    log.debug(
        "Worker handshake complete",
        extra={"extra_fields": {"op": "handshake", "worker_pid": pid}},
    )
    await send_item_list(channel, old_hashes)
    await send_item_list(channel, new_hashes)
    queries = await answer_queries(channel, old, new, are_equal)
    operations = await receive_operations(channel, old, new)
    return operations, queries


async def _stop(process: multiprocessing.process.BaseProcess) -> None:
    await asyncio.to_thread(process.join, _JOIN_TIMEOUT)
    if process.is_alive():
        log.warning(
            "Worker did not exit, terminating",
            extra={"extra_fields": {"op": "teardown", "worker_pid": process.pid}},
        )
        process.terminate()
        await asyncio.to_thread(process.join, _JOIN_TIMEOUT)
    if not process.is_alive():
        process.close()


async def calculate_diff_in_worker(
    old: Sequence[Any],
    new: Sequence[Any],
    config: DiffConfig,
) -> list[Operation]:
    """Compute the edit script from *old* to *new* in a fresh worker process.

    Exactly one worker and one pipe are used per call.  The worker is
    joined (or terminated) before this coroutine returns or raises.

    Raises
    ------
    ListDiffConfigError
        If the hash function returns something other than an ``int``.
    ListDiffProtocolError
        On any malformed, missing, or out-of-order message.
    """
    get_hash = config.hash_function()
    old_hashes = compute_hashes(old, get_hash)
    new_hashes = compute_hashes(new, get_hash)
    metrics = resolve_metrics(config.metrics)

    context = multiprocessing.get_context("spawn")
    caller_end, worker_end = context.Pipe(duplex=True)
    process = context.Process(
        target=worker_main,
        args=(worker_end,),
        name="listdiff-worker",
        daemon=True,
    )
    channel = Channel(caller_end, timeout=config.reply_timeout_seconds)
    try:
        await asyncio.to_thread(process.start)
        # Only the worker may hold its end; otherwise a dead worker would
        # never close the pipe.
        worker_end.close()
        operations, queries = await run_caller(
            channel,
            old,
            new,
            old_hashes,
            new_hashes,
            config.equality_predicate(),
            config.handshake_timeout_seconds,
        )
    except ListDiffProtocolError:
        metrics.increment("listdiff.worker_faults_total")
        raise
    finally:
        channel.close()
        worker_end.close()
        if process.pid is not None:
            await _stop(process)

    metrics.increment("listdiff.equality_queries_total", queries)
    return operations


# ---------------------------------------------------------------------------
# Worker side
# ---------------------------------------------------------------------------

async def receive_item_list(channel: Channel, *, is_old_list: bool) -> list[ItemProxy]:
    length = await channel.receive(int, stage="transfer")
    if length < 0:
        raise ListDiffProtocolError(
            f"Negative list length {length}.",
            context={"stage": "transfer", "expected": "length >= 0", "received": length},
        )
    items: list[ItemProxy] = []
    for index in range(length):
        value = await channel.receive(int, stage="transfer")
        items.append(ItemProxy(is_from_old_list=is_old_list, index=index, hash=value))
    return items


def send_operations(channel: Channel, operations: Sequence[Operation]) -> None:
    channel.send(True)
    channel.send(len(operations))
    for operation in operations:
        channel.send(operation.is_insertion)
        channel.send(operation.index)
        channel.send(operation.item.index)


async def serve(channel: Channel) -> None:
    """Worker side of the protocol, from greeting to completion."""
    channel.send((WORKER_HELLO, PROTOCOL_VERSION, os.getpid()))
    old = await receive_item_list(channel, is_old_list=True)
    new = await receive_item_list(channel, is_old_list=False)
    operations = await calculate_diff(old, new, RemoteEquality(channel))
    send_operations(channel, operations)


def worker_main(connection: Connection) -> None:
    """Process entry point of the worker."""
    channel = Channel(connection)
    try:
        asyncio.run(serve(channel))
    except ListDiffError as exc:
        log.error(
            "Worker aborted",
            exc_info=True,
            extra={"extra_fields": {"op": "serve"}},
        )
        try:
            channel.send_error(exc.message)
        except ListDiffProtocolError:
            log.debug("Caller already gone, error not delivered")
        raise SystemExit(1) from exc
    finally:
        channel.close()
