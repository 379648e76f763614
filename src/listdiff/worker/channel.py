"""Ordered, typed message channel between the caller and a worker.

A :class:`Channel` wraps one end of a duplex :func:`multiprocessing.Pipe`.
Every message is a single primitive; the receiver states which type it
expects next, and anything else is a protocol fault.  Blocking reads and
batched writes run in a helper thread so the caller's event loop keeps
serving other tasks while it waits.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from multiprocessing.connection import Connection
from typing import Any

from listdiff.errors import ListDiffProtocolError

ERROR_TAG = "error"
"""First element of the ``(ERROR_TAG, message)`` tuple a failing worker
sends before it exits."""

_DEFAULT = object()


def _type_name(value: Any) -> str:
    return type(value).__name__


class Channel:
    """One end of a bidirectional worker channel.

    Parameters
    ----------
    connection:
        The pipe end owned by this side.
    timeout:
        Default seconds to wait for each incoming message; ``None`` waits
        indefinitely.
    """

    def __init__(self, connection: Connection, timeout: float | None = None) -> None:
        self._connection = connection
        self._timeout = timeout

    def send(self, value: Any) -> None:
        try:
            self._connection.send(value)
        except (OSError, ValueError) as exc:
            raise ListDiffProtocolError(
                "Channel closed while sending.",
                context={"stage": "send", "expected": None, "received": None},
                cause=exc,
            ) from exc

    async def send_all(self, values: Sequence[Any]) -> None:
        """Send *values* in order from a helper thread.

        A long batch can fill the pipe buffer before the peer drains it; the
        event loop keeps running while the thread waits.
        """
        await asyncio.to_thread(self._send_blocking, values)

    def _send_blocking(self, values: Sequence[Any]) -> None:
        for value in values:
            self.send(value)

    def send_error(self, message: str) -> None:
        self.send((ERROR_TAG, message))

    async def receive(
        self,
        expected: type,
        *,
        stage: str,
        timeout: float | None | object = _DEFAULT,
    ) -> Any:
        """Wait for the next message and check that it is an *expected*.

        ``bool`` is never accepted where an ``int`` is expected.  An error
        tuple from the other side is raised as a protocol fault carrying
        its message.

        Raises
        ------
        ListDiffProtocolError
            On timeout, a closed channel, or a message of the wrong type.
        """
        wait = self._timeout if timeout is _DEFAULT else timeout
        value = await asyncio.to_thread(self._receive_blocking, stage, wait)

        if isinstance(value, tuple) and len(value) == 2 and value[0] == ERROR_TAG:
            raise ListDiffProtocolError(
                f"Peer reported a failure during {stage}: {value[1]}",
                context={"stage": stage, "expected": expected.__name__, "received": value},
            )

        if expected is int:
            valid = isinstance(value, int) and not isinstance(value, bool)
        else:
            valid = isinstance(value, expected)
        if not valid:
            raise ListDiffProtocolError(
                f"Expected {expected.__name__} during {stage}, got {_type_name(value)}.",
                context={"stage": stage, "expected": expected.__name__, "received": value},
            )
        return value

    def _receive_blocking(self, stage: str, timeout: float | None) -> Any:
        try:
            if timeout is not None and not self._connection.poll(timeout):
                raise ListDiffProtocolError(
                    f"No message within {timeout} seconds during {stage}.",
                    context={"stage": stage, "expected": "message", "received": None},
                )
            return self._connection.recv()
        except (EOFError, OSError) as exc:
            raise ListDiffProtocolError(
                f"Channel closed during {stage}.",
                context={"stage": stage, "expected": "message", "received": None},
                cause=exc,
            ) from exc

    def close(self) -> None:
        self._connection.close()
