"""Error hierarchy for listdiff.

Every public error class inherits from :class:`ListDiffError`. Each carries
a machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

None of these errors are retried internally: a diff call either returns a
complete operation list or raises.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error listdiff can raise."""

    CONFIG_ERROR = "CONFIG_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    APPLY_MISMATCH = "APPLY_MISMATCH"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class ListDiffError(Exception):
    """Base exception for all listdiff errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------

class ListDiffConfigError(ListDiffError):
    """The diff options are inconsistent or invalid.

    Raised before any computation starts, e.g. when an equality predicate
    is supplied without a hash function (or vice versa).

    Context keys: ``field``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class ListDiffProtocolError(ListDiffError):
    """The worker channel delivered a malformed, missing, or out-of-order
    message.  Fatal for the invocation; no partial result is returned.

    Context keys: ``stage``, ``expected``, ``received``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PROTOCOL_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class ListDiffApplyError(ListDiffError):
    """An operation was applied to a list that does not match it, e.g.
    operations applied out of order or against a diverged list.

    Context keys: ``index``, ``expected``, ``actual``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.APPLY_MISMATCH,
            message=message,
            context=context,
            cause=cause,
        )
