"""Worker process support.

Exports
-------
calculate_diff_in_worker
    Run the engine in a fresh process and rebuild the result locally.
Channel
    Typed, strictly ordered message channel over a pipe.
"""

from .channel import Channel
from .protocol import PROTOCOL_VERSION, WORKER_HELLO, calculate_diff_in_worker

__all__ = [
    "PROTOCOL_VERSION",
    "WORKER_HELLO",
    "Channel",
    "calculate_diff_in_worker",
]
