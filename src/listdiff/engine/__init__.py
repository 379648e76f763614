"""Diff engine.

Exports
-------
calculate_diff_sync
    Fill the edit-distance table with a plain predicate.
calculate_diff
    Same table, awaiting an :data:`Equality` strategy for each comparison.
trim
    Strip common leading and trailing runs.
should_run_remote
    Decide whether a diff is worth a worker process.
"""

from .calculate import calculate_diff, calculate_diff_sync
from .dispatch import should_run_remote
from .equality import Equality, ItemProxy, LocalEquality, RemoteEquality
from .sequence import Sequence
from .trim import trim

__all__ = [
    "Equality",
    "ItemProxy",
    "LocalEquality",
    "RemoteEquality",
    "Sequence",
    "calculate_diff",
    "calculate_diff_sync",
    "should_run_remote",
    "trim",
]
