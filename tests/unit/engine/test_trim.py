"""Tests for prefix/suffix trimming and the dispatch heuristic."""

import operator

from listdiff.engine.dispatch import should_run_remote
from listdiff.engine.trim import trim


class TestTrim:
    def test_identical_lists_trim_to_nothing(self):
        result = trim([1, 2, 3], [1, 2, 3], operator.eq)
        assert result.start == 3
        assert result.old == []
        assert result.new == []

    def test_disjoint_lists_are_kept_whole(self):
        result = trim([1, 2], [3, 4, 5], operator.eq)
        assert result.start == 0
        assert result.old == [1, 2]
        assert result.new == [3, 4, 5]

    def test_common_prefix_and_suffix(self):
        result = trim(list("abXcd"), list("abYYcd"), operator.eq)
        assert result.start == 2
        assert result.old == ["X"]
        assert result.new == ["Y", "Y"]

    def test_suffix_does_not_overlap_prefix(self):
        result = trim(["a"], ["a", "a"], operator.eq)
        assert result.start == 1
        assert result.old == []
        assert result.new == ["a"]

    def test_suffix_only(self):
        result = trim([0, 9], [1, 2, 9], operator.eq)
        assert result.start == 0
        assert result.old == [0]
        assert result.new == [1, 2]

    def test_empty_lists(self):
        result = trim([], [], operator.eq)
        assert result.start == 0
        assert result.old == []
        assert result.new == []

    def test_one_side_empty(self):
        result = trim([], [1, 2], operator.eq)
        assert result.start == 0
        assert result.new == [1, 2]

    def test_uses_predicate(self):
        result = trim(["A", "b"], ["a", "B"], lambda a, b: a.lower() == b.lower())
        assert result.start == 2

    def test_accepts_tuples(self):
        result = trim((1, 2, 3), (1, 4, 3), operator.eq)
        assert result.old == [2]
        assert result.new == [4]


class TestShouldRunRemote:
    def test_below_threshold_is_local(self):
        assert should_run_remote(10, 10, threshold=100) is False

    def test_at_threshold_is_local(self):
        assert should_run_remote(10, 10, threshold=100) is False
        assert should_run_remote(100, 1, threshold=100) is False

    def test_above_threshold_is_remote(self):
        assert should_run_remote(11, 10, threshold=100) is True

    def test_empty_side_never_remote(self):
        assert should_run_remote(0, 10_000_000, threshold=0) is False

    def test_force_overrides_heuristic(self):
        assert should_run_remote(1, 1, threshold=100, force=True) is True
        assert should_run_remote(1000, 1000, threshold=100, force=False) is False
