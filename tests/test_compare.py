"""Tests for position-wise sequence comparison."""

import pytest

from guidescout.analysis.compare import compute_diff, compare_stats
from guidescout.models import DiffType


class TestComputeDiff:
    """Tests for per-position classification."""

    def test_identical(self) -> None:
        diff = compute_diff("ACGT", "ACGT")
        assert all(d.type == DiffType.MATCH for d in diff)
        assert [d.pos for d in diff] == [0, 1, 2, 3]

    def test_mismatch(self) -> None:
        diff = compute_diff("ACGT", "AGGT")
        assert diff[1].type == DiffType.MISMATCH
        assert (diff[1].base_a, diff[1].base_b) == ("C", "G")

    def test_longer_first_is_deletion(self) -> None:
        diff = compute_diff("ACGTAA", "ACGT")
        assert [d.type for d in diff[4:]] == [DiffType.DELETION, DiffType.DELETION]
        assert diff[5].base_b is None

    def test_longer_second_is_insertion(self) -> None:
        diff = compute_diff("AC", "ACG")
        assert diff[2].type == DiffType.INSERTION
        assert diff[2].base_a is None
        assert diff[2].base_b == "G"

    def test_no_alignment_is_attempted(self) -> None:
        # A one-base shift makes every later position a mismatch
        diff = compute_diff("ACGT", "TACG")
        assert [d.type for d in diff] == [DiffType.MISMATCH] * 4

    def test_both_empty(self) -> None:
        assert compute_diff("", "") == []


class TestCompareStats:
    """Tests for aggregated counts."""

    def test_counts(self) -> None:
        stats = compare_stats(compute_diff("ACGTAA", "AGGT"))
        assert stats.matches == 3
        assert stats.mismatches == 1
        assert stats.deletions == 2
        assert stats.insertions == 0
        assert stats.identity == pytest.approx(50.0)

    def test_identity_100(self) -> None:
        assert compare_stats(compute_diff("ACGT", "ACGT")).identity == 100.0

    def test_empty_is_none(self) -> None:
        assert compare_stats([]) is None
