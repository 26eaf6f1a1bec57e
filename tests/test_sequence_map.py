"""Tests for sequence map annotation."""

import pytest

from guidescout.analysis.sequence_map import (
    get_sequence_position_types,
    slice_context,
    select_map_guides,
    build_map_lines,
)
from guidescout.design.guide_table import compute_guide_table
from guidescout.models import GuideMatch, PositionCategory

N = PositionCategory.NORMAL
G = PositionCategory.GUIDE
P = PositionCategory.PAM


def _match(guide_start: int, guide_end: int, pam_end: int) -> GuideMatch:
    return GuideMatch(
        guide_start=guide_start,
        guide_end=guide_end,
        pam_start=guide_end,
        pam_end=pam_end,
        guide_seq="A" * max(0, guide_end - guide_start),
        pam_seq="G" * max(0, pam_end - guide_end),
    )


class TestPositionTypes:
    """Tests for per-base tagging."""

    def test_scenario_single_guide(self, sample_match: GuideMatch) -> None:
        assert get_sequence_position_types("ACGCATGGAA", [sample_match]) == [
            N, N, G, G, G, P, P, P, N, N,
        ]

    def test_no_metas_is_all_normal(self) -> None:
        assert get_sequence_position_types("ACGT", []) == [N, N, N, N]

    def test_empty_sequence(self, sample_match: GuideMatch) -> None:
        assert get_sequence_position_types("", [sample_match]) == []

    def test_ranges_are_clamped(self) -> None:
        meta = _match(2, 5, 8)
        assert get_sequence_position_types("ACGCAT", [meta]) == [N, N, G, G, G, P]

    def test_negative_start_is_clamped(self) -> None:
        meta = GuideMatch(
            guide_start=-2, guide_end=1, pam_start=1, pam_end=2,
            guide_seq="AAA", pam_seq="G",
        )
        assert get_sequence_position_types("ACGT", [meta]) == [G, P, N, N]

    def test_later_meta_overwrites_earlier(self) -> None:
        # Second guide covers the first one's PAM
        first = _match(0, 3, 5)
        second = _match(3, 6, 8)
        assert get_sequence_position_types("A" * 8, [first, second]) == [
            G, G, G, G, G, G, P, P,
        ]

    def test_later_pam_overwrites_earlier_guide(self) -> None:
        first = _match(3, 6, 8)
        second = _match(0, 3, 5)
        assert get_sequence_position_types("A" * 8, [first, second]) == [
            G, G, G, P, P, G, P, P,
        ]

    def test_length_matches_sequence(self, sample_sequence: str) -> None:
        rows = compute_guide_table(sample_sequence, 20, "NGG", advanced=False)
        categories = get_sequence_position_types(sample_sequence, rows)
        assert len(categories) == len(sample_sequence)
        for row in rows:
            assert N not in categories[row.guide_start:row.pam_end]


class TestSliceContext:
    """Tests for the flanked window around one guide."""

    def test_interior_window(self) -> None:
        seq = "ACGT" * 20
        ctx = slice_context(seq, 30, 50, 53, flank=12)
        assert (ctx.left, ctx.right) == (18, 65)
        assert ctx.context == seq[18:65]

    def test_clamped_at_both_ends(self) -> None:
        seq = "ACGTACGTAC"
        ctx = slice_context(seq, 2, 5, 8, flank=12)
        assert (ctx.left, ctx.right) == (0, 10)
        assert ctx.context == seq

    def test_relative_coordinates(self) -> None:
        seq = "ACGT" * 20
        ctx = slice_context(seq, 30, 50, 53)
        assert ctx.relative(30, 50) == (12, 32)
        assert ctx.relative(50, 53) == (32, 35)

    def test_zero_flank(self) -> None:
        ctx = slice_context("AAAACCCGGGTTT", 4, 7, 10, flank=0)
        assert ctx.context == "CCCGGG"


class TestMapSelection:
    """Tests for map guide selection and line wrapping."""

    def test_top_n(self, row_factory) -> None:
        rows = [row_factory(i, float(i)) for i in range(1, 6)]
        assert [r.rank for r in select_map_guides(rows, 3)] == [1, 2, 3]

    def test_hard_cap(self, row_factory) -> None:
        rows = [row_factory(i, float(i)) for i in range(1, 61)]
        assert len(select_map_guides(rows, 100, max_guides=50)) == 50

    def test_zero_selects_nothing(self, row_factory) -> None:
        assert select_map_guides([row_factory(1, 0.0)], 0) == []

    def test_lines_cover_the_sequence(self) -> None:
        seq = "A" * 150
        lines = build_map_lines(seq, [N] * 150, chars_per_line=70)
        assert [(line.line_start, line.line_end) for line in lines] == [
            (0, 70), (70, 140), (140, 150),
        ]
        assert all(len(line.categories) == len(line.bases) for line in lines)

    def test_empty_sequence_has_no_lines(self) -> None:
        assert build_map_lines("", []) == []

    def test_nonpositive_width_raises(self) -> None:
        with pytest.raises(ValueError):
            build_map_lines("ACGT", [N] * 4, chars_per_line=0)
