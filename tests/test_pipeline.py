"""Tests for the end-to-end analysis shared by the CLI and API."""

import logging

import pytest

from guidescout.analysis.pipeline import analyze, SequenceTooShortError
from guidescout.config import get_config
from guidescout.design.pam_table import DEFAULT_CAS_SYSTEM, UnknownCasSystemError

ONE_GUIDE = "ATCGATCGATCGATCGATCGAGGATCGATCGATCGATCGATCG"


class TestAnalyze:
    """Tests for analyze()."""

    def test_defaults(self, sample_sequence: str) -> None:
        result = analyze(sample_sequence)
        assert result.cas_system == DEFAULT_CAS_SYSTEM
        assert result.pam_pattern == "NGG"
        assert result.guide_length == 20
        assert result.advanced_scores is True
        assert result.gc_range == (30.0, 80.0)
        assert result.sequence_length == len(sample_sequence)

    def test_single_guide(self) -> None:
        result = analyze(ONE_GUIDE, advanced=False)
        assert len(result.guides) == 1
        guide = result.guides[0]
        assert (guide.guide_start, guide.matched_pam) == (0, "AGG")
        assert guide.gc_percent == 50.0
        assert guide.total_score == 0.0

    def test_fasta_input(self, sample_fasta: str, sample_sequence: str) -> None:
        assert analyze(sample_fasta) == analyze(sample_sequence)

    def test_gc_filter_and_summary(self, sample_sequence: str) -> None:
        result = analyze(sample_sequence, gc_range=(45.0, 55.0))
        assert all(45.0 <= g.gc_percent <= 55.0 for g in result.filtered_guides)
        assert result.summary.n_raw == len(result.guides)
        assert result.summary.n_filtered == len(result.filtered_guides)

    def test_custom_pam_overrides_system(self) -> None:
        result = analyze(ONE_GUIDE, pam_pattern="ngg")
        assert result.pam_pattern == "NGG"
        assert result.cas_system is None

    def test_other_system(self) -> None:
        result = analyze("ACGT" * 7, cas_system="E. coli (Type I-E)", guide_length=18)
        assert result.pam_pattern == "AWG"
        assert result.cas_system == "E. coli (Type I-E)"

    def test_unknown_system_raises(self, sample_sequence: str) -> None:
        with pytest.raises(UnknownCasSystemError):
            analyze(sample_sequence, cas_system="Cas42")

    def test_too_short_raises(self) -> None:
        with pytest.raises(SequenceTooShortError, match="too short"):
            analyze("ACGTAGG")

    def test_too_short_after_cleaning(self) -> None:
        # Only 8 valid bases survive cleaning
        with pytest.raises(SequenceTooShortError):
            analyze("ACGT NNNN xxxx ACGT" + "-" * 40)

    def test_no_guides_is_not_an_error(self) -> None:
        result = analyze("AT" * 30)
        assert result.guides == []
        assert result.summary.best_score is None


class TestPamSites:
    """Tests for the raw PAM site count."""

    def test_single_site(self) -> None:
        assert analyze(ONE_GUIDE).n_pam_sites == 1

    def test_counts_sites_without_guide_room(self) -> None:
        # AGG at 20 has a guide; TGG at 1 does not
        result = analyze("ATGG" + ONE_GUIDE[4:], advanced=False)
        assert result.n_pam_sites == 2
        assert len(result.guides) == 1


class TestLongSequenceWarning:
    """The warning threshold comes from settings."""

    def test_threshold_from_settings(self, monkeypatch, caplog) -> None:
        monkeypatch.setenv("GUIDESCOUT_DESIGN__OFFTARGET_WARN_LENGTH", "30")
        get_config.cache_clear()
        try:
            with caplog.at_level(logging.WARNING, logger="guidescout.design.guide_table"):
                analyze(ONE_GUIDE)
        finally:
            monkeypatch.delenv("GUIDESCOUT_DESIGN__OFFTARGET_WARN_LENGTH")
            get_config.cache_clear()
        assert "quadratic" in caplog.text
