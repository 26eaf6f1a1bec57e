"""Tests for PAM tables and IUPAC matching."""

import pytest

from guidescout.design.pam_table import (
    CAS_PAM_TABLE,
    IUPAC_CODES,
    DEFAULT_CAS_SYSTEM,
    UnknownCasSystemError,
    pam_matches,
    get_pam_pattern,
    list_cas_systems,
    iupac_legend,
)


class TestPamMatches:
    """Tests for IUPAC-aware PAM matching."""

    def test_ngg_matches_tgg(self) -> None:
        assert pam_matches("TGG", "NGG")

    def test_ngg_rejects_tga(self) -> None:
        assert not pam_matches("TGA", "NGG")

    def test_wrong_length_is_false_not_error(self) -> None:
        assert not pam_matches("TG", "NGG")
        assert not pam_matches("TGGA", "NGG")

    def test_n_matches_every_base(self) -> None:
        for base in "ATGC":
            assert pam_matches(base + "GG", "NGG")

    def test_two_base_codes(self) -> None:
        # SaCas9 NNGRRT: R is A/G
        assert pam_matches("CTGAGT", "NNGRRT")
        assert pam_matches("CTGGAT", "NNGRRT")
        assert not pam_matches("CTGCAT", "NNGRRT")

    def test_w_code(self) -> None:
        assert pam_matches("AAG", "AWG")
        assert pam_matches("ATG", "AWG")
        assert not pam_matches("AGG", "AWG")

    def test_unknown_symbol_never_matches(self) -> None:
        # S is a valid IUPAC code but not in this table
        for base in "ATGC":
            assert not pam_matches(base, "S")

    def test_empty_fragment_and_pattern(self) -> None:
        assert pam_matches("", "")


class TestTables:
    """Tests for the static tables."""

    def test_spcas9_is_ngg(self) -> None:
        assert CAS_PAM_TABLE["SpCas9 (S. pyogenes, Type II)"] == "NGG"

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            CAS_PAM_TABLE["Custom"] = "NNN"  # type: ignore[index]
        with pytest.raises(TypeError):
            IUPAC_CODES["S"] = frozenset("GC")  # type: ignore[index]

    def test_iupac_sets_are_immutable(self) -> None:
        assert isinstance(IUPAC_CODES["N"], frozenset)
        assert IUPAC_CODES["N"] == frozenset("ATGC")

    def test_all_table_patterns_use_known_symbols(self) -> None:
        for pattern in CAS_PAM_TABLE.values():
            assert set(pattern) <= set(IUPAC_CODES)

    def test_default_system_is_listed(self) -> None:
        assert DEFAULT_CAS_SYSTEM in list_cas_systems()
        assert list_cas_systems()[0] == DEFAULT_CAS_SYSTEM

    def test_get_pam_pattern_unknown_raises(self) -> None:
        with pytest.raises(UnknownCasSystemError):
            get_pam_pattern("NotACas")

    def test_unknown_system_error_is_value_error(self) -> None:
        assert issubclass(UnknownCasSystemError, ValueError)

    def test_iupac_legend_order(self) -> None:
        legend = dict(iupac_legend())
        assert legend["N"] == ["A", "T", "G", "C"]
        assert legend["V"] == ["A", "G", "C"]
