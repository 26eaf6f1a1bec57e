"""
Test configuration and fixtures for GuideScout.
"""

import pytest

from guidescout.models.data_classes import GuideMatch, GuideRow


@pytest.fixture
def short_sequence() -> str:
    """Short sequence with four NGG sites reachable by 4nt guides."""
    return "AAAATGGGATCGATCGGGAAAA"


@pytest.fixture
def sample_sequence() -> str:
    """Sample DNA sequence for testing, several NGG PAMs for 20nt guides."""
    return (
        "ATCGATCGATCGATCGATCGAGGCCCGATCGATCGATCGATCGGGGCCCGATCGATCGATCGATCGTGG"
        "GCTAGCTAGCTAGCTAGCTAGCATGCATGCATGCATGCGCTAGCTAGCTAGCTAGCTAGC"
    )


@pytest.fixture
def sample_fasta(sample_sequence: str) -> str:
    """The sample sequence as a wrapped FASTA record."""
    lines = [sample_sequence[i:i + 60] for i in range(0, len(sample_sequence), 60)]
    return ">test_locus some description\n" + "\n".join(lines) + "\n"


@pytest.fixture
def sample_match() -> GuideMatch:
    """GuideMatch with guide [2, 5) and PAM [5, 8)."""
    return GuideMatch(
        guide_start=2,
        guide_end=5,
        pam_start=5,
        pam_end=8,
        guide_seq="GCA",
        pam_seq="TGG",
    )


def make_row(
    rank: int,
    total_score: float,
    gc_percent: float = 50.0,
    guide_start: int = 0,
    guide_seq: str = "ATCGATCGATCGATCGATCG",
    self_complementarity=None,
    off_target_like_matches=None,
) -> GuideRow:
    """Create a GuideRow for testing."""
    return GuideRow(
        rank=rank,
        guide_start=guide_start,
        guide_end=guide_start + len(guide_seq),
        guide_seq=guide_seq,
        pam_pattern="NGG",
        matched_pam="AGG",
        gc_percent=gc_percent,
        self_complementarity=self_complementarity,
        off_target_like_matches=off_target_like_matches,
        total_score=total_score,
    )


# Test sequences with known PAM sites
TEST_SEQUENCES = {
    "multiple_ngg": "ATCGATCGATCGATCGATCGAGGCCCGATCGATCGATCGATCGGGGCCCGATCGATCGATCGATCGTGG",
    "no_pam": "ATATATATATATATATATATATATATATATATATATATATATATATATATAT",
    "tttn_pam": "TTTAATCGATCGATCGATCGATCGAATTTCATCGATCGATCGATCGATCGA",
}


@pytest.fixture
def row_factory():
    """Factory fixture for GuideRow objects."""
    return make_row
