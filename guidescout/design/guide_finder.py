"""
Guide finding engine.

Scans a clean DNA sequence for PAM sites and extracts the guide window
immediately upstream of each one.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

from guidescout.models.data_classes import GuideMatch
from guidescout.design.pam_table import pam_matches

logger = logging.getLogger(__name__)


class GuideFinder:
    """
    Finds candidate guides for one PAM pattern and guide length.

    Only the forward strand is scanned. The window slides one base at a
    time, so reported guides may overlap:

        Sequence: ...[guide][PAM]...
                     i      i+guide_len
    """

    def __init__(self, pam_pattern: str, guide_len: int):
        self.pam_pattern = pam_pattern
        self.guide_len = guide_len

    @property
    def pam_len(self) -> int:
        return len(self.pam_pattern)

    def iter_matches(self, sequence: str) -> Iterator[GuideMatch]:
        """Yield matches in ascending guide_start order."""
        guide_len = self.guide_len
        pam_len = self.pam_len
        if guide_len <= 0 or pam_len == 0:
            return

        # Empty when the sequence is shorter than guide + PAM
        for i in range(len(sequence) - guide_len - pam_len + 1):
            pam_start = i + guide_len
            pam_end = pam_start + pam_len
            pam_seq = sequence[pam_start:pam_end]
            if not pam_matches(pam_seq, self.pam_pattern):
                continue

            yield GuideMatch(
                guide_start=i,
                guide_end=pam_start,
                pam_start=pam_start,
                pam_end=pam_end,
                guide_seq=sequence[i:pam_start],
                pam_seq=pam_seq,
            )

    def find(self, sequence: str) -> List[GuideMatch]:
        """Return every guide/PAM pair in the sequence."""
        matches = list(self.iter_matches(sequence))
        logger.debug(
            "Found %d %s sites for %dnt guides in %dbp",
            len(matches), self.pam_pattern, self.guide_len, len(sequence),
        )
        return matches


def find_guides_forward(sequence: str, guide_len: int, pam_pattern: str) -> List[GuideMatch]:
    """
    Convenience function to find forward-strand guides in a sequence.

    Args:
        sequence: Clean A/T/G/C sequence
        guide_len: Guide length in nucleotides
        pam_pattern: IUPAC PAM pattern, 3' of the guide

    Returns:
        List of GuideMatch objects, possibly empty
    """
    return GuideFinder(pam_pattern, guide_len).find(sequence)


def count_pam_sites(sequence: str, pam_pattern: str) -> int:
    """Quick count of PAM instances in a sequence, ignoring guide room."""
    pam_len = len(pam_pattern)
    if pam_len == 0:
        return 0
    return sum(
        1 for i in range(len(sequence) - pam_len + 1)
        if pam_matches(sequence[i:i + pam_len], pam_pattern)
    )
