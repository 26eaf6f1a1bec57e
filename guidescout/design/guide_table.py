"""
Guide table builder.

Scores every guide found in a sequence and ranks them, lowest total first.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from guidescout.models.data_classes import GuideMatch, GuideRow
from guidescout.design.guide_finder import find_guides_forward
from guidescout.design.scoring import (
    gc_content,
    self_complementarity_score,
    off_target_score,
    composite_score,
    round_half_up,
)

logger = logging.getLogger(__name__)


def _score_match(
    sequence: str,
    match: GuideMatch,
    pam_pattern: str,
    advanced: bool,
    self_comp_window: int,
    max_mismatches: int,
) -> dict:
    gc = gc_content(match.guide_seq)
    self_comp: Optional[int] = None
    off_target: Optional[int] = None
    if advanced:
        self_comp = self_complementarity_score(match.guide_seq, window=self_comp_window)
        off_target = off_target_score(
            sequence, match.guide_seq, match.guide_start, max_mismatches=max_mismatches
        )

    return {
        "guide_start": match.guide_start,
        "guide_end": match.guide_end,
        "guide_seq": match.guide_seq,
        "pam_pattern": pam_pattern,
        "matched_pam": match.pam_seq,
        "gc_percent": round_half_up(gc),
        "self_complementarity": self_comp,
        "off_target_like_matches": off_target,
        # Total uses the unrounded GC, only the result is rounded
        "total_score": round_half_up(composite_score(gc, self_comp, off_target)),
    }


def compute_guide_table(
    sequence: str,
    guide_len: int,
    pam_pattern: str,
    advanced: bool = True,
    self_comp_window: int = 4,
    max_mismatches: int = 5,
    warn_length: Optional[int] = None,
) -> List[GuideRow]:
    """
    Find, score and rank all guides in a sequence.

    When ``advanced`` is False only GC content is computed and the
    self-complementarity and off-target-like fields are left as None.

    Args:
        sequence: Clean A/T/G/C sequence
        guide_len: Guide length in nucleotides
        pam_pattern: IUPAC PAM pattern
        advanced: Compute the self-complementarity and off-target-like scores
        self_comp_window: Window size for self-complementarity
        max_mismatches: Mismatch tolerance for off-target-like matches
        warn_length: Log a warning when advanced scoring runs over a longer
            sequence; None disables the warning

    Returns:
        Rows sorted by total score (ties keep scan order), ranked 1..N
    """
    matches = find_guides_forward(sequence, guide_len, pam_pattern)
    if not matches:
        return []

    if advanced and warn_length is not None and len(sequence) > warn_length:
        logger.warning(
            "Off-target-like scan over %dbp with %d guides is quadratic and may be slow "
            "(warning threshold %dbp)",
            len(sequence), len(matches), warn_length,
        )

    scored = [
        _score_match(sequence, m, pam_pattern, advanced, self_comp_window, max_mismatches)
        for m in matches
    ]

    # sorted() is stable, so equal totals keep ascending guide_start order
    scored = sorted(scored, key=lambda row: row["total_score"])

    rows = [GuideRow(rank=i, **row) for i, row in enumerate(scored, 1)]
    logger.debug("Ranked %d guides (advanced=%s)", len(rows), advanced)
    return rows
