"""
Heuristic guide scorers.

These are explainable, educational heuristics, not predictive models:

- GC content as a percentage
- Self-complementarity: a coarse hairpin-risk proxy
- Off-target-like matches: near-duplicate windows within the SAME input
  sequence. This is not a genome-wide search. It costs O(n * L) per guide,
  so scoring every guide of a sequence is O(n^2).
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from guidescout.design.sequence import reverse_complement


def gc_content(sequence: str) -> float:
    """Calculate GC content of a sequence (0.0 to 100.0)."""
    if not sequence:
        return 0.0
    gc = sum(1 for base in sequence if base in "GC")
    return gc / len(sequence) * 100


def hamming_distance(seq1: str, seq2: str, limit: Optional[int] = None) -> int:
    """Count mismatches between two equal-length sequences.

    With ``limit`` set, counting stops once it is exceeded and ``limit + 1``
    is returned.

    Raises ValueError if sequences have different lengths.
    """
    if len(seq1) != len(seq2):
        raise ValueError(f"Sequences must be equal length: {len(seq1)} vs {len(seq2)}")
    mismatches = 0
    for a, b in zip(seq1, seq2):
        if a != b:
            mismatches += 1
            if limit is not None and mismatches > limit:
                break
    return mismatches


def self_complementarity_score(sequence: str, window: int = 4) -> int:
    """
    Count windows whose reverse complement also occurs in the sequence.

    Every window of length ``window`` is reverse-complemented and looked up
    anywhere in the same sequence, palindromic windows included.
    """
    if window <= 0 or len(sequence) < window:
        return 0
    score = 0
    for i in range(len(sequence) - window + 1):
        if reverse_complement(sequence[i:i + window]) in sequence:
            score += 1
    return score


def off_target_score(
    sequence: str,
    guide: str,
    origin_start: int,
    max_mismatches: int = 5,
) -> int:
    """
    Count near-duplicate windows of a guide within the analysed sequence.

    Args:
        sequence: Full analysed sequence
        guide: Guide sequence
        origin_start: Start of the guide itself, skipped during the scan
        max_mismatches: Highest Hamming distance still counted

    Returns:
        Number of other windows within max_mismatches of the guide
    """
    guide_len = len(guide)
    if guide_len == 0:
        return 0
    score = 0
    for i in range(len(sequence) - guide_len + 1):
        if i == origin_start:
            continue
        window = sequence[i:i + guide_len]
        if hamming_distance(window, guide, limit=max_mismatches) <= max_mismatches:
            score += 1
    return score


def round_half_up(value: float, digits: int = 2) -> float:
    """Round to ``digits`` decimals with halves rounded away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def composite_score(gc_percent: float, self_comp=None, off_target=None) -> float:
    """
    Additive total score, lower is better.

    GC deviation from 50% costs 1 point per 5%, each self-complementary
    window costs 1 and each off-target-like match costs 2. Scores that were
    not computed contribute nothing.
    """
    total = abs(gc_percent - 50) / 5
    if self_comp is not None:
        total += self_comp
    if off_target is not None:
        total += off_target * 2
    return total
