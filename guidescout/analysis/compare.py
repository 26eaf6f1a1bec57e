"""
Position-wise comparison of two sequences.

No alignment is attempted: base i of one sequence is compared with base i
of the other, and any overhang counts as insertion or deletion.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from guidescout.models.enums import DiffType
from guidescout.models.data_classes import DiffPosition, CompareStats


def compute_diff(seq_a: str, seq_b: str) -> List[DiffPosition]:
    """Classify each position up to the longer sequence's length."""
    results = []
    for i in range(max(len(seq_a), len(seq_b))):
        base_a = seq_a[i] if i < len(seq_a) else None
        base_b = seq_b[i] if i < len(seq_b) else None

        if base_a is not None and base_b is not None:
            kind = DiffType.MATCH if base_a == base_b else DiffType.MISMATCH
        elif base_a is not None:
            kind = DiffType.DELETION
        else:
            kind = DiffType.INSERTION

        results.append(DiffPosition(type=kind, pos=i, base_a=base_a, base_b=base_b))
    return results


def compare_stats(diff: Sequence[DiffPosition]) -> Optional[CompareStats]:
    """Aggregate a diff; None when there is nothing to compare."""
    if not diff:
        return None
    counts = {kind: 0 for kind in DiffType}
    for position in diff:
        counts[position.type] += 1
    return CompareStats(
        matches=counts[DiffType.MATCH],
        mismatches=counts[DiffType.MISMATCH],
        insertions=counts[DiffType.INSERTION],
        deletions=counts[DiffType.DELETION],
        identity=counts[DiffType.MATCH] / len(diff) * 100,
    )
