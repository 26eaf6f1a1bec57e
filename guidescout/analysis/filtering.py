"""
Filtering, sorting and summarising of ranked guide tables.
"""

from __future__ import annotations

from typing import List, Sequence, Union

from guidescout.models.enums import GCBand, ScoreBand, SortField
from guidescout.models.data_classes import GuideRow, TableSummary


def filter_by_gc(rows: Sequence[GuideRow], gc_min: float, gc_max: float) -> List[GuideRow]:
    """Keep rows whose GC% lies in [gc_min, gc_max]; order and ranks are kept."""
    return [row for row in rows if gc_min <= row.gc_percent <= gc_max]


def sort_guides(
    rows: Sequence[GuideRow],
    field: Union[SortField, str] = SortField.RANK,
    ascending: bool = True,
) -> List[GuideRow]:
    """
    Sort rows by one field for display.

    Rows where the field was not computed (None) always sort last,
    whichever the direction.
    """
    try:
        field = SortField(field)
    except ValueError:
        valid = ", ".join(f.value for f in SortField)
        raise ValueError(f"Cannot sort by {field!r}. Must be one of: {valid}") from None

    name = field.value
    present = [row for row in rows if getattr(row, name) is not None]
    missing = [row for row in rows if getattr(row, name) is None]
    present.sort(key=lambda row: getattr(row, name), reverse=not ascending)
    return present + missing


def summarize_table(raw_rows: Sequence[GuideRow], filtered_rows: Sequence[GuideRow]) -> TableSummary:
    """Counts before/after filtering plus the best and worst filtered scores."""
    scores = [row.total_score for row in filtered_rows]
    return TableSummary(
        n_raw=len(raw_rows),
        n_filtered=len(filtered_rows),
        best_score=min(scores) if scores else None,
        worst_score=max(scores) if scores else None,
    )


def gc_band(gc_percent: float) -> GCBand:
    """Classify GC%: 40-60 optimal, 30-70 acceptable, otherwise poor."""
    if 40 <= gc_percent <= 60:
        return GCBand.OPTIMAL
    if 30 <= gc_percent <= 70:
        return GCBand.ACCEPTABLE
    return GCBand.POOR


def score_band(score: float, min_score: float, max_score: float) -> ScoreBand:
    """Classify a score by its position within the table's score range."""
    span = (max_score - min_score) or 1
    normalized = (score - min_score) / span
    if normalized <= 0.33:
        return ScoreBand.GOOD
    if normalized <= 0.66:
        return ScoreBand.MODERATE
    return ScoreBand.BAD
