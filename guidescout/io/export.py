"""
Export of ranked guide tables.

Score fields that were not computed are written as an explicit marker,
never as 0.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from guidescout.models.data_classes import GuideRow

CSV_HEADERS = [
    "Rank",
    "Guide Start (0-based)",
    "Guide End (0-based, excl)",
    "Guide Sequence (5'→3')",
    "PAM Pattern",
    "Matched PAM (instance)",
    "GC %",
    "Self-Complementarity",
    "Off-target-like Matches",
    "Total Score (lower is better)",
]

TSV_HEADERS = ["rank", "start", "end", "guide", "pam", "gc_percent", "self_comp", "off_target", "score"]

DEFAULT_FILENAME = "crispr_guides.csv"


def _or_marker(value: Optional[int], marker: str) -> Any:
    return marker if value is None else value


def guide_to_csv_row(row: GuideRow, not_computed: str = "") -> List[Any]:
    """Flatten one guide row in CSV_HEADERS order."""
    return [
        row.rank,
        row.guide_start,
        row.guide_end,
        row.guide_seq,
        row.pam_pattern,
        row.matched_pam,
        row.gc_percent,
        _or_marker(row.self_complementarity, not_computed),
        _or_marker(row.off_target_like_matches, not_computed),
        row.total_score,
    ]


def guides_to_csv(rows: Sequence[GuideRow], not_computed: str = "") -> str:
    """Render guide rows as CSV text with a header line."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(guide_to_csv_row(row, not_computed))
    return output.getvalue()


def write_guides_csv(rows: Sequence[GuideRow], path: Path, not_computed: str = "") -> Path:
    """Write guide rows to a CSV file and return the path."""
    path = Path(path)
    path.write_text(guides_to_csv(rows, not_computed), encoding="utf-8")
    return path


def guides_to_tsv(rows: Sequence[GuideRow], not_computed: str = "NA") -> str:
    """Compact tab-separated rendering for piping into shell tools."""
    lines = ["\t".join(TSV_HEADERS)]
    for row in rows:
        fields = [
            row.rank,
            row.guide_start,
            row.guide_end,
            row.guide_seq,
            row.matched_pam,
            row.gc_percent,
            _or_marker(row.self_complementarity, not_computed),
            _or_marker(row.off_target_like_matches, not_computed),
            row.total_score,
        ]
        lines.append("\t".join(str(f) for f in fields))
    return "\n".join(lines)


def guides_to_records(rows: Sequence[GuideRow]) -> List[Dict[str, Any]]:
    """Plain dicts for JSON output; not-computed fields stay null."""
    return [row.model_dump(mode="json") for row in rows]
