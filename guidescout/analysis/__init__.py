"""Table analysis, sequence map and comparison package."""

from guidescout.analysis.sequence_map import (
    get_sequence_position_types,
    slice_context,
    select_map_guides,
    build_map_lines,
)
from guidescout.analysis.filtering import (
    filter_by_gc,
    sort_guides,
    summarize_table,
    gc_band,
    score_band,
)
from guidescout.analysis.compare import compute_diff, compare_stats
from guidescout.analysis.pipeline import analyze, SequenceTooShortError

__all__ = [
    "get_sequence_position_types",
    "slice_context",
    "select_map_guides",
    "build_map_lines",
    "filter_by_gc",
    "sort_guides",
    "summarize_table",
    "gc_band",
    "score_band",
    "compute_diff",
    "compare_stats",
    "analyze",
    "SequenceTooShortError",
]
