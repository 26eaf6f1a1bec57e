"""Models package."""

from guidescout.models.enums import (
    PositionCategory,
    DiffType,
    GCBand,
    ScoreBand,
    OutputFormat,
    SortField,
)
from guidescout.models.data_classes import (
    GuideMatch,
    GuideRow,
    SequenceContext,
    MapLine,
    TableSummary,
    AnalysisResult,
    DiffPosition,
    CompareStats,
)

__all__ = [
    # Enums
    "PositionCategory",
    "DiffType",
    "GCBand",
    "ScoreBand",
    "OutputFormat",
    "SortField",
    # Data classes
    "GuideMatch",
    "GuideRow",
    "SequenceContext",
    "MapLine",
    "TableSummary",
    "AnalysisResult",
    "DiffPosition",
    "CompareStats",
]
