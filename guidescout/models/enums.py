"""
Core enumerations for GuideScout.
"""

from enum import Enum


class PositionCategory(str, Enum):
    """Category of a single base in the sequence map."""
    NORMAL = "normal"
    GUIDE = "guide"
    PAM = "pam"


class DiffType(str, Enum):
    """Position-wise comparison outcome between two sequences."""
    MATCH = "match"
    MISMATCH = "mismatch"
    INSERTION = "insertion"    # Base present only in the second sequence
    DELETION = "deletion"      # Base present only in the first sequence


class GCBand(str, Enum):
    """GC% quality band used for plots and tables."""
    OPTIMAL = "optimal"        # 40-60%
    ACCEPTABLE = "acceptable"  # 30-70%
    POOR = "poor"


class ScoreBand(str, Enum):
    """Relative position of a total score within a table's score range."""
    GOOD = "good"
    MODERATE = "moderate"
    BAD = "bad"


class OutputFormat(str, Enum):
    """CLI output formats."""
    JSON = "json"
    TSV = "tsv"
    TABLE = "table"
    CSV = "csv"


class SortField(str, Enum):
    """Guide row fields the table can be sorted by."""
    RANK = "rank"
    GUIDE_START = "guide_start"
    GUIDE_SEQ = "guide_seq"
    GC_PERCENT = "gc_percent"
    SELF_COMPLEMENTARITY = "self_complementarity"
    OFF_TARGET_LIKE_MATCHES = "off_target_like_matches"
    TOTAL_SCORE = "total_score"
