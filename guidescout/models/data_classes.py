"""
Pydantic data classes for GuideScout.

All core data structures passed between the engine, the CLI and the API.
"""

from __future__ import annotations

from typing import Optional, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, computed_field

from guidescout.models.enums import PositionCategory, DiffType


# =============================================================================
# Guide Design
# =============================================================================

class GuideMatch(BaseModel):
    """
    One candidate guide/PAM occurrence on the forward strand.

    Coordinates are 0-based offsets into the clean sequence, ends exclusive.
    The PAM always starts where the guide ends.
    """
    model_config = ConfigDict(frozen=True)

    guide_start: int
    guide_end: int
    pam_start: int
    pam_end: int
    guide_seq: str
    pam_seq: str  # Matched instance, not the IUPAC pattern

    @computed_field
    @property
    def full_sequence(self) -> str:
        """Guide + PAM."""
        return self.guide_seq + self.pam_seq


class GuideRow(BaseModel):
    """A guide match enriched with heuristic scores and its rank."""
    model_config = ConfigDict(frozen=True)

    rank: int = Field(ge=1)
    guide_start: int
    guide_end: int
    guide_seq: str
    pam_pattern: str
    matched_pam: str
    gc_percent: float = Field(ge=0, le=100)

    # None means "not computed" (basic scoring), never zero
    self_complementarity: Optional[int] = Field(default=None, ge=0)
    off_target_like_matches: Optional[int] = Field(default=None, ge=0)

    total_score: float  # Lower is better

    @computed_field
    @property
    def pam_start(self) -> int:
        return self.guide_end

    @computed_field
    @property
    def pam_end(self) -> int:
        return self.guide_end + len(self.matched_pam)

    @property
    def advanced(self) -> bool:
        """Whether the advanced heuristics were computed for this row."""
        return self.self_complementarity is not None


# =============================================================================
# Sequence Map
# =============================================================================

class SequenceContext(BaseModel):
    """A window of sequence around one guide, with its absolute bounds."""
    context: str
    left: int   # Absolute offset of context[0]
    right: int  # Absolute exclusive end

    def relative(self, start: int, end: int) -> Tuple[int, int]:
        """Re-anchor an absolute [start, end) range inside the context."""
        return start - self.left, end - self.left


class MapLine(BaseModel):
    """One wrapped line of the annotated sequence map."""
    line_start: int
    bases: str
    categories: List[PositionCategory] = Field(default_factory=list)

    @computed_field
    @property
    def line_end(self) -> int:
        return self.line_start + len(self.bases)


# =============================================================================
# Table Analysis
# =============================================================================

class TableSummary(BaseModel):
    """Headline metrics for a guide table and its filtered view."""
    n_raw: int = 0
    n_filtered: int = 0
    best_score: Optional[float] = None
    worst_score: Optional[float] = None


class AnalysisResult(BaseModel):
    """Complete results from one analysis run."""
    cas_system: Optional[str] = None
    pam_pattern: str
    guide_length: int
    advanced_scores: bool
    sequence_length: int
    n_pam_sites: int = 0  # PAM matches anywhere, including those without room for a guide
    gc_range: Tuple[float, float] = (0.0, 100.0)

    guides: List[GuideRow] = Field(default_factory=list)
    filtered_guides: List[GuideRow] = Field(default_factory=list)
    summary: TableSummary = Field(default_factory=TableSummary)


# =============================================================================
# Sequence Comparison
# =============================================================================

class DiffPosition(BaseModel):
    """Comparison outcome at one position."""
    type: DiffType
    pos: int
    base_a: Optional[str] = None
    base_b: Optional[str] = None


class CompareStats(BaseModel):
    """Aggregate counts for a sequence comparison."""
    matches: int = 0
    mismatches: int = 0
    insertions: int = 0
    deletions: int = 0
    identity: float = Field(ge=0, le=100)  # Percent of positions that match
