"""
End-to-end analysis shared by the CLI and the web API.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from guidescout.config import get_config
from guidescout.models.data_classes import AnalysisResult
from guidescout.design.pam_table import get_pam_pattern
from guidescout.design.sequence import prepare_sequence, is_sequence_long_enough
from guidescout.design.guide_finder import count_pam_sites
from guidescout.design.guide_table import compute_guide_table
from guidescout.analysis.filtering import filter_by_gc, summarize_table

logger = logging.getLogger(__name__)


class SequenceTooShortError(ValueError):
    """The clean sequence cannot hold one guide plus its PAM."""


def analyze(
    text: str,
    cas_system: Optional[str] = None,
    guide_length: Optional[int] = None,
    advanced: Optional[bool] = None,
    gc_range: Optional[Tuple[float, float]] = None,
    pam_pattern: Optional[str] = None,
) -> AnalysisResult:
    """
    Normalize raw text, build the ranked guide table and apply the GC filter.

    Unset parameters fall back to the configured defaults. An explicit
    ``pam_pattern`` overrides the system's PAM.

    Raises:
        UnknownCasSystemError: cas_system is not in CAS_PAM_TABLE
        SequenceTooShortError: no room for guide + PAM after cleaning
    """
    design = get_config().design
    cas_system = cas_system or design.default_cas_system
    guide_length = guide_length if guide_length is not None else design.default_guide_length
    advanced = design.advanced_scores if advanced is None else advanced
    gc_min, gc_max = gc_range if gc_range is not None else (design.gc_min, design.gc_max)

    if pam_pattern is None:
        pam_pattern = get_pam_pattern(cas_system)
    else:
        pam_pattern = pam_pattern.upper()
        cas_system = None

    sequence = prepare_sequence(text)
    if not is_sequence_long_enough(sequence, guide_length, pam_pattern):
        raise SequenceTooShortError(
            f"Sequence too short: {len(sequence)}bp after cleaning, need at least "
            f"{guide_length + len(pam_pattern)}bp for a {guide_length}nt guide + "
            f"{pam_pattern} PAM"
        )

    guides = compute_guide_table(
        sequence,
        guide_length,
        pam_pattern,
        advanced=advanced,
        self_comp_window=design.self_comp_window,
        max_mismatches=design.max_mismatches,
        warn_length=design.offtarget_warn_length,
    )
    filtered = filter_by_gc(guides, gc_min, gc_max)
    logger.info(
        "Analysed %dbp with %s: %d guides, %d after GC filter %.1f-%.1f",
        len(sequence), pam_pattern, len(guides), len(filtered), gc_min, gc_max,
    )

    return AnalysisResult(
        cas_system=cas_system,
        pam_pattern=pam_pattern,
        guide_length=guide_length,
        advanced_scores=advanced,
        sequence_length=len(sequence),
        n_pam_sites=count_pam_sites(sequence, pam_pattern),
        gc_range=(gc_min, gc_max),
        guides=guides,
        filtered_guides=filtered,
        summary=summarize_table(guides, filtered),
    )
