"""
GuideScout - CRISPR guide finder

Scans a DNA sequence for PAM sites, extracts the adjacent guide RNAs and
ranks them with simple, explainable heuristics.
"""

__version__ = "0.1.0"
__author__ = "GuideScout Team"

from guidescout.design.pam_table import CAS_PAM_TABLE, IUPAC_CODES, pam_matches
from guidescout.design.sequence import clean_sequence, parse_fasta
from guidescout.design.scoring import gc_content
from guidescout.design.guide_finder import find_guides_forward
from guidescout.design.guide_table import compute_guide_table
from guidescout.analysis.sequence_map import get_sequence_position_types, slice_context
from guidescout.models.data_classes import GuideMatch, GuideRow
from guidescout.models.enums import PositionCategory

__all__ = [
    # Tables
    "CAS_PAM_TABLE",
    "IUPAC_CODES",
    # Text preparation
    "clean_sequence",
    "parse_fasta",
    "gc_content",
    # Engine
    "pam_matches",
    "find_guides_forward",
    "compute_guide_table",
    # Rendering support
    "get_sequence_position_types",
    "slice_context",
    # Data classes
    "GuideMatch",
    "GuideRow",
    "PositionCategory",
]
