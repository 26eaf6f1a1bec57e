"""Design engine package."""

from guidescout.design.pam_table import (
    CAS_PAM_TABLE,
    IUPAC_CODES,
    DEFAULT_CAS_SYSTEM,
    UnknownCasSystemError,
    pam_matches,
    get_pam_pattern,
    list_cas_systems,
)
from guidescout.design.sequence import (
    clean_sequence,
    parse_fasta,
    prepare_sequence,
    reverse_complement,
    is_sequence_long_enough,
)
from guidescout.design.guide_finder import (
    GuideFinder,
    find_guides_forward,
    count_pam_sites,
)
from guidescout.design.scoring import (
    gc_content,
    self_complementarity_score,
    off_target_score,
)
from guidescout.design.guide_table import compute_guide_table

__all__ = [
    "CAS_PAM_TABLE",
    "IUPAC_CODES",
    "DEFAULT_CAS_SYSTEM",
    "UnknownCasSystemError",
    "pam_matches",
    "get_pam_pattern",
    "list_cas_systems",
    "clean_sequence",
    "parse_fasta",
    "prepare_sequence",
    "reverse_complement",
    "is_sequence_long_enough",
    "GuideFinder",
    "find_guides_forward",
    "count_pam_sites",
    "gc_content",
    "self_complementarity_score",
    "off_target_score",
    "compute_guide_table",
]
