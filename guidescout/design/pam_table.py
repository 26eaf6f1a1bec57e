"""
CRISPR system PAM definitions and IUPAC-aware PAM matching.

The tables are literature-based and educational. Both are exposed as
read-only mappings built once at import time.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, List, Mapping


# IUPAC nucleotide codes understood by the PAM matcher
IUPAC_CODES: Mapping[str, FrozenSet[str]] = MappingProxyType({
    "A": frozenset("A"),
    "T": frozenset("T"),
    "G": frozenset("G"),
    "C": frozenset("C"),
    "N": frozenset("ATGC"),   # Any
    "R": frozenset("AG"),     # Purine
    "Y": frozenset("CT"),     # Pyrimidine
    "W": frozenset("AT"),     # Weak
    "V": frozenset("ACG"),    # Not T
})

# Display order of each symbol's bases in the legend
_IUPAC_LEGEND_ORDER = "ATGC"

_EMPTY: FrozenSet[str] = frozenset()


# =============================================================================
# Pre-defined CRISPR systems
# =============================================================================

CAS_PAM_TABLE: Mapping[str, str] = MappingProxyType({
    "SpCas9 (S. pyogenes, Type II)": "NGG",
    "SaCas9 (S. aureus, Type II-A)": "NNGRRT",
    "StCas9 (S. thermophilus, Type II-A)": "NNAGAA",
    "S. solfataricus (Type I-A1)": "CCN",
    "S. solfataricus (Type I-A2)": "TCN",
    "H. walsbyi (Type I-B)": "TTC",
    "E. coli (Type I-E)": "AWG",
    "E. coli (Type I-F)": "CC",
    "P. aeruginosa (Type I-F)": "CC",
    "FnCas12a (F. novicida, Type V-A)": "TTTN",
    "AsCas12a (Acidaminococcus, Type V-A)": "TTTN",
})

DEFAULT_CAS_SYSTEM = "SpCas9 (S. pyogenes, Type II)"


class UnknownCasSystemError(ValueError):
    """Raised when a CRISPR system name is not in CAS_PAM_TABLE."""


def pam_matches(fragment: str, pattern: str) -> bool:
    """
    Check whether a concrete fragment matches an IUPAC PAM pattern.

    A fragment of the wrong length never matches. Unknown pattern symbols
    allow no base, so they never match either.

    Args:
        fragment: Concrete bases, e.g. "TGG"
        pattern: IUPAC pattern, e.g. "NGG"

    Returns:
        True if every position is allowed by the pattern
    """
    if len(fragment) != len(pattern):
        return False
    return all(
        base in IUPAC_CODES.get(symbol, _EMPTY)
        for base, symbol in zip(fragment, pattern)
    )


def get_pam_pattern(system: str) -> str:
    """Get the PAM pattern for a named CRISPR system."""
    if system not in CAS_PAM_TABLE:
        raise UnknownCasSystemError(
            f"Unknown CRISPR system: {system!r}. "
            f"Run 'guidescout systems' to list supported systems."
        )
    return CAS_PAM_TABLE[system]


def list_cas_systems() -> List[str]:
    """List all supported CRISPR system names in display order."""
    return list(CAS_PAM_TABLE.keys())


def iupac_legend() -> List[tuple]:
    """(symbol, bases) pairs for display, bases in A/T/G/C order."""
    return [
        (symbol, [b for b in _IUPAC_LEGEND_ORDER if b in bases])
        for symbol, bases in IUPAC_CODES.items()
    ]
