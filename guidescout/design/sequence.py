"""
Sequence normalization utilities.

Turns pasted text or FASTA into a clean A/T/G/C sequence.
"""

from __future__ import annotations

VALID_BASES = frozenset("ATGC")

_COMPLEMENT = {"A": "T", "T": "A", "G": "C", "C": "G"}


def clean_sequence(raw: str) -> str:
    """Uppercase and keep only A, T, G and C."""
    return "".join(base for base in raw.upper() if base in VALID_BASES)


def parse_fasta(text: str) -> str:
    """
    Concatenate the sequence lines of FASTA text.

    Header lines (starting with '>') and blank lines are dropped. Multiple
    records are concatenated.
    """
    return "".join(
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.startswith(">")
    )


def prepare_sequence(text: str) -> str:
    """Parse FASTA when a header marker is present, then clean."""
    raw = parse_fasta(text) if ">" in text else text
    return clean_sequence(raw)


def complement(base: str) -> str:
    """Complement a single base; anything unrecognised becomes N."""
    return _COMPLEMENT.get(base, "N")


def reverse_complement(seq: str) -> str:
    """Return reverse complement of DNA sequence."""
    return "".join(complement(base) for base in reversed(seq))


def is_sequence_long_enough(sequence: str, guide_len: int, pam_pattern: str) -> bool:
    """Whether the sequence can hold at least one guide plus its PAM."""
    return len(sequence) >= guide_len + len(pam_pattern)
