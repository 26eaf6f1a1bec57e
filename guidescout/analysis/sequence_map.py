"""
Per-base annotation of a sequence for map rendering.
"""

from __future__ import annotations

from typing import List, Sequence, Union

from guidescout.models.enums import PositionCategory
from guidescout.models.data_classes import GuideMatch, GuideRow, MapLine, SequenceContext

GuideMeta = Union[GuideMatch, GuideRow]


def get_sequence_position_types(
    sequence: str,
    guide_metas: Sequence[GuideMeta],
) -> List[PositionCategory]:
    """
    Tag every index of the sequence as normal, guide or PAM.

    Metas are applied in order and later ones overwrite earlier ones where
    they overlap. Within one meta the PAM range is written after the guide
    range. Ranges are clamped to the sequence.
    """
    n = len(sequence)
    positions = [PositionCategory.NORMAL] * n

    for meta in guide_metas:
        for i in range(max(0, meta.guide_start), min(n, meta.guide_end)):
            positions[i] = PositionCategory.GUIDE
        for i in range(max(0, meta.pam_start), min(n, meta.pam_end)):
            positions[i] = PositionCategory.PAM

    return positions


def slice_context(
    sequence: str,
    guide_start: int,
    guide_end: int,
    pam_end: int,
    flank: int = 12,
) -> SequenceContext:
    """
    Cut a window from ``flank`` bases before the guide to ``flank`` after the PAM.

    ``guide_end`` is not needed for the bounds; it is accepted so callers can
    pass a guide's coordinates straight through.
    """
    left = max(0, guide_start - flank)
    right = min(len(sequence), pam_end + flank)
    return SequenceContext(context=sequence[left:right], left=left, right=right)


def select_map_guides(rows: Sequence[GuideRow], top_n: int, max_guides: int = 50) -> List[GuideRow]:
    """Take the first ``top_n`` rows, never more than ``max_guides``."""
    limit = max(0, min(top_n, max_guides))
    return list(rows[:limit])


def build_map_lines(
    sequence: str,
    categories: Sequence[PositionCategory],
    chars_per_line: int = 70,
) -> List[MapLine]:
    """Wrap an annotated sequence into fixed-width display lines."""
    if chars_per_line <= 0:
        raise ValueError("chars_per_line must be positive")
    return [
        MapLine(
            line_start=start,
            bases=sequence[start:start + chars_per_line],
            categories=list(categories[start:start + chars_per_line]),
        )
        for start in range(0, len(sequence), chars_per_line)
    ]
