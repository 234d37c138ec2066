"""
grade.py - Yosemite Decimal System grade helpers.

Converts free-text route ratings such as "5.10a/b", "5.9+" or "5.11c R" into
a single float so routes can be ranked and averaged. The scale is only an
approximation: 5.10a -> 10.0, 5.10b -> 10.2, 5.10c -> 10.4, 5.10d -> 10.6,
with +/- folded in as small bumps.
"""
from __future__ import annotations

import re
from typing import Optional

# Value for ratings with no "5.x" grade (boulder grades, aid, blanks).
LOWEST_GRADE = 5.0

UNKNOWN_GRADE = 'Unknown'

_YDS_PATTERN = re.compile(r'5\.(\d+)([abcd+/-]*)')

_LETTER_OFFSETS = (
    ('a', 0.0),
    ('b', 0.2),
    ('c', 0.4),
    ('d', 0.6),
)


def normalize(rating: Optional[str]) -> float:
    """
    Convert a rating string to a comparable number.

    Anything after the grade (protection ratings like "R" or "PG13") is
    ignored. Ratings without a "5.x" grade return LOWEST_GRADE so they never
    register as the hardest climb.

    Args:
        rating: Free-text rating, e.g. "5.10a/b" or "5.9+ PG13".

    Returns:
        float: Approximate grade, e.g. 10.1 for "5.10a/b".
    """
    match = _YDS_PATTERN.search(rating or '')
    if not match:
        return LOWEST_GRADE

    base = float(match.group(1))
    modifier = match.group(2).lower()

    if '/' in modifier:
        parts = modifier.split('/')
        return base + sum(_modifier_offset(p) for p in parts) / len(parts)

    return base + _modifier_offset(modifier)


def _modifier_offset(modifier: str) -> float:
    """Offset for a sub-grade modifier such as "a", "b+", "+" or "-"."""
    offset = 0.0
    for letter, value in _LETTER_OFFSETS:
        if letter in modifier:
            offset = value
            break
    else:
        if '+' in modifier:
            offset = 0.1
        elif '-' in modifier:
            offset = -0.1

    if modifier.endswith('+'):
        offset += 0.05
    if modifier.endswith('-'):
        offset -= 0.05
    return offset


def grade_token(rating: Optional[str]) -> str:
    """
    Coarse distribution bucket for a rating: the text before the first space.

    "5.10a R" -> "5.10a", "" -> "Unknown".
    """
    return (rating or '').split(' ')[0] or UNKNOWN_GRADE
