"""
Per-period aggregates over a set of climbs.

Every helper is a pure function of the records it is given. Where an order
matters the helpers sort a private copy with a stable sort, and "pick the
maximum" scans keep the first record encountered on ties.

Zero denominators are not guarded: ratio() returns nan (0/0) or +/-inf so the
degenerate value reaches the report unchanged.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date as _date
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from climbing_wrapped.climb_record import ClimbRecord

UNKNOWN_AREA = 'Unknown'

DEFAULT_TOP_AREAS_LIMIT = 5
DEFAULT_FAVORITE_ROUTES_LIMIT = 5

STYLE_LEAD = 'Lead'
STYLE_TR = 'TR'
STYLE_SPORT = 'Sport'
STYLE_FOLLOW = 'Follow'

LEAD_ONSIGHT = 'Onsight'
LEAD_FLASH = 'Flash'
LEAD_REDPOINT = 'Redpoint'
LEAD_FELL_HUNG = 'Fell/Hung'


def ratio(numerator: float, denominator: float) -> float:
    """Divide, returning nan or +/-inf instead of raising on a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def count_where(records: Sequence[ClimbRecord], **criteria: Any) -> int:
    """Count records whose attributes equal all the given values."""
    return sum(
        1 for record in records
        if all(getattr(record, name) == value for name, value in criteria.items())
    )


def group_by_day(records: Sequence[ClimbRecord]) -> Dict[_date, List[ClimbRecord]]:
    """Records per calendar day, days in first-seen order."""
    days: Dict[_date, List[ClimbRecord]] = {}
    for record in records:
        days.setdefault(record.day, []).append(record)
    return days


def area_counts(records: Sequence[ClimbRecord]) -> Dict[str, int]:
    """Climbs per area (missing area -> 'Unknown'), areas in first-seen order."""
    counts: Dict[str, int] = {}
    for record in records:
        area = record.area or UNKNOWN_AREA
        counts[area] = counts.get(area, 0) + 1
    return counts


def top_areas(records: Sequence[ClimbRecord], limit: int = DEFAULT_TOP_AREAS_LIMIT) -> List[Dict[str, Any]]:
    """
    Most visited areas.

    Sorted by count, descending; equal counts keep first-seen order.

    Returns:
        List of {'area': name, 'count': climbs}, at most `limit` long.
    """
    ranked = sorted(area_counts(records).items(), key=lambda item: item[1], reverse=True)
    return [{'area': area, 'count': count} for area, count in ranked[:limit]]


def unique_areas(records: Sequence[ClimbRecord]) -> int:
    """Number of distinct areas; records without an area share one '' bucket."""
    return len({record.area or '' for record in records})


def count_styles(records: Sequence[ClimbRecord], tr_styles: Tuple[str, ...] = (STYLE_TR,)) -> Dict[str, int]:
    """
    Climbs per ascent style.

    Args:
        records: Climbs to count.
        tr_styles: Style values counted as top rope.
    """
    return {
        'lead': count_where(records, style=STYLE_LEAD),
        'tr': sum(1 for record in records if record.style in tr_styles),
        'follow': count_where(records, style=STYLE_FOLLOW),
    }


def count_lead_styles(records: Sequence[ClimbRecord]) -> Dict[str, int]:
    return {
        'onsight': count_where(records, lead_style=LEAD_ONSIGHT),
        'flash': count_where(records, lead_style=LEAD_FLASH),
        'redpoint': count_where(records, lead_style=LEAD_REDPOINT),
        'fellHung': count_where(records, lead_style=LEAD_FELL_HUNG),
    }


def count_send_types(records: Sequence[ClimbRecord]) -> Dict[str, int]:
    return {
        'onsight': count_where(records, lead_style=LEAD_ONSIGHT),
        'flash': count_where(records, lead_style=LEAD_FLASH),
        'redpoint': count_where(records, lead_style=LEAD_REDPOINT),
        'topRope': count_where(records, style=STYLE_TR),
        'follow': count_where(records, style=STYLE_FOLLOW),
    }


def grade_distribution(records: Sequence[ClimbRecord]) -> Dict[str, int]:
    """Climbs per raw grade token ('5.10a', 'V4', 'Unknown'), first-seen order."""
    return dict(Counter(record.grade_token for record in records))


def hardest_grade(records: Sequence[ClimbRecord]) -> float:
    hardest = 0.0
    for record in records:
        grade = record.grade
        if grade > hardest:
            hardest = grade
    return hardest


def average_grade(records: Sequence[ClimbRecord]) -> float:
    return ratio(sum(record.grade for record in records), len(records))


def total_pitches(records: Sequence[ClimbRecord]) -> int:
    return sum(record.pitches for record in records)


def total_length(records: Sequence[ClimbRecord]) -> int:
    return sum(record.length for record in records)


def multi_pitch_count(records: Sequence[ClimbRecord]) -> int:
    return sum(1 for record in records if record.pitches > 1)


def longest_route(records: Sequence[ClimbRecord]) -> Optional[ClimbRecord]:
    best, best_length = None, 0
    for record in records:
        if record.length > best_length:
            best, best_length = record, record.length
    return best


def hardest_route(records: Sequence[ClimbRecord]) -> Optional[ClimbRecord]:
    best, best_grade = None, 0.0
    for record in records:
        grade = record.grade
        if grade > best_grade:
            best, best_grade = record, grade
    return best


def route_with_longest_note(records: Sequence[ClimbRecord]) -> Optional[ClimbRecord]:
    best, best_length = None, 0
    for record in records:
        if len(record.notes) > best_length:
            best, best_length = record, len(record.notes)
    return best


def earliest_climb(records: Sequence[ClimbRecord]) -> Optional[ClimbRecord]:
    best = None
    for record in records:
        if best is None or record.date < best.date:
            best = record
    return best


def latest_climb(records: Sequence[ClimbRecord]) -> Optional[ClimbRecord]:
    best = None
    for record in records:
        if best is None or record.date > best.date:
            best = record
    return best


def busiest_day(records: Sequence[ClimbRecord]) -> Dict[str, Any]:
    """
    Day with the most climbs.

    Returns:
        {'date': 'YYYY-MM-DD' or None, 'climbCount': n}
    """
    busiest = {'date': None, 'climbCount': 0}
    for day, climbs in group_by_day(records).items():
        if len(climbs) > busiest['climbCount']:
            busiest = {'date': day.isoformat(), 'climbCount': len(climbs)}
    return busiest


def favorite_routes(records: Sequence[ClimbRecord], limit: int = DEFAULT_FAVORITE_ROUTES_LIMIT) -> List[Dict[str, Any]]:
    """
    Best-rated climbs by personal stars (at least one star).

    Returns:
        Up to `limit` entries of {'name', 'grade', 'stars', 'location', 'url'},
        most stars first; equal stars keep input order.
    """
    starred = [record for record in records if record.stars is not None and record.stars >= 1]
    starred = sorted(starred, key=lambda record: record.stars, reverse=True)
    return [
        {
            'name': record.route,
            'grade': record.rating,
            'stars': record.stars,
            'location': record.location_leaf,
            'url': record.url,
        }
        for record in starred[:limit]
    ]


@dataclass(frozen=True)
class AggregateStats:
    """
    Aggregates for one reporting period.

    `styles` counts both 'TR' and 'Sport' as top rope, which is how the
    per-year comparison has always reported it.
    """
    total_climbs: int = 0
    unique_routes: int = 0
    unique_areas: int = 0
    climbing_sessions: int = 0
    top_areas: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    send_types: Dict[str, int] = field(default_factory=dict)
    styles: Dict[str, int] = field(default_factory=dict)
    lead_styles: Dict[str, int] = field(default_factory=dict)
    total_pitches: int = 0
    total_length: int = 0
    hardest_grade: float = 0.0
    average_grade: float = math.nan
    grade_distribution: Dict[str, int] = field(default_factory=dict)
    multi_pitch_count: int = 0
    longest_route: Optional[ClimbRecord] = None
    hardest_route: Optional[ClimbRecord] = None
    busiest_day: Dict[str, Any] = field(default_factory=dict)
    route_with_longest_note: Optional[ClimbRecord] = None
    earliest_climb: Optional[ClimbRecord] = None
    latest_climb: Optional[ClimbRecord] = None
    favorite_routes: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    def to_year_dict(self) -> Dict[str, Any]:
        """Summary used for the year-over-year comparison section."""
        return {
            'totalClimbs': self.total_climbs,
            'uniqueRoutes': self.unique_routes,
            'climbingSessions': self.climbing_sessions,
            'topAreas': [dict(item) for item in self.top_areas],
            'sendTypes': dict(self.send_types),
            'uniqueAreas': self.unique_areas,
            'totalPitches': self.total_pitches,
            'totalLength': self.total_length,
            'hardestGrade': self.hardest_grade,
            'styles': dict(self.styles),
            'averageGrade': self.average_grade,
        }


def aggregate(
    records: Sequence[ClimbRecord],
    top_areas_limit: int = DEFAULT_TOP_AREAS_LIMIT,
    favorite_routes_limit: int = DEFAULT_FAVORITE_ROUTES_LIMIT,
) -> AggregateStats:
    """
    Compute all per-period aggregates for a set of climbs.

    The input is not modified.
    """
    records = list(records)
    return AggregateStats(
        total_climbs=len(records),
        unique_routes=len({record.route for record in records}),
        unique_areas=unique_areas(records),
        climbing_sessions=len(group_by_day(records)),
        top_areas=tuple(top_areas(records, top_areas_limit)),
        send_types=count_send_types(records),
        styles=count_styles(records, tr_styles=(STYLE_TR, STYLE_SPORT)),
        lead_styles=count_lead_styles(records),
        total_pitches=total_pitches(records),
        total_length=total_length(records),
        hardest_grade=hardest_grade(records),
        average_grade=average_grade(records),
        grade_distribution=grade_distribution(records),
        multi_pitch_count=multi_pitch_count(records),
        longest_route=longest_route(records),
        hardest_route=hardest_route(records),
        busiest_day=busiest_day(records),
        route_with_longest_note=route_with_longest_note(records),
        earliest_climb=earliest_climb(records),
        latest_climb=latest_climb(records),
        favorite_routes=tuple(favorite_routes(records, favorite_routes_limit)),
    )
