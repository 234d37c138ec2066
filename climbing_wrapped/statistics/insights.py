"""
Derived insights for the report year: streaks, time of day, monthly grade
progression, send ratios, rest days and favourite crag.

These need ordering or cross-record reasoning, unlike the plain counts in
aggregate.py. Sorting is always done on a copy of the input.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.aggregate import (
    LEAD_FELL_HUNG,
    LEAD_FLASH,
    LEAD_ONSIGHT,
    LEAD_REDPOINT,
    STYLE_LEAD,
    UNKNOWN_AREA,
    count_where,
    group_by_day,
    ratio,
)

SECONDS_PER_DAY = 24 * 60 * 60
FEET_PER_MILE = 5280

# (bucket, first hour after the bucket)
TIME_OF_DAY_BUCKETS = (
    ('morning', 11),
    ('midday', 15),
    ('afternoon', 19),
    ('evening', 24),
)

# Month number to name mapping
MONTH_NAMES = {
    1: 'January', 2: 'February', 3: 'March', 4: 'April',
    5: 'May', 6: 'June', 7: 'July', 8: 'August',
    9: 'September', 10: 'October', 11: 'November', 12: 'December'
}


def _days_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


def longest_streak(records: Sequence[ClimbRecord]) -> int:
    """
    Longest run of climbs with no more than one day between consecutive climbs.

    Every climb extends the run, so several climbs on one day count
    individually.
    """
    longest = 0
    current = 0
    previous: Optional[datetime] = None
    for record in sorted(records, key=lambda r: r.date):
        if previous is None or _days_between(previous, record.date) > 1:
            current = 1
        else:
            current += 1
        longest = max(longest, current)
        previous = record.date
    return longest


def time_of_day(records: Sequence[ClimbRecord]) -> Dict[str, int]:
    """
    Climbs per part of the day.

    Logs that only record the date put every climb at midnight, so everything
    lands in 'morning'.
    """
    buckets = {name: 0 for name, _ in TIME_OF_DAY_BUCKETS}
    for record in records:
        hour = record.date.hour
        for name, end_hour in TIME_OF_DAY_BUCKETS:
            if hour < end_hour:
                buckets[name] += 1
                break
    return buckets


def grade_progression(records: Sequence[ClimbRecord]) -> List[Dict[str, Any]]:
    """Average grade per 'YYYY-MM', months in first-seen order."""
    monthly: Dict[str, List[float]] = {}
    for record in records:
        month = f"{record.date.year:04d}-{record.date.month:02d}"
        monthly.setdefault(month, []).append(record.grade)
    return [
        {'month': month, 'averageGrade': ratio(sum(grades), len(grades))}
        for month, grades in monthly.items()
    ]


def send_ratio(records: Sequence[ClimbRecord]) -> Dict[str, int]:
    return {
        'onsight': count_where(records, lead_style=LEAD_ONSIGHT),
        'flash': count_where(records, lead_style=LEAD_FLASH),
        'redpoint': count_where(records, lead_style=LEAD_REDPOINT),
        'attempts': count_where(records, lead_style=LEAD_FELL_HUNG),
    }


def project_conversion_rate(sends: Dict[str, int]) -> float:
    """Redpoints as a percentage of redpoints plus failed attempts."""
    return ratio(sends['redpoint'], sends['redpoint'] + sends['attempts']) * 100


def sending_season(records: Sequence[ClimbRecord]) -> Optional[int]:
    """Month index (0 = January) with the most climbs, or None with no climbs."""
    monthly: Dict[int, int] = {}
    for record in records:
        month = record.date.month - 1
        monthly[month] = monthly.get(month, 0) + 1
    return _first_max(monthly)


def vertical_feet(records: Sequence[ClimbRecord]) -> int:
    return sum(record.length for record in records)


def power_day(records: Sequence[ClimbRecord]) -> Optional[Dict[str, Any]]:
    """
    Day with the highest average grade.

    Returns:
        {'date', 'averageGrade', 'climbCount'}, or None with no climbs.
    """
    best = None
    best_average = -math.inf
    for day, climbs in group_by_day(records).items():
        average = sum(record.grade for record in climbs) / len(climbs)
        if average > best_average:
            best_average = average
            best = {'date': day.isoformat(), 'averageGrade': average, 'climbCount': len(climbs)}
    return best


def longest_rest_gap(records: Sequence[ClimbRecord]) -> int:
    """Most whole days between two consecutive climbs."""
    dates = sorted(record.date for record in records)
    longest = 0.0
    for earlier, later in zip(dates, dates[1:]):
        longest = max(longest, _days_between(earlier, later))
    return math.floor(longest)


def most_frequent_area(records: Sequence[ClimbRecord]) -> Optional[str]:
    """Area with the most climbs ('Unknown' for climbs without one)."""
    counts: Dict[str, int] = {}
    for record in records:
        area = record.area or UNKNOWN_AREA
        counts[area] = counts.get(area, 0) + 1
    return _first_max(counts)


def style_score(records: Sequence[ClimbRecord]) -> float:
    """Percentage of climbs led."""
    return ratio(count_where(records, style=STYLE_LEAD), len(records)) * 100


def _first_max(counts: Dict[Any, int]) -> Optional[Any]:
    best_key, best_count = None, None
    for key, count in counts.items():
        if best_count is None or count > best_count:
            best_key, best_count = key, count
    return best_key


@dataclass(frozen=True)
class Insights:
    """Derived metrics for the report year."""
    longest_streak: int = 0
    time_of_day: Dict[str, int] = field(default_factory=dict)
    grade_progression: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    send_ratio: Dict[str, int] = field(default_factory=dict)
    project_conversion_rate: float = math.nan
    sending_season: Optional[int] = None
    vertical_feet: int = 0
    vertical_miles: float = 0.0
    power_day: Optional[Dict[str, Any]] = None
    longest_rest_gap: int = 0
    most_frequent_area: Optional[str] = None
    style_score: float = math.nan

    @property
    def sending_season_name(self) -> Optional[str]:
        if self.sending_season is None:
            return None
        return MONTH_NAMES[self.sending_season + 1]


def derive_insights(records: Sequence[ClimbRecord], feet_per_mile: float = FEET_PER_MILE) -> Insights:
    """Compute every insight for the report year's climbs."""
    records = list(records)
    sends = send_ratio(records)
    feet = vertical_feet(records)
    return Insights(
        longest_streak=longest_streak(records),
        time_of_day=time_of_day(records),
        grade_progression=tuple(grade_progression(records)),
        send_ratio=sends,
        project_conversion_rate=project_conversion_rate(sends),
        sending_season=sending_season(records),
        vertical_feet=feet,
        vertical_miles=feet / feet_per_mile,
        power_day=power_day(records),
        longest_rest_gap=longest_rest_gap(records),
        most_frequent_area=most_frequent_area(records),
        style_score=style_score(records),
    )
