"""
Year-over-year comparison of two AggregateStats.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Dict

from climbing_wrapped.statistics.aggregate import AggregateStats, ratio

logger = logging.getLogger(__name__)


def percent_change(current: float, prior: float) -> float:
    """(current - prior) / prior * 100; inf or nan when prior is 0."""
    return ratio(current - prior, prior) * 100


def lead_percentage(stats: AggregateStats) -> float:
    return ratio(stats.styles.get('lead', 0), stats.total_climbs) * 100


@dataclass(frozen=True)
class YearDelta:
    """
    Changes from the prior year to the report year.

    Percentages are rounded to one decimal and the grade change to two.
    A prior-year value of zero produces inf or nan, which is kept as is.
    """
    climbs_change: float
    areas_change: float
    pitches_change: float
    length_change: float
    grade_change: float
    lead_percent_change: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'climbsChange': self.climbs_change,
            'areasChange': self.areas_change,
            'pitchesChange': self.pitches_change,
            'lengthChange': self.length_change,
            'gradeChange': self.grade_change,
            'leadPercentChange': self.lead_percent_change,
        }


def compare(current: AggregateStats, prior: AggregateStats) -> YearDelta:
    """
    Compare the report year with the year before.

    Args:
        current: Aggregates for the report year
        prior: Aggregates for the previous year

    Returns:
        YearDelta with percentage changes for climbs, areas, pitches and
        length, the absolute average-grade change, and the change in lead
        percentage (percentage points).
    """
    delta = YearDelta(
        climbs_change=round(percent_change(current.total_climbs, prior.total_climbs), 1),
        areas_change=round(percent_change(current.unique_areas, prior.unique_areas), 1),
        pitches_change=round(percent_change(current.total_pitches, prior.total_pitches), 1),
        length_change=round(percent_change(current.total_length, prior.total_length), 1),
        grade_change=round(current.average_grade - prior.average_grade, 2),
        lead_percent_change=round(lead_percentage(current) - lead_percentage(prior), 1),
    )
    if any(math.isnan(value) or math.isinf(value) for value in delta.to_dict().values()):
        logger.debug("Year comparison contains undefined changes (no climbs to compare against)")
    return delta
