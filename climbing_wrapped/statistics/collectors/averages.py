"""
Averages collector.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.aggregate import aggregate, ratio
from climbing_wrapped.statistics.base import StatisticsCollector, register_collector
from climbing_wrapped.statistics.model import Stats

logger = logging.getLogger(__name__)


@register_collector
@dataclass
class AveragesCollector(StatisticsCollector):
    """
    Collects per-session and per-climb averages.

    Statistics collected:
        - climbsPerSession (nan with no sessions)
        - gradeMode: most common grade token, first seen wins ties
        - pitchesPerClimb (nan with no climbs)
    """
    collector_id: str = "averages"

    def collect(self, records: Sequence[ClimbRecord], existing_stats: Stats, collector_num: int = None, total_collectors: int = None) -> Stats:
        """Collect averages."""
        stats = Stats()
        prefix = self._prefix(collector_num, total_collectors)
        self._report_step(info=f"{prefix}Averaging", target=len(records), reset_counter=True, plus_step=0)

        year = aggregate(records)
        grades = year.grade_distribution
        grade_mode = max(grades, key=grades.get) if grades else None

        stats.add_value('averages', 'climbsPerSession', ratio(year.total_climbs, year.climbing_sessions))
        stats.add_value('averages', 'gradeMode', grade_mode)
        stats.add_value('averages', 'pitchesPerClimb', ratio(year.total_pitches, year.total_climbs))

        self._report_step(plus_step=year.total_climbs)
        logger.info(f"Averages: {year.climbing_sessions} sessions, most common grade {grade_mode}")

        return stats
