"""
Progression collector: streaks, time of day and monthly grades.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.base import StatisticsCollector, register_collector
from climbing_wrapped.statistics.insights import derive_insights
from climbing_wrapped.statistics.model import Stats

logger = logging.getLogger(__name__)


@register_collector
@dataclass
class ProgressionCollector(StatisticsCollector):
    """
    Collects how the year developed.

    Statistics collected:
        - longestStreak: longest run of climbs at most a day apart
        - timeOfDay: morning / midday / afternoon / evening counts
        - gradeProgression: average grade per month
    """
    collector_id: str = "progression"

    def collect(self, records: Sequence[ClimbRecord], existing_stats: Stats, collector_num: int = None, total_collectors: int = None) -> Stats:
        """Collect progression statistics."""
        stats = Stats()
        prefix = self._prefix(collector_num, total_collectors)
        self._report_step(info=f"{prefix}Analyzing progression", target=len(records), reset_counter=True, plus_step=0)

        insights = derive_insights(records)
        stats.add_value('progression', 'longestStreak', insights.longest_streak)
        stats.add_value('progression', 'timeOfDay', dict(insights.time_of_day))
        stats.add_value('progression', 'gradeProgression', [dict(month) for month in insights.grade_progression])

        self._report_step(plus_step=len(records))
        logger.info(f"Progression: longest streak {insights.longest_streak}")

        return stats
