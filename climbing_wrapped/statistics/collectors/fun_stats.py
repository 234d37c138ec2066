"""
Fun statistics collector: send ratios, sending season, power day and more.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional, Sequence

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.base import StatisticsCollector, register_collector
from climbing_wrapped.statistics.insights import FEET_PER_MILE, derive_insights
from climbing_wrapped.statistics.model import Stats

logger = logging.getLogger(__name__)


@register_collector
@dataclass
class FunStatsCollector(StatisticsCollector):
    """
    Collects the light-hearted insights.

    Statistics collected:
        - sendRatio and projectConversionRate (redpoints vs. fell/hung)
        - sendingSeason: busiest month (name and 0-based index)
        - verticalFeet and verticalMiles
        - powerDay: day with the highest average grade
        - restDayStreak: longest gap between climbs, in days
        - spiritCrag: most visited area
        - styleScore: percentage of climbs led

    Attributes:
        feet_per_mile: Length units per "mile" for verticalMiles
    """
    collector_id: str = "fun_stats"
    feet_per_mile: float = FEET_PER_MILE

    def collect(self, records: Sequence[ClimbRecord], existing_stats: Stats, collector_num: int = None, total_collectors: int = None) -> Stats:
        """Collect fun statistics."""
        stats = Stats()
        prefix = self._prefix(collector_num, total_collectors)
        self._report_step(info=f"{prefix}Deriving insights", target=len(records), reset_counter=True, plus_step=0)

        insights = derive_insights(records, feet_per_mile=self.feet_per_mile)

        stats.add_value('funStats', 'sendRatio', dict(insights.send_ratio))
        stats.add_value('funStats', 'projectConversionRate', round(insights.project_conversion_rate, 1))
        stats.add_value('funStats', 'sendingSeason', insights.sending_season_name)
        stats.add_value('funStats', 'sendingSeasonMonth', insights.sending_season)
        stats.add_value('funStats', 'verticalFeet', insights.vertical_feet)
        stats.add_value('funStats', 'verticalMiles', round(insights.vertical_miles, 2))
        stats.add_value('funStats', 'powerDay', self._power_day(insights.power_day))
        stats.add_value('funStats', 'restDayStreak', insights.longest_rest_gap)
        stats.add_value('funStats', 'spiritCrag', insights.most_frequent_area)
        stats.add_value('funStats', 'styleScore', round(insights.style_score, 1))

        self._report_step(plus_step=len(records))
        logger.info(f"Fun stats: sending season {insights.sending_season_name}, spirit crag {insights.most_frequent_area}")

        return stats

    def _power_day(self, power_day: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if power_day is None:
            return None
        return {
            'date': power_day['date'],
            'averageGrade': round(power_day['averageGrade'], 1),
            'climbCount': power_day['climbCount'],
        }
