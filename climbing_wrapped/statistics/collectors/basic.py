"""
Basic counts collector.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.aggregate import aggregate, count_styles
from climbing_wrapped.statistics.base import StatisticsCollector, register_collector
from climbing_wrapped.statistics.model import Stats

logger = logging.getLogger(__name__)


@register_collector
@dataclass
class BasicStatsCollector(StatisticsCollector):
    """
    Collects the headline counts for the year.

    Statistics collected:
        - basicStats: climbs, routes, areas, sessions, pitches, length
        - styles: lead / top rope (exact 'TR' only) / follow
        - leadStyles: onsight / flash / redpoint / fell-hung
        - gradeDistribution: climbs per raw grade token
        - multiPitchCount
    """
    collector_id: str = "basic"

    def collect(self, records: Sequence[ClimbRecord], existing_stats: Stats, collector_num: int = None, total_collectors: int = None) -> Stats:
        """Collect basic statistics."""
        stats = Stats()
        prefix = self._prefix(collector_num, total_collectors)
        self._report_step(info=f"{prefix}Counting climbs", target=len(records), reset_counter=True, plus_step=0)

        year = aggregate(records)
        stats.add_value('basicStats', 'totalClimbs', year.total_climbs)
        stats.add_value('basicStats', 'uniqueRoutes', year.unique_routes)
        stats.add_value('basicStats', 'uniqueAreas', year.unique_areas)
        stats.add_value('basicStats', 'climbingSessions', year.climbing_sessions)
        stats.add_value('basicStats', 'totalPitches', year.total_pitches)
        stats.add_value('basicStats', 'totalLength', year.total_length)

        # AggregateStats.styles also counts Sport as top rope
        stats.set_category('styles', count_styles(records))
        stats.set_category('leadStyles', dict(year.lead_styles))
        stats.set_category('gradeDistribution', dict(year.grade_distribution))
        stats.set_category('multiPitchCount', year.multi_pitch_count)

        self._report_step(plus_step=year.total_climbs)
        logger.info(f"Basic: {year.total_climbs} climbs, {year.unique_areas} areas")

        return stats
