"""
Highlights collector: standout climbs and days of the year.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional, Sequence

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.aggregate import (
    DEFAULT_FAVORITE_ROUTES_LIMIT,
    DEFAULT_TOP_AREAS_LIMIT,
    aggregate,
)
from climbing_wrapped.statistics.base import StatisticsCollector, register_collector
from climbing_wrapped.statistics.model import Stats

logger = logging.getLogger(__name__)


@register_collector
@dataclass
class HighlightsCollector(StatisticsCollector):
    """
    Collects highlight climbs.

    Statistics collected:
        - longestRoute, hardestRoute, routeWithLongestNote
        - busiestDay
        - earliestClimb, latestClimb
        - favoriteRoutes (by personal stars)
        - topAreas

    Attributes:
        top_areas_limit: Number of areas in topAreas
        favorite_routes_limit: Number of routes in favoriteRoutes
    """
    collector_id: str = "highlights"
    top_areas_limit: int = DEFAULT_TOP_AREAS_LIMIT
    favorite_routes_limit: int = DEFAULT_FAVORITE_ROUTES_LIMIT

    def collect(self, records: Sequence[ClimbRecord], existing_stats: Stats, collector_num: int = None, total_collectors: int = None) -> Stats:
        """Collect highlights."""
        stats = Stats()
        prefix = self._prefix(collector_num, total_collectors)
        self._report_step(info=f"{prefix}Finding highlights", target=len(records), reset_counter=True, plus_step=0)

        year = aggregate(records, top_areas_limit=self.top_areas_limit, favorite_routes_limit=self.favorite_routes_limit)

        stats.add_value('highlights', 'longestRoute', self._longest_route(year.longest_route))
        stats.add_value('highlights', 'hardestRoute', self._hardest_route(year.hardest_route))
        stats.add_value('highlights', 'busiestDay', dict(year.busiest_day))
        stats.add_value('highlights', 'routeWithLongestNote', self._noted_route(year.route_with_longest_note))
        stats.add_value('highlights', 'earliestClimb', self._climb(year.earliest_climb))
        stats.add_value('highlights', 'latestClimb', self._climb(year.latest_climb))
        stats.add_value('highlights', 'favoriteRoutes', [dict(route) for route in year.favorite_routes])
        stats.add_value('highlights', 'topAreas', [dict(area) for area in year.top_areas])

        self._report_step(plus_step=year.total_climbs)
        if year.hardest_route:
            logger.info(f"Highlights: hardest route {year.hardest_route.route} ({year.hardest_route.rating})")

        return stats

    def _longest_route(self, record: Optional[ClimbRecord]) -> Optional[Dict[str, Any]]:
        if record is None:
            return None
        return {
            'name': record.route,
            'date': record.day.isoformat(),
            'location': record.location,
            'rating': record.rating,
            'pitches': record.pitches,
            'totalFeet': record.length,
            'url': record.url,
        }

    def _hardest_route(self, record: Optional[ClimbRecord]) -> Optional[Dict[str, Any]]:
        if record is None:
            return None
        return {
            'name': record.route,
            'date': record.day.isoformat(),
            'location': record.location,
            'rating': record.rating,
            'url': record.url,
        }

    def _noted_route(self, record: Optional[ClimbRecord]) -> Optional[Dict[str, Any]]:
        if record is None:
            return None
        entry = self._hardest_route(record)
        entry['note'] = record.notes
        return entry

    def _climb(self, record: Optional[ClimbRecord]) -> Optional[Dict[str, Any]]:
        if record is None:
            return None
        return {
            'name': record.route,
            'date': record.day.isoformat(),
            'rating': record.rating,
        }
