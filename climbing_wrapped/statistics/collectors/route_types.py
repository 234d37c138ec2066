"""
Route type collector.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
import logging
from typing import Sequence

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.base import StatisticsCollector, register_collector
from climbing_wrapped.statistics.model import Stats

logger = logging.getLogger(__name__)

UNKNOWN_ROUTE_TYPE = 'Unknown'


@register_collector
@dataclass
class RouteTypesCollector(StatisticsCollector):
    """
    Counts climbs per route type.

    A combined type such as "Trad, Alpine" counts once for each part.
    """
    collector_id: str = "route_types"

    def collect(self, records: Sequence[ClimbRecord], existing_stats: Stats, collector_num: int = None, total_collectors: int = None) -> Stats:
        """Collect route type counts."""
        stats = Stats()
        prefix = self._prefix(collector_num, total_collectors)
        self._report_step(info=f"{prefix}Counting route types", target=len(records), reset_counter=True, plus_step=0)

        type_counts = Counter()
        for record in records:
            parts = [part.strip() for part in record.route_type.split(',') if part.strip()]
            type_counts.update(parts or [UNKNOWN_ROUTE_TYPE])

        stats.set_category('routeTypes', dict(type_counts))

        self._report_step(plus_step=len(records))
        logger.info(f"Route types: {len(type_counts)} types")

        return stats
