"""
Statistics module for a year of climbing.

This module turns the report year's climbs into the sections of the
year-in-review report, and compares the year with the one before.

Main components:
    - StatisticsCollector: Base class for creating custom statistics collectors
    - StatisticsPipeline: Orchestrates running multiple collectors
    - aggregate / derive_insights / compare: Per-period aggregates, derived insights, year-over-year deltas
    - ClimbingStatistics: Convenience wrapper from ticks export to StatsResult
    - Built-in collectors: One per report section
"""

from climbing_wrapped.statistics.base import StatisticsCollector, register_collector, get_collector_registry
from climbing_wrapped.statistics.pipeline import StatisticsPipeline, StatisticsConfig
from climbing_wrapped.statistics.model import Stats, StatsResult, StatValue
from climbing_wrapped.statistics.aggregate import AggregateStats, aggregate, top_areas
from climbing_wrapped.statistics.insights import Insights, derive_insights
from climbing_wrapped.statistics.comparison import YearDelta, compare
from climbing_wrapped.statistics.statistics import ClimbingStatistics, process_climbing_data

# Import collectors to ensure they're registered
from climbing_wrapped.statistics import collectors

__all__ = [
    'StatisticsCollector',
    'register_collector',
    'get_collector_registry',
    'StatisticsPipeline',
    'StatisticsConfig',
    'Stats',
    'StatsResult',
    'StatValue',
    'AggregateStats',
    'aggregate',
    'top_areas',
    'Insights',
    'derive_insights',
    'YearDelta',
    'compare',
    'ClimbingStatistics',
    'process_climbing_data',
    'collectors',
]
