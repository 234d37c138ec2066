"""
Built-in statistics collectors.

Import collectors here to automatically register them. Registration order is
the order of the sections in the report.
"""

from climbing_wrapped.statistics.collectors.basic import BasicStatsCollector
from climbing_wrapped.statistics.collectors.highlights import HighlightsCollector
from climbing_wrapped.statistics.collectors.progression import ProgressionCollector
from climbing_wrapped.statistics.collectors.averages import AveragesCollector
from climbing_wrapped.statistics.collectors.fun_stats import FunStatsCollector
from climbing_wrapped.statistics.collectors.route_types import RouteTypesCollector

__all__ = [
    'BasicStatsCollector',
    'HighlightsCollector',
    'ProgressionCollector',
    'AveragesCollector',
    'FunStatsCollector',
    'RouteTypesCollector',
]
