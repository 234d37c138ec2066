"""climbing_wrapped package: Year-in-review statistics from a climbing ticks export."""

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.grade import LOWEST_GRADE, grade_token, normalize
from climbing_wrapped.tick_loader import IngestResult, TickLoadError, ingest, load_ticks, read_tick_rows
from climbing_wrapped.statistics import ClimbingStatistics, StatsResult, process_climbing_data

__all__ = [
    "ClimbRecord",
    "ClimbingStatistics",
    "IngestResult",
    "LOWEST_GRADE",
    "StatsResult",
    "TickLoadError",
    "grade_token",
    "ingest",
    "load_ticks",
    "normalize",
    "process_climbing_data",
    "read_tick_rows",
]
