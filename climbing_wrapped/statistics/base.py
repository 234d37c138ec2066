"""
Collector base class and the registry of report sections.

Each collector fills one section of the year-in-review report. Collectors
register themselves at import time; the registry order is the order in
which sections appear in the report.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional, Sequence, Type

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.model import Stats

logger = logging.getLogger(__name__)

# collector_id -> collector class, in registration order
_COLLECTOR_REGISTRY: Dict[str, Type['StatisticsCollector']] = {}


def register_collector(cls: Type['StatisticsCollector']) -> Type['StatisticsCollector']:
    """
    Class decorator adding a report-section collector to the registry.

    Example:
        @register_collector
        @dataclass
        class CragCollector(StatisticsCollector):
            collector_id: str = "crags"
    """
    collector_id = getattr(cls, 'collector_id', '')
    if not collector_id:
        logger.warning(f"Collector {cls.__name__} has no collector_id; skipping registration")
        return cls
    if collector_id in _COLLECTOR_REGISTRY:
        logger.debug(f"Replacing registered collector {collector_id}")
    _COLLECTOR_REGISTRY[collector_id] = cls
    logger.debug(f"Registered collector {collector_id} ({cls.__name__})")
    return cls


def get_collector_registry() -> Dict[str, Type['StatisticsCollector']]:
    """Copy of the registry, in report-section order."""
    return dict(_COLLECTOR_REGISTRY)


@dataclass
class StatisticsCollector(ABC):
    """
    A report section built from the report year's climbs.

    Collectors never modify the records they are given. Options declared as
    extra dataclass fields on a subclass are filled in by the pipeline from
    the configured statistics options of the same name.

    Attributes:
        collector_id: Registry key, also used to enable/disable in config
        enabled: Skipped by the pipeline when False
        app_hooks: Optional progress hooks (see climbing_wrapped.app_hooks)
    """
    collector_id: str = ""
    enabled: bool = True
    app_hooks: Any = None

    def __post_init__(self):
        if not self.collector_id:
            raise ValueError(f"{type(self).__name__} has no collector_id")

    @abstractmethod
    def collect(
        self,
        records: Sequence[ClimbRecord],
        existing_stats: Stats,
        collector_num: Optional[int] = None,
        total_collectors: Optional[int] = None,
    ) -> Stats:
        """
        Build this collector's section.

        Args:
            records: Climbs of the report year
            existing_stats: Sections produced by earlier collectors
            collector_num: Position of this collector in the run (1-based)
            total_collectors: Number of collectors in the run

        Returns:
            Stats holding only this collector's values
        """

    def _prefix(self, collector_num: Optional[int] = None, total_collectors: Optional[int] = None) -> str:
        if collector_num and total_collectors:
            return f"Report section {collector_num} of {total_collectors}: "
        return "Report section: "

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0) -> None:
        """Forward progress to app_hooks, or to the debug log without hooks."""
        report_step = getattr(self.app_hooks, "report_step", None) if self.app_hooks else None
        if callable(report_step):
            report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        elif info:
            logger.debug(info)
