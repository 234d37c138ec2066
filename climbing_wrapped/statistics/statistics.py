from __future__ import annotations

from datetime import date as _date
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional
import logging

from climbing_wrapped.app_hooks import AppHooks
from climbing_wrapped.tick_loader import IngestResult, TickSource, ingest, read_tick_rows
from .pipeline import StatisticsConfig, StatisticsPipeline
from .model import StatsResult

logger = logging.getLogger(__name__)


class ClimbingStatistics:
    """
    High-level interface for building a year-in-review climbing report.

    This is a convenience wrapper around the tick loader and
    StatisticsPipeline.

    Example:
        # From a ticks export URL or file
        stats = ClimbingStatistics(source="ticks.csv", year=2024)
        results = stats.results  # StatsResult

        # From rows already parsed elsewhere
        stats = ClimbingStatistics(rows=rows, year=2024)
        total = stats.get_value('basicStats', 'totalClimbs')
    """

    def __init__(
        self,
        source: Optional[TickSource] = None,
        rows: Optional[Iterable[Mapping[str, Any]]] = None,
        year: Optional[int] = None,
        config_dict: Optional[Dict[str, Any]] = None,
        config_file: Optional[Path] = None,
        app_hooks: Optional[AppHooks] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize and, if data is given, build the report.

        Args:
            source: URL or path of a ticks CSV export
            rows: Already parsed rows (column name -> text); used if no source
            year: Report year; defaults to the configured report_year, then the current year
            config_dict: Dictionary to configure collectors (e.g., {'collectors': {'route_types': False}})
            config_file: Path to YAML config file
            app_hooks: Optional application hooks for progress reporting
            timeout: Fetch timeout in seconds for URL sources

        Raises:
            TickLoadError: If the source cannot be fetched or parsed.
        """
        self.app_hooks = app_hooks
        self.timeout = timeout

        # Create configuration
        if config_dict:
            self.config = StatisticsConfig.from_dict(config_dict)
        elif config_file:
            self.config = StatisticsConfig(config_file=config_file)
        else:
            # Use defaults - all collectors enabled
            self.config = StatisticsConfig()

        self.year = year or self.config.report_year or _date.today().year

        # Create pipeline
        self.pipeline = StatisticsPipeline(config=self.config, app_hooks=app_hooks)

        self.ingested: Optional[IngestResult] = None
        self._results: Optional[StatsResult] = None

        if source is not None:
            rows = read_tick_rows(source, timeout=timeout)
        if rows is not None:
            self._results = self.analyze(rows)
        else:
            logger.warning("No ticks provided to ClimbingStatistics")

    def analyze(self, rows: Iterable[Mapping[str, Any]]) -> StatsResult:
        """
        Build the report from parsed rows.

        Args:
            rows: Parsed CSV rows (column name -> text)

        Returns:
            StatsResult for self.year, compared with the year before
        """
        self.ingested = ingest(rows, self.year)
        logger.info(f"Collecting statistics on {len(self.ingested.current_period)} climbs in {self.year}")

        stats = self.pipeline.run(self.ingested.current_period, prior_records=self.ingested.prior_period, year=self.year)
        self._results = StatsResult.from_stats(stats)
        return self._results

    @property
    def results(self) -> Optional[StatsResult]:
        """Get the statistics results."""
        return self._results

    def get_value(self, category: str, name: str, default=None):
        """
        Convenience method to get a specific statistic value.

        Args:
            category: Section name (e.g., 'basicStats', 'funStats')
            name: Statistic name (e.g., 'totalClimbs')
            default: Default value if not found

        Returns:
            The statistic value or default
        """
        if self._results:
            section = self._results.get(category)
            if isinstance(section, Mapping):
                return section.get(name, default)
        return default

    def get_category(self, category: str, default=None) -> Any:
        """
        Get a whole section of the report.

        Args:
            category: Section name (e.g., 'highlights', 'multiPitchCount')

        Returns:
            The section (read-only), or default
        """
        if self._results:
            return self._results.get(category, default)
        return default

    def to_dict(self) -> Dict[str, Any]:
        """
        Export the report as a mutable dictionary.

        Returns:
            Dictionary of sections to statistics
        """
        if self._results:
            return self._results.to_dict()
        return {}


def process_climbing_data(
    source: TickSource,
    year: Optional[int] = None,
    config_file: Optional[Path] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    timeout: Optional[float] = None,
) -> StatsResult:
    """
    Fetch a ticks export and build the year-in-review report.

    Args:
        source: URL or path of a ticks CSV export
        year: Report year (see ClimbingStatistics)
        config_file: Optional YAML config
        config_dict: Optional config dictionary
        timeout: Fetch timeout in seconds for URL sources

    Returns:
        StatsResult

    Raises:
        TickLoadError: If the source cannot be fetched or parsed.
    """
    stats = ClimbingStatistics(
        source=source,
        year=year,
        config_dict=config_dict,
        config_file=config_file,
        timeout=timeout,
    )
    return stats.results
