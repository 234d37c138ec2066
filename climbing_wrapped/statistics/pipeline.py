"""
Pipeline for running statistics collectors.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.statistics.aggregate import DEFAULT_TOP_AREAS_LIMIT, aggregate
from climbing_wrapped.statistics.base import StatisticsCollector, get_collector_registry
from climbing_wrapped.statistics.comparison import compare
from climbing_wrapped.statistics.model import Stats

logger = logging.getLogger(__name__)

YEAR_COMPARISON_ID = 'year_comparison'


@dataclass
class StatisticsConfig:
    """
    Configuration for statistics collection.

    Attributes:
        collectors: Dict of collector_id -> enabled status
        statistics_options: Options passed to collectors that declare a field of the same name
            (e.g. 'top_areas_limit', 'favorite_routes_limit', 'feet_per_mile')
        report_year: Year to report on; None means the caller decides
        config_file: Path to YAML config file (optional)
    """
    collectors: Dict[str, bool] = field(default_factory=dict)
    statistics_options: Dict[str, Any] = field(default_factory=dict)
    report_year: Optional[int] = None
    config_file: Optional[Path] = None

    def __post_init__(self) -> None:
        """Load configuration from file if config_file is specified and exists."""
        if self.config_file and Path(self.config_file).exists():
            self._load_from_file()
        elif self.config_file:
            logger.warning(f"Statistics config file not found: {self.config_file}")

    def _load_from_file(self) -> None:
        """
        Load configuration from YAML file.

        Reads the 'statistics' section from the YAML file: report_year,
        collector enable/disable settings and collector options.
        """
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            statistics_config = data.get('statistics', {}) or {}

            # Load collector enabled/disabled settings
            collectors_config = statistics_config.get('collectors', {}) or {}
            for collector_id, settings in collectors_config.items():
                if isinstance(settings, dict):
                    self.collectors[collector_id] = settings.get('enabled', True)
                elif isinstance(settings, bool):
                    self.collectors[collector_id] = settings

            self.statistics_options.update(statistics_config.get('options', {}) or {})

            if statistics_config.get('report_year') is not None:
                self.report_year = int(statistics_config['report_year'])

            logger.info(f"Loaded statistics config from {self.config_file}")
        except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Failed to load statistics config from {self.config_file}: {e}")

    def is_enabled(self, collector_id: str) -> bool:
        """
        Check if a collector is enabled.

        Args:
            collector_id: Identifier of the collector to check

        Returns:
            True if enabled (default if not specified), False otherwise
        """
        return self.collectors.get(collector_id, True)

    def option(self, name: str, default: Any = None) -> Any:
        return self.statistics_options.get(name, default)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StatisticsConfig:
        """
        Create configuration from dictionary.

        Useful for testing and programmatic configuration.

        Args:
            data: Dictionary with optional 'collectors', 'options' and 'report_year' keys

        Returns:
            StatisticsConfig instance
        """
        return cls(
            collectors=dict(data.get('collectors', {})),
            statistics_options=dict(data.get('options', {})),
            report_year=data.get('report_year'),
        )


@dataclass
class StatisticsPipeline:
    """
    Pipeline for running statistics collectors on a year of climbs.

    Attributes:
        collectors: List of collector instances to run
        config: Configuration for the pipeline
        app_hooks: Optional application hooks for progress reporting
    """
    collectors: List[StatisticsCollector] = field(default_factory=list)
    config: StatisticsConfig = field(default_factory=StatisticsConfig)
    app_hooks: Optional[Any] = field(default=None)

    def __post_init__(self) -> None:
        """
        Initialize collectors from registry if none provided.

        If no collectors are explicitly provided, automatically loads
        all registered collectors from the global registry.
        """
        if not self.collectors:
            self._load_collectors_from_registry()

    def _load_collectors_from_registry(self) -> None:
        """
        Load all registered collectors with configuration applied.

        Instantiates each collector from the registry, applying the
        enabled/disabled setting and any options the collector accepts.
        """
        registry = get_collector_registry()
        for collector_id, collector_cls in registry.items():
            enabled = self.config.is_enabled(collector_id)
            accepted = {f.name for f in fields(collector_cls)} - {'collector_id', 'enabled', 'app_hooks'}
            options = {k: v for k, v in self.config.statistics_options.items() if k in accepted}
            try:
                collector = collector_cls(enabled=enabled, app_hooks=self.app_hooks, **options)
                self.collectors.append(collector)
                logger.debug(f"Loaded collector: {collector_id} (enabled={enabled}, options={options})")
            except (TypeError, ValueError) as e:
                logger.error(f"Failed to load collector {collector_id}: {e}")

    def run(
        self,
        records: Iterable[ClimbRecord],
        prior_records: Optional[Iterable[ClimbRecord]] = None,
        year: Optional[int] = None,
    ) -> Stats:
        """
        Run all enabled collectors on the report year's climbs.

        Args:
            records: Climbs of the report year
            prior_records: Climbs of the previous year; when given, the
                'yearComparison' section is added
            year: Report year, recorded in the 'yearComparison' section

        Returns:
            Stats object with all collected values
        """
        stats = Stats()

        # Collectors may iterate more than once
        records_list = list(records)

        logger.debug(f"Running statistics on {len(records_list)} climbs")

        # Set up progress tracking
        enabled_collectors = [c for c in self.collectors if c.enabled]
        total_collectors = len(enabled_collectors)
        self._report_step(info="Collecting statistics", target=total_collectors, reset_counter=True, plus_step=0)

        for collector_num, collector in enumerate(enabled_collectors, start=1):
            # Check for stop request
            if self._stop_requested("Statistics collection stopped by user"):
                logger.info(f"Statistics stopped after {collector_num - 1} collectors")
                return stats

            try:
                logger.debug(f"Running collector: {collector.collector_id}")
                collector_stats = collector.collect(records_list, stats, collector_num, total_collectors)
                stats.merge(collector_stats)

                # Report progress after each collector
                self._report_step(plus_step=1)
            except Exception as e:
                logger.error(f"Error in collector {collector.collector_id}: {e}", exc_info=True)

        if prior_records is not None and self.config.is_enabled(YEAR_COMPARISON_ID):
            stats.merge(self.compare_years(records_list, list(prior_records), year=year))

        return stats

    def compare_years(self, records: List[ClimbRecord], prior_records: List[ClimbRecord], year: Optional[int] = None) -> Stats:
        """
        Build the 'yearComparison' section.

        Args:
            records: Climbs of the report year
            prior_records: Climbs of the previous year
            year: Report year

        Returns:
            Stats with 'year', 'thisYear', 'lastYear' and 'changes'
        """
        stats = Stats()
        limit = self.config.option('top_areas_limit', DEFAULT_TOP_AREAS_LIMIT)
        this_year = aggregate(records, top_areas_limit=limit)
        last_year = aggregate(prior_records, top_areas_limit=limit)

        stats.add_value('yearComparison', 'year', year)
        stats.add_value('yearComparison', 'thisYear', this_year.to_year_dict())
        stats.add_value('yearComparison', 'lastYear', last_year.to_year_dict())
        stats.add_value('yearComparison', 'changes', compare(this_year, last_year).to_dict())

        logger.info(f"Year comparison: {this_year.total_climbs} climbs vs {last_year.total_climbs} the year before")
        return stats

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0) -> None:
        """
        Report a step via app hooks if available. (Private method)

        Args:
            info (str): Information message.
            target (int): Target count for progress.
            reset_counter (bool): Whether to reset the counter.
            plus_step (int): Incremental step count.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "report_step", None)):
            self.app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        else:
            logger.debug(info)

    def _stop_requested(self, logger_stop_message: str = "Stop requested by user") -> bool:
        """
        Check if stop has been requested via app hooks. (Private method)

        Returns:
            bool: True if stop requested, False otherwise.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "stop_requested", None)):
            if self.app_hooks.stop_requested():
                if logger_stop_message:
                    logger.info(logger_stop_message)
                return True
        return False
