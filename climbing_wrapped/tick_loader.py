"""
tick_loader.py - Fetching, parsing and partitioning a ticks CSV export.

The source is either an http(s) URL or a local file path. The whole resource
is read before parsing; rows are then turned into ClimbRecord objects and
split into the report year and the year before it.
"""
from __future__ import annotations

import csv
from dataclasses import dataclass, field
import io
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import requests

from climbing_wrapped.climb_record import ClimbRecord

logger = logging.getLogger(__name__)

CSV_DELIMITER = ','

TickSource = Union[str, Path]


class TickLoadError(Exception):
    """Raised when the ticks resource cannot be fetched or parsed."""


@dataclass(frozen=True)
class IngestResult:
    """
    Valid records split by reporting period.

    Attributes:
        year: The report (current) year.
        current_period: Records dated in `year`, in input order.
        prior_period: Records dated in `year - 1`, in input order.
        skipped: Number of rows dropped for a missing/invalid date or route.
    """
    year: int
    current_period: Tuple[ClimbRecord, ...] = field(default_factory=tuple)
    prior_period: Tuple[ClimbRecord, ...] = field(default_factory=tuple)
    skipped: int = 0


def _is_url(source: TickSource) -> bool:
    return isinstance(source, str) and source.lower().startswith(('http://', 'https://'))


def fetch_tick_text(source: TickSource, timeout: Optional[float] = None) -> str:
    """
    Read the raw CSV text from a URL or a file.

    Args:
        source: http(s) URL or path to a CSV file.
        timeout: Passed to requests for URLs; None waits indefinitely.

    Returns:
        str: The full CSV text.

    Raises:
        TickLoadError: If the resource cannot be fetched or decoded.
    """
    if _is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TickLoadError(f"Failed to fetch ticks from {source}: {e}") from e
        logger.info(f"Fetched {len(response.content)} bytes of ticks from {source}")
        # Exports are UTF-8 whatever charset the server declares
        try:
            return response.content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise TickLoadError(f"Ticks from {source} are not valid UTF-8: {e}") from e

    path = Path(source)
    try:
        with open(path, 'r', newline='', encoding='utf-8-sig') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise TickLoadError(f"Failed to read ticks file {path}: {e}") from e
    logger.info(f"Read ticks file: {path}")
    return text


def parse_tick_csv(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text into one dict per row.

    The first row is the header; header names are stripped of surrounding
    whitespace. Empty lines are skipped. Rows shorter than the header simply
    lack the missing trailing columns; extra cells are ignored.

    Raises:
        TickLoadError: If the CSV is structurally malformed.
    """
    rows: List[Dict[str, str]] = []
    header: Optional[List[str]] = None
    reader = csv.reader(io.StringIO(text), delimiter=CSV_DELIMITER)
    try:
        for cells in reader:
            if not cells:
                continue
            if header is None:
                header = [name.strip() for name in cells]
                continue
            rows.append(dict(zip(header, cells)))
    except csv.Error as e:
        raise TickLoadError(f"CSV error on line {reader.line_num}: {e}") from e

    if header is None:
        logger.warning("Ticks CSV is empty")
    return rows


def read_tick_rows(source: TickSource, timeout: Optional[float] = None) -> List[Dict[str, str]]:
    """Fetch and parse a ticks export into raw row dicts."""
    return parse_tick_csv(fetch_tick_text(source, timeout=timeout))


def ingest(raw_rows: Iterable[Mapping[str, Any]], year: int) -> IngestResult:
    """
    Convert raw rows into records and split them by year.

    Rows without a valid date or route are dropped; records outside `year`
    and `year - 1` are ignored.

    Args:
        raw_rows: Parsed CSV rows.
        year: Report year.

    Returns:
        IngestResult with the current and prior period records.
    """
    current: List[ClimbRecord] = []
    prior: List[ClimbRecord] = []
    skipped = 0
    out_of_range = 0

    for idx, row in enumerate(raw_rows):
        record = ClimbRecord.from_row(row)
        if record is None:
            skipped += 1
            logger.debug(f"Skipping row {idx + 1}: missing or invalid date/route")
            continue
        if record.date.year == year:
            current.append(record)
        elif record.date.year == year - 1:
            prior.append(record)
        else:
            out_of_range += 1

    logger.info(
        f"Ingested {len(current)} climbs for {year} and {len(prior)} for {year - 1} "
        f"({skipped} invalid rows, {out_of_range} outside range)"
    )
    return IngestResult(
        year=year,
        current_period=tuple(current),
        prior_period=tuple(prior),
        skipped=skipped,
    )


def load_ticks(source: TickSource, year: int, timeout: Optional[float] = None) -> IngestResult:
    """Fetch, parse and ingest a ticks export in one call."""
    return ingest(read_tick_rows(source, timeout=timeout), year)
