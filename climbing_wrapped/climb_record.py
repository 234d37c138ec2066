"""
climb_record.py - Typed representation of one row of a ticks export.

All optional-field handling (defaults, numeric coercion, date parsing) happens
once in ClimbRecord.from_row so the statistics code can rely on plain typed
attributes.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date as _date, datetime
import logging
import re
from typing import Any, Mapping, Optional

from climbing_wrapped.grade import grade_token, normalize

logger = logging.getLogger(__name__)

# Column names in a Mountain Project ticks export
COL_DATE = 'Date'
COL_ROUTE = 'Route'
COL_RATING = 'Rating'
COL_NOTES = 'Notes'
COL_URL = 'URL'
COL_PITCHES = 'Pitches'
COL_LOCATION = 'Location'
COL_STARS = 'Your Stars'
COL_STYLE = 'Style'
COL_LEAD_STYLE = 'Lead Style'
COL_ROUTE_TYPE = 'Route Type'
COL_LENGTH = 'Length'

LOCATION_SEPARATOR = '>'

_DATE_FORMATS = (
    '%m/%d/%Y',
    '%m/%d/%Y %H:%M',
    '%m/%d/%Y %H:%M:%S',
    '%Y/%m/%d',
    '%d %b %Y',
    '%b %d, %Y',
)

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def _naive(value: datetime) -> datetime:
    return value.replace(tzinfo=None) if value.tzinfo is not None else value


def parse_tick_date(value: Any) -> Optional[datetime]:
    """
    Parse a tick date into a datetime.

    ISO dates ("2024-03-01", "2024-03-01 17:30") are the normal case; a few
    common spreadsheet formats are accepted as well. Date-only values become
    midnight.

    Values with a UTC offset keep their local wall-clock time and lose the
    offset, so every record compares with every other.

    Returns:
        datetime, or None if the value is empty or not a real calendar date.
    """
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, _date):
        return datetime(value.year, value.month, value.day)
    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return _naive(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_int(value: Any) -> Optional[int]:
    """
    Best-effort integer conversion: the leading integer of the text.

    "12" -> 12, "120 ft" -> 120, "" -> None, "n/a" -> None.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def _text(row: Mapping[str, Any], column: str, strip: bool = True) -> str:
    value = row.get(column)
    if value is None:
        return ''
    text = str(value)
    return text.strip() if strip else text


@dataclass(frozen=True)
class ClimbRecord:
    """
    One logged ascent.

    Attributes:
        date: When the climb happened (midnight if the log has no time).
        route: Route name.
        rating: Free-text grade, '' if missing.
        location: '>'-separated location path, e.g. "Colorado > Boulder > Flatirons".
        style: Ascent mode: 'Lead', 'TR', 'Sport', 'Follow' or other.
        lead_style: 'Onsight', 'Flash', 'Redpoint', 'Fell/Hung' or ''.
        pitches: Pitch count, at least 1.
        length: Route length, 0 if unknown.
        stars: Personal star rating, None if not given.
        notes: Free-text notes.
        url: Route page link.
        route_type: Route type text, e.g. "Trad, Alpine".
    """
    date: datetime
    route: str
    rating: str = ''
    location: str = ''
    style: str = ''
    lead_style: str = ''
    pitches: int = 1
    length: int = 0
    stars: Optional[int] = None
    notes: str = ''
    url: str = ''
    route_type: str = ''

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Optional['ClimbRecord']:
        """
        Build a record from a parsed CSV row.

        Args:
            row: Mapping of column name to raw cell text.

        Returns:
            ClimbRecord, or None if the row has no valid date or no route.
        """
        when = parse_tick_date(row.get(COL_DATE))
        route = _text(row, COL_ROUTE)
        if when is None or not route:
            return None

        length = parse_int(row.get(COL_LENGTH))
        return cls(
            date=when,
            route=route,
            rating=_text(row, COL_RATING),
            location=_text(row, COL_LOCATION),
            style=_text(row, COL_STYLE),
            lead_style=_text(row, COL_LEAD_STYLE),
            pitches=parse_int(row.get(COL_PITCHES)) or 1,
            length=length if length is not None else 0,
            stars=parse_int(row.get(COL_STARS)),
            notes=_text(row, COL_NOTES, strip=False),
            url=_text(row, COL_URL),
            route_type=_text(row, COL_ROUTE_TYPE),
        )

    @property
    def day(self) -> _date:
        """Calendar day of the climb."""
        return self.date.date()

    @property
    def location_parts(self) -> list[str]:
        if not self.location:
            return []
        return [part.strip() for part in self.location.split(LOCATION_SEPARATOR)]

    @property
    def area(self) -> Optional[str]:
        """Second location segment (the area), or None if the path is shorter."""
        parts = self.location_parts
        if len(parts) > 1 and parts[1]:
            return parts[1]
        return None

    @property
    def location_leaf(self) -> str:
        """Most specific location segment (usually the crag or wall)."""
        parts = self.location_parts
        return parts[-1] if parts else ''

    @property
    def grade(self) -> float:
        """Normalized grade value used for ranking and averaging."""
        return normalize(self.rating)

    @property
    def grade_token(self) -> str:
        """Rating text up to the first space, used for the grade distribution."""
        return grade_token(self.rating)
