"""
Shared pytest fixtures for climbing_wrapped tests.
"""
from __future__ import annotations

import pytest

from climbing_wrapped.climb_record import ClimbRecord
from climbing_wrapped.climb_record import parse_tick_date

SAMPLE_CSV = (
    "Date,Route,Rating,Notes,URL,Pitches,Location,Avg Stars,Your Stars,Style,Lead Style,Route Type,Your Rating,Length,Rating Code\n"
    "2024-03-01,Sun Dog,5.10a,Fun warmup,https://example.org/1,1,Colorado > Boulder Canyon > Sport Park,3.0,3,Lead,Onsight,Sport,,80,2000\n"
    "2024-03-02,East Face,5.9+,,https://example.org/2,4,Colorado > Eldorado Canyon > Redgarden Wall,3.5,4,Lead,Redpoint,Trad,,400,1800\n"
    "2024-03-02,The Bomb,5.11b/c R,Took a whipper on the crux and hung for a while,,1,Colorado > Eldorado Canyon > Rincon,2.5,,Lead,Fell/Hung,\"Trad, Alpine\",,60,3000\n"
    "2024-06-15,Top Rope Classic,5.8,,,1,Colorado > Boulder Canyon > Animal World,2.0,-1,TR,,Sport,,70,1500\n"
    "2023-07-04,Old Favorite,5.10c,,,2,Utah > Little Cottonwood > Gate Buttress,3.0,2,Lead,Flash,Trad,,150,2600\n"
    "2023-08-10,Easy Day,5.7,,,1,Utah > Big Cottonwood > Storm Mountain,2.0,,Follow,,Trad,,90,1000\n"
    "2022-05-01,Ancient History,5.6,,,1,Colorado > Boulder Canyon > Sport Park,1.0,,Lead,Onsight,Sport,,50,900\n"
    ",,,,,,,,,,,,,,\n"
    "2024-04-01,,5.9,missing route,,1,Colorado > Boulder Canyon > Sport Park,,,Lead,,Sport,,60,1700\n"
)


@pytest.fixture
def make_record():
    """Create a ClimbRecord with sensible defaults for testing."""
    def _make_record(date: str = "2024-01-01", route: str = "Test Route", **kwargs) -> ClimbRecord:
        return ClimbRecord(date=parse_tick_date(date), route=route, **kwargs)

    return _make_record


@pytest.fixture
def sample_csv_text() -> str:
    """A small ticks export covering 2022-2024 plus blank and invalid rows."""
    return SAMPLE_CSV


@pytest.fixture
def sample_csv_file(tmp_path, sample_csv_text):
    """The sample ticks export written to a file."""
    path = tmp_path / "ticks.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path
