"""
Tests for statistics.aggregate module.
"""
from __future__ import annotations

import math

import pytest

from climbing_wrapped.statistics.aggregate import (
    aggregate,
    busiest_day,
    count_styles,
    favorite_routes,
    hardest_route,
    longest_route,
    ratio,
    route_with_longest_note,
    top_areas,
)


class TestRatio:
    """Tests for ratio function."""

    def test_normal_division(self):
        assert ratio(3, 4) == 0.75

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(ratio(0, 0))

    def test_positive_over_zero_is_inf(self):
        assert ratio(5, 0) == math.inf

    def test_negative_over_zero_is_negative_inf(self):
        assert ratio(-5, 0) == -math.inf


class TestAggregateEmpty:
    """Tests for aggregate with no records."""

    def test_empty_set(self):
        stats = aggregate([])

        assert stats.total_climbs == 0
        assert stats.hardest_grade == 0
        assert math.isnan(stats.average_grade)
        assert stats.longest_route is None
        assert stats.busiest_day == {'date': None, 'climbCount': 0}
        assert stats.favorite_routes == ()


class TestAggregate:
    """Tests for aggregate with records."""

    def test_counts(self, make_record):
        records = [
            make_record("2024-03-01", "A", location="CO > Boulder > Wall", pitches=3, length=300, rating="5.10a"),
            make_record("2024-03-01", "B", location="CO > Eldo > Bastille", pitches=1, length=100, rating="5.9"),
            make_record("2024-03-05", "A", location="CO > Boulder > Wall", pitches=1, length=50, rating="5.11a"),
        ]
        stats = aggregate(records)

        assert stats.total_climbs == 3
        assert stats.unique_routes == 2
        assert stats.unique_areas == 2
        assert stats.climbing_sessions == 2
        assert stats.total_pitches == 5
        assert stats.total_length == 450
        assert stats.multi_pitch_count == 1
        assert stats.hardest_grade == pytest.approx(11.0)
        assert stats.average_grade == pytest.approx(10.0)

    def test_grade_distribution_sums_to_total(self, make_record):
        records = [
            make_record(rating="5.10a R"),
            make_record(rating="5.10a"),
            make_record(rating=""),
            make_record(rating="V3"),
        ]
        stats = aggregate(records)

        assert stats.grade_distribution == {'5.10a': 2, 'Unknown': 1, 'V3': 1}
        assert sum(stats.grade_distribution.values()) == stats.total_climbs

    def test_period_styles_count_sport_as_top_rope(self, make_record):
        records = [
            make_record(style="TR"),
            make_record(style="Sport"),
            make_record(style="Lead"),
            make_record(style="Follow"),
        ]
        stats = aggregate(records)

        assert stats.styles == {'lead': 1, 'tr': 2, 'follow': 1}
        assert stats.send_types['topRope'] == 1

    def test_top_level_styles_count_exact_tr(self, make_record):
        records = [make_record(style="TR"), make_record(style="Sport")]
        assert count_styles(records) == {'lead': 0, 'tr': 1, 'follow': 0}

    def test_input_order_not_changed(self, make_record):
        records = [
            make_record("2024-05-01", "Late", stars=1),
            make_record("2024-01-01", "Early", stars=5),
        ]
        before = list(records)

        aggregate(records)

        assert records == before

    def test_year_dict_keys(self, make_record):
        year = aggregate([make_record()]).to_year_dict()

        assert list(year) == [
            'totalClimbs', 'uniqueRoutes', 'climbingSessions', 'topAreas', 'sendTypes',
            'uniqueAreas', 'totalPitches', 'totalLength', 'hardestGrade', 'styles', 'averageGrade',
        ]


class TestTopAreas:
    """Tests for top_areas function."""

    def test_ties_keep_first_seen(self, make_record):
        locations = ["X > A"] * 3 + ["X > C"] + ["X > B"] * 3
        records = [make_record(location=loc) for loc in locations]

        # C is seen before B but has fewer climbs
        assert top_areas(records, 2) == [
            {'area': 'A', 'count': 3},
            {'area': 'B', 'count': 3},
        ]

    def test_missing_area_is_unknown(self, make_record):
        records = [make_record(location=""), make_record(location="Colorado")]
        assert top_areas(records) == [{'area': 'Unknown', 'count': 2}]


class TestHighlights:
    """Tests for highlight helpers."""

    def test_longest_route_first_wins_ties(self, make_record):
        records = [make_record(route="First", length=100), make_record(route="Second", length=100)]
        assert longest_route(records).route == "First"

    def test_longest_route_none_without_lengths(self, make_record):
        assert longest_route([make_record(length=0)]) is None

    def test_hardest_route(self, make_record):
        records = [
            make_record(route="Easy", rating="5.8"),
            make_record(route="Hard", rating="5.12a"),
            make_record(route="Also Hard", rating="5.12a"),
        ]
        assert hardest_route(records).route == "Hard"

    def test_busiest_day(self, make_record):
        records = [
            make_record("2024-02-01"),
            make_record("2024-02-03"),
            make_record("2024-02-03"),
        ]
        assert busiest_day(records) == {'date': '2024-02-03', 'climbCount': 2}

    def test_busiest_day_first_wins_ties(self, make_record):
        records = [
            make_record("2024-02-05"),
            make_record("2024-02-01"),
            make_record("2024-02-05"),
            make_record("2024-02-01"),
        ]
        assert busiest_day(records) == {'date': '2024-02-05', 'climbCount': 2}

    def test_route_with_longest_note(self, make_record):
        records = [
            make_record(route="Short", notes="ok"),
            make_record(route="First Long", notes="pumped out"),
            make_record(route="Second Long", notes="sandbagged"),
        ]
        assert route_with_longest_note(records).route == "First Long"

    def test_route_with_longest_note_none_without_notes(self, make_record):
        assert route_with_longest_note([make_record(), make_record()]) is None

    def test_favorite_routes(self, make_record):
        records = [
            make_record(route="Meh", stars=0),
            make_record(route="Good", stars=2, location="A > B > Crag One"),
            make_record(route="Best", stars=4, rating="5.10b"),
            make_record(route="Also Good", stars=2),
            make_record(route="Bad", stars=-1),
            make_record(route="Unrated"),
        ]
        favorites = favorite_routes(records)

        assert [f['name'] for f in favorites] == ["Best", "Good", "Also Good"]
        assert favorites[0] == {'name': 'Best', 'grade': '5.10b', 'stars': 4, 'location': '', 'url': ''}
        assert favorites[1]['location'] == 'Crag One'

    def test_favorite_routes_limit(self, make_record):
        records = [make_record(route=f"R{i}", stars=1) for i in range(8)]
        assert len(favorite_routes(records)) == 5
