"""
Tests for statistics.comparison module.
"""
from __future__ import annotations

import math

import pytest

from climbing_wrapped.statistics.aggregate import aggregate
from climbing_wrapped.statistics.comparison import compare, percent_change


class TestPercentChange:
    """Tests for percent_change function."""

    def test_increase(self):
        assert percent_change(15, 10) == pytest.approx(50.0)

    def test_decrease(self):
        assert percent_change(5, 10) == pytest.approx(-50.0)

    def test_from_zero_is_inf(self):
        assert percent_change(3, 0) == math.inf

    def test_zero_to_zero_is_nan(self):
        assert math.isnan(percent_change(0, 0))


class TestCompare:
    """Tests for compare function."""

    def test_year_over_year(self, make_record):
        current = aggregate([
            make_record("2024-01-01", "A", location="X > A", pitches=2, length=100, rating="5.10a", style="Lead"),
            make_record("2024-01-02", "B", location="X > B", pitches=2, length=100, rating="5.10a", style="TR"),
        ])
        prior = aggregate([
            make_record("2023-01-01", "C", location="X > A", pitches=1, length=100, rating="5.9", style="Lead"),
        ])

        delta = compare(current, prior)

        assert delta.climbs_change == pytest.approx(100.0)
        assert delta.areas_change == pytest.approx(100.0)
        assert delta.pitches_change == pytest.approx(300.0)
        assert delta.length_change == pytest.approx(100.0)
        assert delta.grade_change == pytest.approx(1.0)
        assert delta.lead_percent_change == pytest.approx(-50.0)

    def test_empty_prior_year_propagates(self, make_record):
        delta = compare(aggregate([make_record()]), aggregate([]))

        assert delta.climbs_change == math.inf
        assert math.isnan(delta.grade_change)
        assert math.isnan(delta.lead_percent_change)

    def test_to_dict_keys(self):
        delta = compare(aggregate([]), aggregate([]))

        assert set(delta.to_dict()) == {
            'climbsChange', 'areasChange', 'pitchesChange',
            'lengthChange', 'gradeChange', 'leadPercentChange',
        }
