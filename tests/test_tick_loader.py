"""
Tests for tick_loader module.
"""
from __future__ import annotations

import csv

import pytest
import requests

from climbing_wrapped import tick_loader
from climbing_wrapped.tick_loader import (
    TickLoadError,
    fetch_tick_text,
    ingest,
    load_ticks,
    parse_tick_csv,
    read_tick_rows,
)


class FakeResponse:
    """Minimal stand-in for requests.Response."""
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.content = text.encode('utf-8')
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


def make_response(body: bytes, content_type: str = 'text/csv') -> requests.Response:
    """A real requests.Response carrying `body`."""
    response = requests.Response()
    response.status_code = 200
    response.headers['Content-Type'] = content_type
    response._content = body
    return response


class TestParseTickCsv:
    """Tests for parse_tick_csv function."""

    def test_header_is_trimmed(self):
        rows = parse_tick_csv(" Date , Route \n2024-03-01,X\n")
        assert rows == [{'Date': '2024-03-01', 'Route': 'X'}]

    def test_empty_lines_skipped(self):
        rows = parse_tick_csv("Date,Route\n\n2024-03-01,X\n\n2024-03-02,Y\n")
        assert [r['Route'] for r in rows] == ['X', 'Y']

    def test_short_row_lacks_trailing_fields(self):
        rows = parse_tick_csv("Date,Route,Rating\n2024-03-01,X\n")
        assert rows == [{'Date': '2024-03-01', 'Route': 'X'}]

    def test_quoted_commas(self):
        rows = parse_tick_csv('Date,Route,Route Type\n2024-03-01,X,"Trad, Alpine"\n')
        assert rows[0]['Route Type'] == 'Trad, Alpine'

    def test_empty_text(self):
        assert parse_tick_csv("") == []

    def test_malformed_csv_raises(self, monkeypatch):
        class BrokenReader:
            line_num = 2

            def __iter__(self):
                raise csv.Error("unexpected end of data")

        def broken_reader(*args, **kwargs):
            return BrokenReader()

        monkeypatch.setattr(tick_loader.csv, "reader", broken_reader)

        with pytest.raises(TickLoadError):
            parse_tick_csv("Date,Route\n")


class TestFetch:
    """Tests for fetching ticks from files and URLs."""

    def test_read_file(self, sample_csv_file):
        rows = read_tick_rows(sample_csv_file)
        assert rows[0]['Route'] == 'Sun Dog'

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(TickLoadError):
            fetch_tick_text(tmp_path / "missing.csv")

    def test_fetch_url(self, monkeypatch, sample_csv_text):
        calls = []

        def fake_get(url, timeout=None):
            calls.append((url, timeout))
            return FakeResponse(sample_csv_text)

        monkeypatch.setattr(tick_loader.requests, "get", fake_get)

        rows = read_tick_rows("https://example.org/ticks.csv", timeout=5)

        assert calls == [("https://example.org/ticks.csv", 5)]
        assert rows[0]['Route'] == 'Sun Dog'

    def test_fetch_url_without_charset_is_utf8(self, monkeypatch):
        """Test that a text/csv response with no charset is decoded as UTF-8."""
        body = "\ufeffDate,Route,Notes\n2024-03-01,Café Crack,über\n"
        monkeypatch.setattr(tick_loader.requests, "get", lambda url, timeout=None: make_response(body.encode('utf-8')))

        rows = read_tick_rows("https://example.org/ticks.csv")

        assert rows == [{'Date': '2024-03-01', 'Route': 'Café Crack', 'Notes': 'über'}]

    def test_fetch_url_invalid_utf8_raises(self, monkeypatch):
        monkeypatch.setattr(tick_loader.requests, "get", lambda url, timeout=None: make_response(b"Date,Route\n2024-03-01,\xff\xfe\n"))

        with pytest.raises(TickLoadError):
            fetch_tick_text("https://example.org/ticks.csv")

    def test_http_error_raises(self, monkeypatch):
        monkeypatch.setattr(tick_loader.requests, "get", lambda url, timeout=None: FakeResponse("", 404))

        with pytest.raises(TickLoadError):
            fetch_tick_text("https://example.org/missing.csv")

    def test_connection_error_raises(self, monkeypatch):
        def fake_get(url, timeout=None):
            raise requests.ConnectionError("unreachable")

        monkeypatch.setattr(tick_loader.requests, "get", fake_get)

        with pytest.raises(TickLoadError):
            read_tick_rows("http://example.org/ticks.csv")


class TestIngest:
    """Tests for ingest function."""

    def test_malformed_row_dropped(self):
        rows = [
            {'Date': '2024-03-01', 'Route': 'X'},
            {'Date': '2024-03-02', 'Route': ''},
        ]
        result = ingest(rows, 2024)

        assert len(result.current_period) == 1
        assert len(result.prior_period) == 0
        assert result.skipped == 1

    def test_partition_by_year(self):
        rows = [
            {'Date': '2024-01-05', 'Route': 'A'},
            {'Date': '2023-12-31', 'Route': 'B'},
            {'Date': '2024-12-31', 'Route': 'C'},
            {'Date': '2023-01-01', 'Route': 'D'},
            {'Date': '2021-06-01', 'Route': 'E'},
        ]
        result = ingest(rows, 2024)

        current = [r.route for r in result.current_period]
        prior = [r.route for r in result.prior_period]
        assert current == ['A', 'C']
        assert prior == ['B', 'D']
        assert not set(current) & set(prior)

    def test_load_ticks(self, sample_csv_file):
        result = load_ticks(sample_csv_file, 2024)

        assert result.year == 2024
        assert len(result.current_period) == 4
        assert len(result.prior_period) == 2
        assert result.skipped == 2
