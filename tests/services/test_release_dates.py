"""Tests for release date parsing and resolution."""

import logging
from datetime import datetime, timezone

import pytest

from telcoindex.services.trends import (
    estimate_release_date,
    parse_release_date,
    resolve_release_date,
)
from telcoindex.services.trends.release_dates import lookup_release_date


def _ms(year: int, month: int, day: int = 1, hour: int = 0) -> float:
    return datetime(year, month, day, hour, tzinfo=timezone.utc).timestamp() * 1000.0


class TestParseReleaseDate:
    @pytest.mark.parametrize(
        "value,expected",
        [
            pytest.param("2025-11-18", _ms(2025, 11, 18), id="date"),
            pytest.param("2025-11-18T12:00:00", _ms(2025, 11, 18, 12), id="naive-utc"),
            pytest.param("2025-11-18T12:00:00Z", _ms(2025, 11, 18, 12), id="zulu"),
            pytest.param("2025-11-18T14:00:00+02:00", _ms(2025, 11, 18, 12), id="offset"),
            pytest.param(" 2024-02-29 ", _ms(2024, 2, 29), id="whitespace"),
        ],
    )
    def test_valid(self, value: str, expected: float) -> None:
        assert parse_release_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "not-a-date", "2025-13-01"])
    def test_invalid(self, value) -> None:
        assert parse_release_date(value) is None


class TestLookupReleaseDate:
    def test_exact(self) -> None:
        assert lookup_release_date("gpt-4o") == _ms(2024, 5, 13)

    def test_case_insensitive(self) -> None:
        assert lookup_release_date("Claude-Opus-4.5") == _ms(2025, 11, 24)

    def test_unknown(self) -> None:
        assert lookup_release_date("house-model") is None


class TestEstimateReleaseDate:
    @pytest.mark.parametrize(
        "model,year",
        [
            pytest.param("acme-1", 2023, id="v1"),
            pytest.param("acme-3.1-70b", 2024, id="v3"),
            pytest.param("acme-4", 2025, id="v4"),
            pytest.param("acme-9", 2025, id="capped"),
        ],
    )
    def test_year_from_major_version(self, model: str, year: int) -> None:
        assert estimate_release_date(model) == _ms(year, 6, 1)

    def test_no_version_number(self) -> None:
        assert estimate_release_date("mystery-model") is None


class TestResolveReleaseDate:
    def test_explicit_wins(self, make_record) -> None:
        record = make_record("gpt-4o", {}, release_date="2024-06-01")

        assert resolve_release_date(record) == _ms(2024, 6, 1)

    def test_invalid_explicit_falls_back_to_curated(self, make_record) -> None:
        record = make_record("gpt-4o", {}, release_date="soon")

        assert resolve_release_date(record) == _ms(2024, 5, 13)

    def test_estimate_is_opt_in(self, make_record) -> None:
        record = make_record("acme-3", {})

        assert resolve_release_date(record) is None
        assert resolve_release_date(record, allow_estimate=True) == _ms(2024, 6, 1)

    def test_estimate_logged(self, make_record, caplog) -> None:
        record = make_record("acme-3", {})

        with caplog.at_level(logging.DEBUG, logger="telcoindex.services.trends"):
            resolve_release_date(record, allow_estimate=True)

        assert "approximate release date for acme-3" in caplog.text
