"""Tests for the historical band plus forward projection series."""

from datetime import datetime, timezone

import pytest

from telcoindex.services.config import TCISettings
from telcoindex.services.trends import (
    RegressionStats,
    TimeSeriesPoint,
    fit_linear_regression,
    generate_forecast,
    project_trend,
)
from telcoindex.services.trends.forecast import MS_PER_DAY, MS_PER_YEAR

START = datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp() * 1000.0


@pytest.fixture
def linear_points() -> list[TimeSeriesPoint]:
    """Exactly 10 points of growth per year, one release per quarter."""
    return [
        TimeSeriesPoint(
            timestamp=START + k * MS_PER_YEAR / 4,
            score=100 + 10 * k / 4,
        )
        for k in range(6)
    ]


@pytest.fixture
def noisy_points() -> list[TimeSeriesPoint]:
    offsets = [0, 60, 130, 200, 290, 400]
    scores = [101.0, 104.5, 103.0, 108.0, 107.5, 112.0]
    return [
        TimeSeriesPoint(timestamp=START + days * MS_PER_DAY, score=score)
        for days, score in zip(offsets, scores)
    ]


class TestGenerateForecast:
    def test_segment_sizes_and_flags(self, noisy_points) -> None:
        forecast = generate_forecast(noisy_points, fit_linear_regression(noisy_points))

        historical = [p for p in forecast.points if not p.is_forecast]
        projected = [p for p in forecast.points if p.is_forecast]
        assert len(historical) == 50
        assert len(projected) == 31
        assert forecast.points == historical + projected

    def test_segment_boundaries(self, noisy_points) -> None:
        forecast = generate_forecast(noisy_points, fit_linear_regression(noisy_points))
        last = noisy_points[-1].timestamp

        historical = [p for p in forecast.points if not p.is_forecast]
        projected = [p for p in forecast.points if p.is_forecast]
        assert historical[0].timestamp == noisy_points[0].timestamp
        assert historical[-1].timestamp == pytest.approx(last)
        assert projected[0].timestamp == last
        assert projected[-1].timestamp == pytest.approx(last + 12 * 30 * MS_PER_DAY)
        assert all(p.timestamp > last for p in projected[1:])

    def test_forecast_carries_prediction_band(self, noisy_points) -> None:
        forecast = generate_forecast(noisy_points, fit_linear_regression(noisy_points))

        for point in forecast.points:
            if point.is_forecast:
                assert point.lower == point.lower_pred
                assert point.upper == point.upper_pred
            else:
                assert point.lower_pred <= point.lower <= point.value <= point.upper

    def test_forecast_band_widens(self, noisy_points) -> None:
        forecast = generate_forecast(noisy_points, fit_linear_regression(noisy_points))

        widths = [p.upper - p.lower for p in forecast.points if p.is_forecast]
        assert widths == sorted(widths)
        assert widths[-1] > widths[0]

    def test_stats(self, linear_points) -> None:
        fit = fit_linear_regression(linear_points)

        stats = generate_forecast(linear_points, fit).stats

        last = linear_points[-1].timestamp
        assert stats.r_squared == pytest.approx(1.0)
        assert stats.growth_per_year == pytest.approx(10.0)
        assert stats.growth_per_year == pytest.approx(fit.slope * MS_PER_YEAR)
        assert stats.current_value == pytest.approx(112.5)
        assert stats.projected_value == pytest.approx(112.5 + 10.0 * 360 / 365)
        assert stats.last_data_date == last
        assert stats.forecast_end_date == last + 360 * MS_PER_DAY

    def test_custom_horizon(self, noisy_points) -> None:
        fit = fit_linear_regression(noisy_points)

        forecast = generate_forecast(noisy_points, fit, forecast_months=6)

        last = noisy_points[-1].timestamp
        assert forecast.stats.forecast_end_date == last + 180 * MS_PER_DAY

    def test_custom_point_counts(self, noisy_points) -> None:
        settings = TCISettings(historical_points=10, forecast_points=5)

        forecast = generate_forecast(
            noisy_points, fit_linear_regression(noisy_points), settings
        )

        assert len(forecast.points) == 10 + 6

    @pytest.mark.parametrize("n", [0, 1, 2])
    def test_too_few_points(self, noisy_points, n: int) -> None:
        points = noisy_points[:n]

        forecast = generate_forecast(points, fit_linear_regression(points))

        assert forecast.is_empty
        assert forecast.stats == RegressionStats()

    def test_no_fit(self, noisy_points) -> None:
        assert generate_forecast(noisy_points, None).is_empty


class TestProjectTrend:
    def test_returns_fit_and_forecast(self, noisy_points) -> None:
        fit, forecast = project_trend(noisy_points)

        assert fit is not None
        assert fit.slope > 0
        assert not forecast.is_empty

    def test_single_point(self, noisy_points) -> None:
        fit, forecast = project_trend(noisy_points[:1])

        assert fit is None
        assert forecast.is_empty
