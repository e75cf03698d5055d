"""Capability forecast: historical trend band plus forward projection.

The historical segment spans the observed release dates and carries the
narrower confidence band. The forecast segment continues from the last
release date for ``months * 30`` days and carries the prediction band, which
keeps widening as it moves away from the data.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from telcoindex.services.config import TCISettings
from telcoindex.services.trends.regression import (
    RegressionFit,
    TimeSeriesPoint,
    band_point,
    fit_linear_regression,
    residual_spread,
)

MS_PER_DAY = 24 * 60 * 60 * 1000
MS_PER_YEAR = 365 * MS_PER_DAY
DAYS_PER_MONTH = 30


@dataclass(frozen=True, slots=True)
class ForecastPoint:
    timestamp: float
    value: float
    lower: float
    upper: float
    lower_pred: float
    upper_pred: float
    is_forecast: bool


@dataclass(frozen=True, slots=True)
class RegressionStats:
    r_squared: float = 0.0
    growth_per_year: float = 0.0
    current_value: float = 0.0
    projected_value: float = 0.0
    last_data_date: float = 0.0
    forecast_end_date: float = 0.0


@dataclass(frozen=True)
class Forecast:
    points: list[ForecastPoint] = field(default_factory=list)
    stats: RegressionStats = field(default_factory=RegressionStats)

    @property
    def is_empty(self) -> bool:
        return not self.points


def generate_forecast(
    points: Sequence[TimeSeriesPoint],
    fit: RegressionFit | None,
    settings: TCISettings | None = None,
    forecast_months: int | None = None,
) -> Forecast:
    """Stitch the historical and forecast segments into one series.

    Fewer than 3 points (or no fit) yields an empty series with zeroed stats.
    """
    settings = settings or TCISettings()
    months = settings.forecast_months if forecast_months is None else forecast_months

    if fit is None or len(points) < 3:
        return Forecast()
    spread = residual_spread(points, fit)
    if spread is None:
        return Forecast()

    timestamps = [p.timestamp for p in points]
    min_date = min(timestamps)
    last_data_date = max(timestamps)
    forecast_end_date = last_data_date + months * DAYS_PER_MONTH * MS_PER_DAY
    z = settings.z_score

    series: list[ForecastPoint] = []

    n_hist = settings.historical_points
    hist_step = (last_data_date - min_date) / (n_hist - 1) if n_hist > 1 else 0.0
    for i in range(n_hist):
        band = band_point(min_date + i * hist_step, fit, spread, z)
        series.append(
            ForecastPoint(
                timestamp=band.timestamp,
                value=band.value,
                lower=band.lower,
                upper=band.upper,
                lower_pred=band.lower_pred,
                upper_pred=band.upper_pred,
                is_forecast=False,
            )
        )

    n_forecast = settings.forecast_points
    forecast_step = (
        (forecast_end_date - last_data_date) / n_forecast if n_forecast > 0 else 0.0
    )
    for i in range(n_forecast + 1):
        band = band_point(last_data_date + i * forecast_step, fit, spread, z)
        # Forecast points carry the prediction band as their only band
        series.append(
            ForecastPoint(
                timestamp=band.timestamp,
                value=band.value,
                lower=band.lower_pred,
                upper=band.upper_pred,
                lower_pred=band.lower_pred,
                upper_pred=band.upper_pred,
                is_forecast=True,
            )
        )

    stats = RegressionStats(
        r_squared=fit.r_squared,
        growth_per_year=fit.slope * MS_PER_YEAR,
        current_value=fit.predict(last_data_date),
        projected_value=fit.predict(forecast_end_date),
        last_data_date=last_data_date,
        forecast_end_date=forecast_end_date,
    )
    return Forecast(points=series, stats=stats)


def project_trend(
    points: Sequence[TimeSeriesPoint],
    settings: TCISettings | None = None,
    forecast_months: int | None = None,
) -> tuple[RegressionFit | None, Forecast]:
    """Fit the trend line and build its forecast in one call."""
    fit = fit_linear_regression(points)
    return fit, generate_forecast(points, fit, settings, forecast_months)
