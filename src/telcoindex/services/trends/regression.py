"""Ordinary least squares fit of capability score against release time.

Confidence bands use the standard error of the mean prediction; prediction
bands add the variance of an individual observation (the ``1 +`` term), so
they are always at least as wide. Both narrow near the mean x and widen away
from it.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from telcoindex.services.config import TCISettings
from telcoindex.services.leaderboard.client import BenchmarkRecord, ModelKey
from telcoindex.services.tci.scorer import CompositeScore, composite_value
from telcoindex.services.trends.release_dates import resolve_release_date


@dataclass(frozen=True, slots=True)
class TimeSeriesPoint:
    timestamp: float
    score: float


@dataclass(frozen=True, slots=True)
class RegressionFit:
    """Fitted line ``y = slope * x + intercept`` and its R²."""

    slope: float
    intercept: float
    r_squared: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True, slots=True)
class BandPoint:
    timestamp: float
    value: float
    lower: float
    upper: float
    lower_pred: float
    upper_pred: float


@dataclass(frozen=True, slots=True)
class ResidualSpread:
    """Quantities shared by every interval evaluation."""

    n: int
    x_mean: float
    ss_x: float
    residual_std: float

    def standard_error(self, x: float) -> float:
        return self.residual_std * math.sqrt(1 / self.n + (x - self.x_mean) ** 2 / self.ss_x)

    def prediction_error(self, x: float) -> float:
        return self.residual_std * math.sqrt(
            1 + 1 / self.n + (x - self.x_mean) ** 2 / self.ss_x
        )


def _arrays(points: Sequence[TimeSeriesPoint]) -> tuple[np.ndarray, np.ndarray]:
    x = np.array([p.timestamp for p in points], dtype=float)
    y = np.array([p.score for p in points], dtype=float)
    return x, y


def fit_linear_regression(points: Sequence[TimeSeriesPoint]) -> RegressionFit | None:
    """Least-squares line through the points.

    Returns None with fewer than 2 points or when every timestamp is equal.
    """
    if len(points) < 2:
        return None

    x, y = _arrays(points)
    if np.all(x == x[0]):
        return None

    x_dev = x - x.mean()
    y_dev = y - y.mean()
    denominator = float(np.sum(x_dev * x_dev))
    if denominator == 0.0:
        return None

    slope = float(np.sum(x_dev * y_dev)) / denominator
    intercept = float(y.mean()) - slope * float(x.mean())

    ss_total = float(np.sum(y_dev * y_dev))
    residuals = y - (slope * x + intercept)
    ss_residual = float(np.sum(residuals * residuals))
    r_squared = 1.0 if ss_total == 0.0 else 1.0 - ss_residual / ss_total

    return RegressionFit(slope=slope, intercept=intercept, r_squared=r_squared)


def residual_spread(
    points: Sequence[TimeSeriesPoint], fit: RegressionFit
) -> ResidualSpread | None:
    """Residual statistics, or None when intervals are undefined (n < 3)."""
    n = len(points)
    if n < 3:
        return None

    x, y = _arrays(points)
    x_mean = float(x.mean())
    ss_x = float(np.sum((x - x_mean) ** 2))
    if ss_x == 0.0:
        return None

    residuals = y - (fit.slope * x + fit.intercept)
    ss_residual = float(np.sum(residuals * residuals))
    return ResidualSpread(
        n=n,
        x_mean=x_mean,
        ss_x=ss_x,
        residual_std=math.sqrt(ss_residual / (n - 2)),
    )


def standard_error_at(
    x: float, points: Sequence[TimeSeriesPoint], fit: RegressionFit
) -> float:
    """Standard error of the mean prediction at x (0 when undefined)."""
    spread = residual_spread(points, fit)
    return spread.standard_error(x) if spread else 0.0


def prediction_error_at(
    x: float, points: Sequence[TimeSeriesPoint], fit: RegressionFit
) -> float:
    """Standard error of an individual prediction at x (0 when undefined)."""
    spread = residual_spread(points, fit)
    return spread.prediction_error(x) if spread else 0.0


def band_point(
    x: float,
    fit: RegressionFit,
    spread: ResidualSpread,
    z_score: float,
) -> BandPoint:
    y = fit.predict(x)
    margin = z_score * spread.standard_error(x)
    pred_margin = z_score * spread.prediction_error(x)
    return BandPoint(
        timestamp=x,
        value=y,
        lower=y - margin,
        upper=y + margin,
        lower_pred=y - pred_margin,
        upper_pred=y + pred_margin,
    )


def generate_combined_bands(
    points: Sequence[TimeSeriesPoint],
    fit: RegressionFit,
    x_min: float,
    x_max: float,
    num_points: int = 50,
    settings: TCISettings | None = None,
) -> list[BandPoint]:
    """Evenly spaced points carrying both confidence and prediction bounds.

    Margins use ``settings.z_score``.
    """
    settings = settings or TCISettings()
    spread = residual_spread(points, fit)
    if spread is None or num_points < 1:
        return []

    step = (x_max - x_min) / (num_points - 1) if num_points > 1 else 0.0
    return [band_point(x_min + i * step, fit, spread, settings.z_score) for i in range(num_points)]


def capability_points(
    records: Sequence[BenchmarkRecord],
    composites: Mapping[ModelKey, CompositeScore],
    allow_estimate: bool = False,
) -> list[TimeSeriesPoint]:
    """(release date, composite) pairs for scored records with a known date."""
    points = []
    for record in records:
        composite = composites.get(record.key)
        value = composite_value(composite) if composite is not None else None
        if value is None:
            continue
        timestamp = resolve_release_date(record, allow_estimate)
        if timestamp is None:
            continue
        points.append(TimeSeriesPoint(timestamp=timestamp, score=value))
    return points
