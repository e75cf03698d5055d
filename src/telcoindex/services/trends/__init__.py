"""Capability trends: regression, forecasting, release dates and frontiers."""

from telcoindex.services.trends.forecast import (
    Forecast,
    ForecastPoint,
    RegressionStats,
    generate_forecast,
    project_trend,
)
from telcoindex.services.trends.frontier import FrontierPoint, compute_frontier
from telcoindex.services.trends.regression import (
    BandPoint,
    RegressionFit,
    TimeSeriesPoint,
    capability_points,
    fit_linear_regression,
    generate_combined_bands,
    prediction_error_at,
    standard_error_at,
)
from telcoindex.services.trends.release_dates import (
    estimate_release_date,
    parse_release_date,
    resolve_release_date,
)

__all__ = [
    "BandPoint",
    "Forecast",
    "ForecastPoint",
    "FrontierPoint",
    "RegressionFit",
    "RegressionStats",
    "TimeSeriesPoint",
    "capability_points",
    "compute_frontier",
    "estimate_release_date",
    "fit_linear_regression",
    "generate_combined_bands",
    "generate_forecast",
    "parse_release_date",
    "prediction_error_at",
    "project_trend",
    "resolve_release_date",
    "standard_error_at",
]
