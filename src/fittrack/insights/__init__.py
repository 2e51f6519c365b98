"""Time-series insights for logged fitness metrics.

Raw observations are rolled up to one value per day, filled into a
gap-free daily series, and summarized with a two-point trend, a goal
forecast and a few headline statistics.

Key components:
- Daily rollups (sum for calories and food, latest value otherwise)
- Series normalization with linear interpolation and edge extension
- Two-point trend and goal forecast
- Fastest progress, logging streak and average
"""

from __future__ import annotations

from fittrack.insights.aggregate import aggregate_by_day, latest_by_day, rollup
from fittrack.insights.models import (
    ForecastResult,
    Metric,
    NormalizedPoint,
    Observation,
    TrendResult,
)
from fittrack.insights.normalize import normalize_series
from fittrack.insights.report import MetricInsights, build_metric_insights
from fittrack.insights.trend import calculate_forecast, calculate_trend

__all__ = [
    "ForecastResult",
    "Metric",
    "MetricInsights",
    "NormalizedPoint",
    "Observation",
    "TrendResult",
    "aggregate_by_day",
    "build_metric_insights",
    "calculate_forecast",
    "calculate_trend",
    "latest_by_day",
    "normalize_series",
    "rollup",
]
