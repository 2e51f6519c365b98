"""Per-metric insights: rollup, normalization, trend, forecast and stats."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Optional

from fittrack.insights.aggregate import rollup
from fittrack.insights.models import (
    ForecastResult,
    Metric,
    NormalizedPoint,
    Observation,
    TrendResult,
)
from fittrack.insights.normalize import normalize_series
from fittrack.insights.summary import (
    average_value,
    describe_average,
    fastest_progress,
    longest_streak,
    streak_length,
)
from fittrack.insights.trend import (
    NO_FORECAST,
    calculate_forecast,
    calculate_trend,
    format_value,
)

logger = logging.getLogger(__name__)

NO_DATA = "No data available"


@dataclass
class MetricInsights:
    """Everything the insights view shows for one metric."""

    metric: Metric
    series: list[NormalizedPoint]
    trend: TrendResult
    forecast: ForecastResult
    target: Optional[float]
    fastest_progress: str
    longest_streak: str
    average: str

    @property
    def is_empty(self) -> bool:
        return not self.series

    @property
    def current_value(self) -> Optional[float]:
        return self.series[-1].value if self.series else None

    @property
    def observed_days(self) -> int:
        return sum(1 for p in self.series if not p.is_interpolated)


def build_metric_insights(
    metric: Metric,
    observations: Iterable[Observation],
    target: Optional[float] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> MetricInsights:
    """
    Run the full insights pipeline for one metric.

    Args:
        metric: Metric the observations belong to
        observations: Raw log entries, possibly several per day
        target: Goal value; forecasting is skipped when None
        start: First day of the series (default: earliest observation)
        end: Last day of the series (default: today)
        today: Reference date for the default end and the forecast

    Returns:
        MetricInsights with the daily series and derived results
    """
    today = today or date.today()
    daily = rollup(metric, observations)
    series = normalize_series(daily, start=start, end=end, today=today)

    logger.debug(
        "%s: %d daily observations -> %d series points",
        metric.value,
        len(daily),
        len(series),
    )

    if series:
        trend = calculate_trend(series)
    else:
        trend = TrendResult(slope=0.0, description=NO_DATA)

    if series and target is not None:
        forecast = calculate_forecast(series, target, today=today)
    else:
        forecast = ForecastResult(message=NO_FORECAST)

    return MetricInsights(
        metric=metric,
        series=series,
        trend=trend,
        forecast=forecast,
        target=target,
        fastest_progress=fastest_progress(series, metric),
        longest_streak=longest_streak(series),
        average=describe_average(series, metric),
    )


def insights_to_dict(insights: MetricInsights, include_series: bool = False) -> dict:
    """Convert MetricInsights to dict for JSON output."""
    data = {
        "metric": insights.metric.value,
        "unit": insights.metric.unit,
        "points": len(insights.series),
        "observed_days": insights.observed_days,
        "current_value": insights.current_value,
        "trend": {
            "slope_per_day": insights.trend.slope,
            "description": insights.trend.description,
        },
        "forecast": {
            "target": insights.target,
            "message": insights.forecast.message,
            "date": (
                insights.forecast.forecast_date.isoformat()
                if insights.forecast.forecast_date
                else None
            ),
            "days_to_goal": insights.forecast.days_to_goal,
        },
        "stats": {
            "fastest_progress": insights.fastest_progress,
            "longest_streak": insights.longest_streak,
            "longest_streak_days": streak_length(insights.series),
            "average": average_value(insights.series),
            "average_text": insights.average,
        },
    }

    if insights.series:
        data["start_date"] = insights.series[0].date.isoformat()
        data["end_date"] = insights.series[-1].date.isoformat()

    if include_series:
        data["series"] = [
            {
                "date": p.date.isoformat(),
                "value": p.value,
                "is_interpolated": p.is_interpolated,
            }
            for p in insights.series
        ]

    return data


def format_insights(insights: MetricInsights) -> str:
    """Format insights as text."""
    metric = insights.metric
    title = f"{metric.label} Insights"
    lines = [title, "=" * len(title)]

    if insights.is_empty:
        lines.append(NO_DATA)
        return "\n".join(lines)

    first = insights.series[0].date
    last = insights.series[-1].date
    lines.extend([
        f"Period:   {first.isoformat()} to {last.isoformat()} "
        f"({insights.observed_days} of {len(insights.series)} days logged)",
        f"Current:  {insights.current_value:.1f} {metric.unit}",
        f"Trend:    {insights.trend.description}",
    ])

    if insights.target is not None:
        lines.append(f"Goal:     {format_value(insights.target)} {metric.unit}")
        lines.append(f"Forecast: {insights.forecast.message}")

    lines.extend([
        "",
        insights.fastest_progress,
        insights.longest_streak,
        insights.average,
    ])

    return "\n".join(lines)
