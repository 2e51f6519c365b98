"""Two-point trend and goal forecast for normalized series.

The trend is the average daily change between the first and last point
of a series:

    slope = (last - first) / days_between

Intermediate points do not affect the slope. The forecast
extrapolates the same slope from the latest value to a target:

    days_to_goal = ceil(|target - current| / |slope|)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Optional

from fittrack.insights.models import ForecastResult, NormalizedPoint, TrendResult

# Slopes at or below this magnitude (units/day) are treated as noise
TREND_THRESHOLD = 0.01

NO_TREND = "No clear trend yet"
NO_PROGRESS = "No clear progress toward goal"
NO_FORECAST = "No forecast available"


def format_forecast_date(day: date) -> str:
    """Format a date like 'January 7, 2024'."""
    return f"{day:%B} {day.day}, {day.year}"


def format_value(value: float) -> str:
    """Format a target in full, without a trailing '.0' for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def calculate_trend(series: Sequence[NormalizedPoint]) -> TrendResult:
    """
    Calculate the average daily change between first and last point.

    Args:
        series: Normalized series in chronological order

    Returns:
        TrendResult with slope (units/day) and a short description

    Example:
        >>> calculate_trend([
        ...     NormalizedPoint(date(2024, 1, 1), 80.0),
        ...     NormalizedPoint(date(2024, 1, 10), 71.0),
        ... ])
        TrendResult(slope=-1.0, description='losing 1.00 per day')
    """
    if len(series) < 2:
        return TrendResult(slope=0.0, description=NO_TREND)

    first = series[0]
    last = series[-1]
    days = (last.date - first.date).days
    if days == 0:
        return TrendResult(slope=0.0, description=NO_TREND)

    slope = (last.value - first.value) / days

    description = NO_TREND
    if abs(slope) > TREND_THRESHOLD:
        if slope < 0:
            description = f"losing {abs(slope):.2f} per day"
        else:
            description = f"gaining {slope:.2f} per day"

    return TrendResult(slope=slope, description=description)


def calculate_forecast(
    series: Sequence[NormalizedPoint],
    target: float,
    today: Optional[date] = None,
) -> ForecastResult:
    """
    Estimate when the current trend reaches a target value.

    No forecast is made when the slope is negligible or points away from
    the target. When the latest value already equals the target the
    forecast is for today.

    Args:
        series: Normalized series in chronological order
        target: Goal value (e.g., target weight)
        today: Date to project from (default: date.today())

    Returns:
        ForecastResult; ``forecast_date`` is None if no forecast
    """
    if not series:
        return ForecastResult(message=NO_FORECAST)

    slope = calculate_trend(series).slope
    current = series[-1].value

    if (
        abs(slope) < TREND_THRESHOLD
        or (target < current and slope >= 0)
        or (target > current and slope <= 0)
    ):
        return ForecastResult(message=NO_PROGRESS)

    days_to_goal = math.ceil(abs(target - current) / abs(slope))
    forecast_date = (today or date.today()) + timedelta(days=days_to_goal)

    return ForecastResult(
        message=(
            f"At this rate, you'll hit {format_value(target)} "
            f"by {format_forecast_date(forecast_date)}"
        ),
        forecast_date=forecast_date,
        days_to_goal=days_to_goal,
    )
