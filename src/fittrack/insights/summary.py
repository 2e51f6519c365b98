"""Headline statistics shown next to a metric chart."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Optional

from fittrack.insights.models import Metric, NormalizedPoint

AVERAGE_TEMPLATES = {
    Metric.WEIGHT: "Average weight: {:.1f} kg",
    Metric.CALORIES: "Average daily burn: {:.0f} cal",
    Metric.FOOD: "Average daily intake: {:.0f} cal",
    Metric.STAMINA: "Average duration: {:.0f} min",
}


def _short_date(day: date) -> str:
    return f"{day:%b} {day.day}"


def largest_change(
    series: Sequence[NormalizedPoint], metric: Metric
) -> tuple[float, Optional[date]]:
    """
    Find the biggest day-over-day move in the metric's favourable direction.

    Changes are measured as ``previous - current``. For weight the largest
    drop wins; for every other metric the largest rise (most negative
    change) wins.

    Returns:
        (change, date) where date is the day the change landed on, or
        (0.0, None) if nothing moved in that direction
    """
    best = 0.0
    best_date: Optional[date] = None

    for prev, curr in zip(series, series[1:]):
        change = prev.value - curr.value
        if metric is Metric.WEIGHT:
            if change > best:
                best, best_date = change, curr.date
        elif change < best:
            best, best_date = change, curr.date

    return best, best_date


def fastest_progress(series: Sequence[NormalizedPoint], metric: Metric) -> str:
    """Describe the single best day of progress."""
    if len(series) < 2:
        return "Not enough data"

    change, day = largest_change(series, metric)
    if change == 0 or day is None:
        return "No significant change detected"

    direction = "loss" if metric is Metric.WEIGHT else "gain"
    return f"Highest {direction}: {abs(change):.1f} on {_short_date(day)}"


def streak_length(series: Sequence[NormalizedPoint]) -> int:
    """Return the longest run of consecutive observed (non-interpolated) days."""
    observed = [p.date for p in series if not p.is_interpolated]
    if not observed:
        return 0

    longest = current = 1
    for prev, curr in zip(observed, observed[1:]):
        if (curr - prev).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def longest_streak(series: Sequence[NormalizedPoint]) -> str:
    """Describe the longest logging streak."""
    if not series:
        return "No data yet"

    observed = [p for p in series if not p.is_interpolated]
    if len(observed) < 2:
        return "Log more data to see streaks"

    return f"Longest logging streak: {streak_length(series)} days"


def average_value(series: Sequence[NormalizedPoint]) -> Optional[float]:
    """Mean over every point of the series, interpolated ones included."""
    if not series:
        return None
    return sum(p.value for p in series) / len(series)


def describe_average(series: Sequence[NormalizedPoint], metric: Metric) -> str:
    average = average_value(series)
    if average is None:
        return "No data available"
    return AVERAGE_TEMPLATES[metric].format(average)
