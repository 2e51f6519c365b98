"""Fill gaps in sparse, irregularly dated observations.

Charts and trends work on a dense daily series: one point per calendar
day between a start and end date. Days without a measurement are filled
by linear interpolation between the nearest observed days:

    value = prev + (days_since_prev / days_between) × (next - prev)

Days before the first or after the last observation in range take the
nearest observed value (flat extension). Every filled point is flagged
``is_interpolated`` so callers can tell measured days from estimated ones.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Optional

from fittrack.insights.models import NormalizedPoint, Observation


def date_range(start: date, end: date) -> list[date]:
    """Return every calendar day from start to end, inclusive."""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(max(days, 0))]


def interpolate(
    day: date,
    prev_day: date,
    prev_value: float,
    next_day: date,
    next_value: float,
) -> float:
    """
    Linearly interpolate a value for ``day`` between two observed days.

    Falls back to ``prev_value`` when both observations share a date.
    """
    total_days = (next_day - prev_day).days
    if total_days == 0:
        return prev_value
    ratio = (day - prev_day).days / total_days
    return prev_value + ratio * (next_value - prev_value)


def normalize_series(
    observations: Sequence[Observation],
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> list[NormalizedPoint]:
    """
    Build a gap-free daily series from sparse observations.

    Args:
        observations: Observations in any order. If two share a date, the
            later one in the sequence wins.
        start: First day of the series (default: earliest observation)
        end: Last day of the series (default: today)
        today: Reference date used when ``end`` is omitted

    Returns:
        One point per day from start to end, ascending. Only observations
        inside the range are used for filling; days with nothing observed
        on either side are omitted, so a range containing no observation
        yields an empty list.

    Example:
        >>> obs = [Observation(date(2024, 1, 1), 80), Observation(date(2024, 1, 5), 76)]
        >>> series = normalize_series(obs, end=date(2024, 1, 5))
        >>> series[2]
        NormalizedPoint(date=datetime.date(2024, 1, 3), value=78.0, is_interpolated=True)
    """
    if not observations:
        return []

    if start is None:
        start = min(obs.date for obs in observations)
    if end is None:
        end = today or date.today()

    by_day: dict[date, float] = {}
    for obs in observations:
        by_day[obs.date] = obs.value

    # Observed days inside the range, used to find neighbours
    known = sorted(day for day in by_day if start <= day <= end)

    series: list[NormalizedPoint] = []
    for day in date_range(start, end):
        if day in by_day:
            series.append(NormalizedPoint(day, by_day[day], is_interpolated=False))
            continue

        idx = bisect_left(known, day)
        prev_day = known[idx - 1] if idx > 0 else None
        next_day = known[idx] if idx < len(known) else None

        if prev_day is not None and next_day is not None:
            value = interpolate(day, prev_day, by_day[prev_day], next_day, by_day[next_day])
        elif prev_day is not None:
            value = by_day[prev_day]
        elif next_day is not None:
            value = by_day[next_day]
        else:
            # Nothing observed in range to anchor this day
            continue

        series.append(NormalizedPoint(day, value, is_interpolated=True))

    return series
