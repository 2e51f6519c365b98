"""Daily rollups for metrics recorded more than once per day."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from fittrack.insights.models import Metric, Observation


def aggregate_by_day(observations: Iterable[Observation]) -> list[Observation]:
    """
    Collapse same-day observations into one observation per day by summing.

    Only days present in the input appear in the output, which is sorted
    by date. Used for metrics like calories where each activity or meal
    is logged separately.

    Example:
        >>> d = date(2024, 1, 1)
        >>> aggregate_by_day([Observation(d, 200), Observation(d, 150)])
        [Observation(date=datetime.date(2024, 1, 1), value=350.0)]
    """
    totals: dict[date, float] = defaultdict(float)
    for obs in observations:
        totals[obs.date] += obs.value

    return [Observation(day, total) for day, total in sorted(totals.items())]


def latest_by_day(observations: Iterable[Observation]) -> list[Observation]:
    """Keep the last observation seen for each day, sorted by date."""
    latest: dict[date, Observation] = {}
    for obs in observations:
        latest[obs.date] = obs

    return [latest[day] for day in sorted(latest)]


def rollup(metric: Metric, observations: Iterable[Observation]) -> list[Observation]:
    """Reduce raw observations to one per day using the metric's rule."""
    if metric.sums_daily:
        return aggregate_by_day(observations)
    return latest_by_day(observations)
