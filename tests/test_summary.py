"""Tests for headline series statistics."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from fittrack.insights.models import Metric, NormalizedPoint
from fittrack.insights.summary import (
    average_value,
    describe_average,
    fastest_progress,
    largest_change,
    longest_streak,
    streak_length,
)

START = date(2024, 1, 1)


def _series(*values: float, interpolated: tuple[int, ...] = ()) -> list[NormalizedPoint]:
    return [
        NormalizedPoint(START + timedelta(days=i), v, is_interpolated=i in interpolated)
        for i, v in enumerate(values)
    ]


class TestFastestProgress:
    """Tests for fastest_progress and largest_change."""

    def test_not_enough_data(self) -> None:
        assert fastest_progress(_series(80), Metric.WEIGHT) == "Not enough data"
        assert fastest_progress([], Metric.CALORIES) == "Not enough data"

    def test_weight_biggest_drop(self) -> None:
        series = _series(80, 79.5, 78.0, 78.2)
        change, day = largest_change(series, Metric.WEIGHT)
        assert change == pytest.approx(1.5)
        assert day == date(2024, 1, 3)
        assert fastest_progress(series, Metric.WEIGHT) == "Highest loss: 1.5 on Jan 3"

    def test_other_metrics_biggest_rise(self) -> None:
        series = _series(300, 500, 450, 900)
        change, day = largest_change(series, Metric.CALORIES)
        assert change == pytest.approx(-450)
        assert day == date(2024, 1, 4)
        assert fastest_progress(series, Metric.CALORIES) == "Highest gain: 450.0 on Jan 4"

    def test_weight_only_gaining(self) -> None:
        """Weight that never drops shows no progress."""
        series = _series(70, 71, 72)
        assert fastest_progress(series, Metric.WEIGHT) == "No significant change detected"

    def test_stamina_only_falling(self) -> None:
        series = _series(40, 30, 20)
        assert fastest_progress(series, Metric.STAMINA) == "No significant change detected"


class TestLongestStreak:
    """Tests for longest_streak and streak_length."""

    def test_empty(self) -> None:
        assert longest_streak([]) == "No data yet"
        assert streak_length([]) == 0

    def test_needs_two_observed_days(self) -> None:
        series = _series(80, 80, 80, interpolated=(1, 2))
        assert longest_streak(series) == "Log more data to see streaks"

    def test_counts_consecutive_observed_days(self) -> None:
        # Observed: days 0,1,2 then gap (3,4 interpolated), then 5,6
        series = _series(80, 79, 78, 78, 78, 77, 76, interpolated=(3, 4))
        assert streak_length(series) == 3
        assert longest_streak(series) == "Longest logging streak: 3 days"

    def test_no_consecutive_days(self) -> None:
        series = _series(80, 79, 78, interpolated=(1,))
        assert streak_length(series) == 1
        assert longest_streak(series) == "Longest logging streak: 1 days"


class TestAverage:
    """Tests for average_value and describe_average."""

    def test_empty(self) -> None:
        assert average_value([]) is None
        assert describe_average([], Metric.WEIGHT) == "No data available"

    def test_includes_interpolated_points(self) -> None:
        series = _series(80, 78, 76, interpolated=(1,))
        assert average_value(series) == pytest.approx(78)

    @pytest.mark.parametrize(
        "metric, expected",
        [
            (Metric.WEIGHT, "Average weight: 75.3 kg"),
            (Metric.CALORIES, "Average daily burn: 75 cal"),
            (Metric.FOOD, "Average daily intake: 75 cal"),
            (Metric.STAMINA, "Average duration: 75 min"),
        ],
    )
    def test_metric_text(self, metric: Metric, expected: str) -> None:
        series = _series(75.0, 75.6)
        assert describe_average(series, metric) == expected
