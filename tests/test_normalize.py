"""Tests for daily series normalization."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from fittrack.insights.models import NormalizedPoint, Observation
from fittrack.insights.normalize import date_range, interpolate, normalize_series


def _obs(day: int, value: float) -> Observation:
    return Observation(date(2024, 1, day), value)


class TestDateRange:
    """Tests for date_range function."""

    def test_inclusive(self) -> None:
        """Both endpoints should be included."""
        days = date_range(date(2024, 1, 30), date(2024, 2, 2))
        assert days == [
            date(2024, 1, 30),
            date(2024, 1, 31),
            date(2024, 2, 1),
            date(2024, 2, 2),
        ]

    def test_single_day(self) -> None:
        assert date_range(date(2024, 1, 1), date(2024, 1, 1)) == [date(2024, 1, 1)]

    def test_end_before_start_is_empty(self) -> None:
        assert date_range(date(2024, 1, 5), date(2024, 1, 1)) == []


class TestInterpolate:
    """Tests for interpolate function."""

    def test_midpoint(self) -> None:
        value = interpolate(date(2024, 1, 3), date(2024, 1, 1), 80.0, date(2024, 1, 5), 76.0)
        assert value == pytest.approx(78.0)

    def test_quarter_point(self) -> None:
        value = interpolate(date(2024, 1, 2), date(2024, 1, 1), 80.0, date(2024, 1, 5), 76.0)
        assert value == pytest.approx(79.0)

    def test_zero_span_falls_back_to_previous(self) -> None:
        """Same-day neighbours should not divide by zero."""
        day = date(2024, 1, 1)
        assert interpolate(day, day, 80.0, day, 90.0) == 80.0


class TestNormalizeSeries:
    """Tests for normalize_series function."""

    def test_empty_input(self) -> None:
        """No observations means an empty series, not an error."""
        assert normalize_series([]) == []

    def test_midpoint_interpolation(self) -> None:
        """80 on Jan 1 and 76 on Jan 5 gives 78 on Jan 3."""
        series = normalize_series([_obs(1, 80), _obs(5, 76)], end=date(2024, 1, 5))

        assert len(series) == 5
        assert series[2] == NormalizedPoint(date(2024, 1, 3), 78.0, is_interpolated=True)
        assert [p.value for p in series] == pytest.approx([80, 79, 78, 77, 76])

    def test_flat_forward_extension(self) -> None:
        """Days after the last observation carry its value forward."""
        series = normalize_series([_obs(1, 80)], end=date(2024, 1, 3))

        assert len(series) == 3
        assert series[0] == NormalizedPoint(date(2024, 1, 1), 80, is_interpolated=False)
        assert series[1] == NormalizedPoint(date(2024, 1, 2), 80, is_interpolated=True)
        assert series[2] == NormalizedPoint(date(2024, 1, 3), 80, is_interpolated=True)

    def test_flat_backward_extension(self) -> None:
        """Days before the first observation take its value."""
        series = normalize_series(
            [_obs(3, 75)], start=date(2024, 1, 1), end=date(2024, 1, 3)
        )

        assert [p.value for p in series] == [75, 75, 75]
        assert [p.is_interpolated for p in series] == [True, True, False]

    def test_observed_values_are_exact(self) -> None:
        """Observed days keep the source value and are not flagged."""
        obs = [_obs(1, 80.123), _obs(4, 79.456), _obs(9, 77.001)]
        series = normalize_series(obs, end=date(2024, 1, 9))
        by_day = {p.date: p for p in series}

        for o in obs:
            assert by_day[o.date].value == o.value
            assert by_day[o.date].is_interpolated is False

    def test_one_point_per_day_no_gaps(self) -> None:
        """Output covers every day in range once, in order."""
        obs = [_obs(10, 70), _obs(2, 72), _obs(20, 69)]
        series = normalize_series(obs, end=date(2024, 1, 25))

        dates = [p.date for p in series]
        assert dates[0] == date(2024, 1, 2)
        assert dates[-1] == date(2024, 1, 25)
        assert len(dates) == len(set(dates)) == 24
        for prev, curr in zip(dates, dates[1:]):
            assert curr - prev == timedelta(days=1)

    def test_interpolated_values_between_neighbours(self) -> None:
        """Filled points lie between the surrounding observed values."""
        series = normalize_series([_obs(1, 60), _obs(8, 74)], end=date(2024, 1, 8))

        for point in series[1:-1]:
            assert point.is_interpolated
            assert 60 <= point.value <= 74
            days = (point.date - date(2024, 1, 1)).days
            assert point.value == pytest.approx(60 + days / 7 * 14)

    def test_default_start_is_earliest_observation(self) -> None:
        """Unordered input still starts at the earliest date."""
        series = normalize_series([_obs(5, 76), _obs(2, 79)], end=date(2024, 1, 5))
        assert series[0].date == date(2024, 1, 2)
        assert len(series) == 4

    def test_default_end_is_today(self) -> None:
        series = normalize_series([_obs(1, 80)], today=date(2024, 1, 10))
        assert series[-1].date == date(2024, 1, 10)
        assert len(series) == 10

    def test_duplicate_dates_last_wins(self) -> None:
        series = normalize_series([_obs(1, 80), _obs(1, 81)], end=date(2024, 1, 1))
        assert series == [NormalizedPoint(date(2024, 1, 1), 81, is_interpolated=False)]

    def test_datetime_observations_use_calendar_day(self) -> None:
        obs = [Observation(datetime(2024, 1, 1, 7, 30), 80)]
        series = normalize_series(obs, end=date(2024, 1, 2))
        assert [p.date for p in series] == [date(2024, 1, 1), date(2024, 1, 2)]

    def test_observations_outside_range_ignored(self) -> None:
        """Only in-range observations anchor filled days."""
        obs = [_obs(1, 90), _obs(5, 80)]
        series = normalize_series(obs, start=date(2024, 1, 3), end=date(2024, 1, 6))

        assert [p.date for p in series] == [
            date(2024, 1, 3),
            date(2024, 1, 4),
            date(2024, 1, 5),
            date(2024, 1, 6),
        ]
        # Backward extension from Jan 5, not interpolation from Jan 1
        assert series[0].value == 80
        assert series[1].value == 80

    def test_range_without_observations_is_empty(self) -> None:
        """Days with nothing on either side are omitted."""
        series = normalize_series(
            [_obs(1, 80)], start=date(2024, 2, 1), end=date(2024, 2, 5)
        )
        assert series == []

    def test_end_before_start(self) -> None:
        series = normalize_series([_obs(5, 80)], start=date(2024, 1, 5), end=date(2024, 1, 1))
        assert series == []

    def test_idempotent(self) -> None:
        """Same input and range gives identical output."""
        obs = [_obs(1, 80), _obs(4, 78.5), _obs(11, 77)]
        first = normalize_series(obs, end=date(2024, 1, 12))
        second = normalize_series(obs, end=date(2024, 1, 12))
        assert first == second

    def test_does_not_mutate_input(self) -> None:
        obs = [_obs(5, 76), _obs(1, 80)]
        normalize_series(obs, end=date(2024, 1, 5))
        assert obs == [_obs(5, 76), _obs(1, 80)]
