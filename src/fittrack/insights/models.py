"""Data models for metric series and derived insights."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class Metric(Enum):
    """Fitness metrics that can be charted and trended."""

    WEIGHT = "weight"      # Body weight in kg
    CALORIES = "calories"  # Calories burned by activities
    FOOD = "food"          # Calories consumed
    STAMINA = "stamina"    # Stamina session duration in minutes

    @classmethod
    def parse(cls, name: str) -> "Metric":
        """Parse a metric name (case-insensitive).

        Raises:
            ValueError: If the name is not a known metric
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown metric '{name}'. Valid metrics: {valid}") from None

    @property
    def unit(self) -> str:
        return METRIC_UNITS[self]

    @property
    def label(self) -> str:
        return METRIC_LABELS[self]

    @property
    def sums_daily(self) -> bool:
        """Whether same-day entries are added together before charting."""
        return self in DAILY_SUM_METRICS


METRIC_UNITS = {
    Metric.WEIGHT: "kg",
    Metric.CALORIES: "cal",
    Metric.FOOD: "cal",
    Metric.STAMINA: "min",
}

METRIC_LABELS = {
    Metric.WEIGHT: "Weight (kg)",
    Metric.CALORIES: "Calories Burned",
    Metric.FOOD: "Calories Consumed",
    Metric.STAMINA: "Duration (min)",
}

# Metrics logged several times a day (one row per activity or meal)
DAILY_SUM_METRICS = frozenset({Metric.CALORIES, Metric.FOOD})


@dataclass(frozen=True)
class Observation:
    """A single dated measurement for one metric."""

    date: date
    value: float

    def __post_init__(self) -> None:
        # Only the calendar day matters for daily series
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())


@dataclass(frozen=True)
class NormalizedPoint:
    """One day of a gap-free daily series."""

    date: date
    value: float
    is_interpolated: bool = False


@dataclass(frozen=True)
class TrendResult:
    """Average daily rate of change between the first and last point."""

    slope: float  # value units per day
    description: str


@dataclass(frozen=True)
class ForecastResult:
    """Projected date for reaching a target value.

    ``forecast_date`` is None when no forecast could be made.
    """

    message: str
    forecast_date: Optional[date] = None
    days_to_goal: Optional[int] = None

    @property
    def has_forecast(self) -> bool:
        return self.forecast_date is not None
