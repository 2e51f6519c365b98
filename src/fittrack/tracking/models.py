"""Data models for the user profile, logged entries and goals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from fittrack.insights.models import Metric, Observation

VALID_SEXES = ("male", "female")


@dataclass
class UserProfile:
    """User profile with the body measurements used for BMI/BMR."""

    user_id: Optional[int]
    age: int
    sex: str  # 'male' or 'female'
    height_cm: float
    weight_kg: float
    name: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.sex not in VALID_SEXES:
            raise ValueError(f"sex must be 'male' or 'female', got '{self.sex}'")
        if self.age <= 0:
            raise ValueError(f"age must be positive, got {self.age}")
        if self.height_cm <= 0:
            raise ValueError(f"height_cm must be positive, got {self.height_cm}")
        if self.weight_kg <= 0:
            raise ValueError(f"weight_kg must be positive, got {self.weight_kg}")


@dataclass
class LogEntry:
    """A single logged measurement (weigh-in, meal, activity, session)."""

    log_id: Optional[int]
    user_id: int
    metric: Metric
    measured_on: date
    value: float
    notes: Optional[str] = None

    def to_observation(self) -> Observation:
        return Observation(date=self.measured_on, value=self.value)


@dataclass
class Goal:
    """Active target value for a metric."""

    goal_id: Optional[int]
    user_id: int
    metric: Metric
    target_value: float
    created_at: Optional[datetime] = None
