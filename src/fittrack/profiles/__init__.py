"""Body metric calculations."""

from fittrack.profiles.body_calc import (
    calculate_bmi,
    calculate_bmr,
    calculate_body_metrics,
    goal_progress,
)

__all__ = [
    "calculate_bmi",
    "calculate_bmr",
    "calculate_body_metrics",
    "goal_progress",
]
