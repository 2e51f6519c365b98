"""Body metrics: BMI, BMR and goal progress.

BMI is weight (kg) divided by height (m) squared. BMR uses the
Mifflin-St Jeor equation, which is widely validated for estimating
resting metabolic rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Sex(Enum):
    """Biological sex for BMR calculation."""
    MALE = "male"
    FEMALE = "female"


# BMI category upper bounds (exclusive), checked in order
BMI_CATEGORIES = (
    (18.5, "Underweight"),
    (25.0, "Normal"),
    (30.0, "Overweight"),
)
BMI_OBESE = "Obese"

# Range shown on the BMI gauge
BMI_SCALE_MIN = 15.0
BMI_SCALE_MAX = 35.0

# Mifflin-St Jeor sex constants
BMR_SEX_OFFSET = {
    Sex.MALE: 5,
    Sex.FEMALE: -161,
}


@dataclass
class BodyMetrics:
    """BMI and BMR for a profile."""

    bmi: float
    bmi_category: str
    bmi_scale_position: float  # 0-100 along the gauge
    bmr: int  # kcal/day

    def summary(self) -> str:
        """Human-readable summary."""
        return "\n".join([
            f"BMI: {self.bmi:.1f} ({self.bmi_category})",
            f"BMR: {self.bmr} kcal/day",
        ])


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Calculate Body Mass Index, rounded to one decimal.

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters

    Returns:
        BMI in kg/m²
    """
    if height_cm <= 0:
        raise ValueError(f"height_cm must be positive, got {height_cm}")
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def bmi_category(bmi: float) -> str:
    """Return the WHO category name for a BMI value."""
    for upper, name in BMI_CATEGORIES:
        if bmi < upper:
            return name
    return BMI_OBESE


def bmi_scale_position(bmi: float) -> float:
    """Position of a BMI on the 15-35 gauge, as a percentage clamped to 0-100."""
    percentage = (bmi - BMI_SCALE_MIN) / (BMI_SCALE_MAX - BMI_SCALE_MIN) * 100
    return min(max(percentage, 0.0), 100.0)


def calculate_bmr(
    weight_kg: float,
    height_cm: float,
    age: int,
    sex: str = "male",
) -> int:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters
        age: Age in years
        sex: "male" or "female"

    Returns:
        BMR in calories per day, rounded
    """
    sex_enum = Sex(sex.lower())
    bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + BMR_SEX_OFFSET[sex_enum]
    return round(bmr)


def calculate_body_metrics(
    weight_kg: float,
    height_cm: float,
    age: int,
    sex: str = "male",
) -> BodyMetrics:
    """Calculate BMI and BMR together."""
    bmi = calculate_bmi(weight_kg, height_cm)
    return BodyMetrics(
        bmi=bmi,
        bmi_category=bmi_category(bmi),
        bmi_scale_position=bmi_scale_position(bmi),
        bmr=calculate_bmr(weight_kg, height_cm, age, sex),
    )


def goal_progress(start: float, current: float, target: float) -> int:
    """
    Percent of the way from a starting value to a target, clamped to 0-100.

    Works for both decreasing goals (weight loss) and increasing ones.
    """
    total = target - start
    if total == 0:
        return 100 if current == target else 0
    percentage = round((current - start) / total * 100)
    return min(max(percentage, 0), 100)


def body_metrics_to_dict(metrics: BodyMetrics) -> dict:
    """Convert BodyMetrics to dict for JSON output."""
    return {
        "bmi": metrics.bmi,
        "bmi_category": metrics.bmi_category,
        "bmi_scale_position": round(metrics.bmi_scale_position, 1),
        "bmr": metrics.bmr,
    }
