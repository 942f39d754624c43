"""
Calorie Estimator - per-minute burn rates by category and intensity.
"""
import math
from typing import Dict, Union

from fittrack.core.exceptions import InvalidDurationError
from fittrack.models.records import ExerciseCategory, Intensity

# Calories burned per minute
CALORIE_RATES: Dict[ExerciseCategory, Dict[Intensity, int]] = {
    ExerciseCategory.CARDIO: {
        Intensity.EASY: 4,
        Intensity.MODERATE: 8,
        Intensity.INTENSE: 12,
    },
    ExerciseCategory.STRENGTH: {
        Intensity.EASY: 3,
        Intensity.MODERATE: 6,
        Intensity.INTENSE: 9,
    },
    ExerciseCategory.FLEXIBILITY: {
        Intensity.EASY: 2,
        Intensity.MODERATE: 3,
        Intensity.INTENSE: 4,
    },
    ExerciseCategory.SPORTS: {
        Intensity.EASY: 5,
        Intensity.MODERATE: 10,
        Intensity.INTENSE: 15,
    },
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def calories_per_minute(
    category: Union[ExerciseCategory, str],
    intensity: Union[Intensity, str],
) -> int:
    """
    Look up the burn rate for a category/intensity pair.

    Raises:
        ValueError: If category or intensity is not a known value
    """
    return CALORIE_RATES[ExerciseCategory(category)][Intensity(intensity)]


def estimate_calories(
    category: Union[ExerciseCategory, str],
    intensity: Union[Intensity, str],
    duration_minutes: float,
) -> int:
    """
    Estimate calories burned for a workout.

    Args:
        category: Exercise category
        intensity: Workout intensity
        duration_minutes: Duration, whole or fractional minutes

    Returns:
        Calories, rounded half up

    Raises:
        InvalidDurationError: If duration is negative
        ValueError: If category or intensity is not a known value
    """
    if duration_minutes < 0:
        raise InvalidDurationError(duration_minutes)

    return round_half_up(calories_per_minute(category, intensity) * duration_minutes)
