"""
Derived statistics models.
Computed on demand from record snapshots and never persisted.
"""
from typing import Dict

from fittrack.models.records import ExerciseCategory, RecordModel


def empty_breakdown() -> Dict[ExerciseCategory, int]:
    """Breakdown with every category present and zero."""
    return {category: 0 for category in ExerciseCategory}


class DailySummary(RecordModel):
    """Totals over a pre-filtered set of workouts."""

    count: int = 0
    total_minutes: int = 0
    total_calories: int = 0


class WorkoutStats(RecordModel):
    """Aggregate statistics over a set of workouts."""

    total_workouts: int = 0
    total_minutes: int = 0
    total_calories: int = 0
    average_duration: int = 0
    current_streak: int = 0
    exercise_breakdown: Dict[ExerciseCategory, int]


class GoalProgress(RecordModel):
    """How far a daily summary is towards the daily goal."""

    minutes_progress: float
    calories_progress: float
    minutes_remaining: int
    calories_remaining: int
    achieved: bool
