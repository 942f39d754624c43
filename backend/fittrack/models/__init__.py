from fittrack.models.records import (
    CheckInRecord,
    DailyGoal,
    EnergyLevel,
    ExerciseCategory,
    Intensity,
    WorkoutRecord,
)
from fittrack.models.stats import DailySummary, GoalProgress, WorkoutStats
from fittrack.models.kv import KeyValueEntry

__all__ = [
    "CheckInRecord",
    "DailyGoal",
    "EnergyLevel",
    "ExerciseCategory",
    "Intensity",
    "WorkoutRecord",
    "DailySummary",
    "GoalProgress",
    "WorkoutStats",
    "KeyValueEntry",
]
