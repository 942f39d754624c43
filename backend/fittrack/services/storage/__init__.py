"""
Storage module - persistence collaborator for records and the daily goal.
"""
from fittrack.services.storage.store import KeyValueStore
from fittrack.services.storage.records import (
    CHECK_INS_KEY,
    DAILY_GOAL_KEY,
    WORKOUTS_KEY,
    CheckInStore,
    DailyGoalStore,
    WorkoutStore,
    clear_all_data,
    default_daily_goal,
)

__all__ = [
    "KeyValueStore",
    "CHECK_INS_KEY",
    "DAILY_GOAL_KEY",
    "WORKOUTS_KEY",
    "CheckInStore",
    "DailyGoalStore",
    "WorkoutStore",
    "clear_all_data",
    "default_daily_goal",
]
