"""
Fitness Tracker - application service over storage and analytics.

Holds an immutable snapshot of workouts, check-ins and the daily goal,
refreshed after every write, and answers dashboard/progress queries by
passing that snapshot to the pure analytics functions.
"""
from datetime import datetime, tzinfo
from typing import Callable, Dict, Optional, Tuple, Union

from fittrack.core.exceptions import RecordNotFoundError
from fittrack.core.logging import get_logger
from fittrack.models.records import (
    CheckInRecord,
    DailyGoal,
    EnergyLevel,
    ExerciseCategory,
    Intensity,
    WorkoutRecord,
)
from fittrack.models.stats import DailySummary, GoalProgress, WorkoutStats
from fittrack.services.analytics import (
    Period,
    compute_stats,
    day_bounds,
    estimate_calories,
    filter_window,
    goal_progress,
    group_by_date,
    local_tz,
    period_window,
    summarize,
    to_millis,
)
from fittrack.services.analytics.windows import Instant, to_local
from fittrack.services.storage import (
    CheckInStore,
    DailyGoalStore,
    KeyValueStore,
    WorkoutStore,
    clear_all_data,
    default_daily_goal,
)

logger = get_logger(__name__)

Clock = Callable[[], datetime]


class FitnessTracker:
    """
    Workout, check-in and goal tracking for a single user.

    Usage:
        tracker = FitnessTracker(KeyValueStore(session_factory))
        await tracker.load()
        await tracker.add_workout("cardio", 30, "moderate")
        stats = tracker.stats(Period.WEEK)
    """

    def __init__(
        self,
        kv: KeyValueStore,
        clock: Optional[Clock] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.kv = kv
        self.tz = tz or local_tz()
        self.clock = clock or (lambda: datetime.now(self.tz))

        self.workout_store = WorkoutStore(kv)
        self.check_in_store = CheckInStore(kv)
        self.goal_store = DailyGoalStore(kv)

        self.workouts: Tuple[WorkoutRecord, ...] = ()
        self.check_ins: Tuple[CheckInRecord, ...] = ()
        self.daily_goal: DailyGoal = default_daily_goal()

    def now(self) -> datetime:
        """Current time in the tracker's timezone."""
        return to_local(self.clock(), self.tz)

    async def load(self) -> None:
        """Reload the snapshot from storage."""
        self.workouts = tuple(await self.workout_store.get_all())
        self.check_ins = tuple(await self.check_in_store.get_all())
        self.daily_goal = await self.goal_store.get()

        logger.debug(
            "Loaded tracker data",
            workouts=len(self.workouts),
            check_ins=len(self.check_ins),
        )

    # ========================================
    # Writes
    # ========================================

    async def add_workout(
        self,
        category: Union[ExerciseCategory, str],
        duration_minutes: int,
        intensity: Union[Intensity, str] = Intensity.MODERATE,
        notes: str = "",
        timestamp: Optional[Instant] = None,
    ) -> WorkoutRecord:
        """
        Log a workout, estimating its calories.

        Args:
            category: Exercise category
            duration_minutes: Duration in minutes
            intensity: Workout intensity
            notes: Free text
            timestamp: When it happened, defaults to now

        Returns:
            The stored workout
        """
        category = ExerciseCategory(category)
        intensity = Intensity(intensity)
        calories = estimate_calories(category, intensity, duration_minutes)

        workout = await self.workout_store.add(
            exercise_category=category,
            duration_minutes=duration_minutes,
            intensity=intensity,
            calories=calories,
            notes=notes,
            timestamp_millis=self._timestamp(timestamp),
        )
        self.workouts = self.workouts + (workout,)
        return workout

    async def update_workout(
        self,
        workout_id: str,
        reestimate_calories: bool = False,
        **updates,
    ) -> WorkoutRecord:
        """
        Update fields of a logged workout.

        Calories are kept as stored unless given explicitly or
        ``reestimate_calories`` is set.

        Raises:
            RecordNotFoundError: If no workout has this id
        """
        if reestimate_calories:
            current = self._find_workout(workout_id)
            updates["calories"] = estimate_calories(
                updates.get("exercise_category", current.exercise_category),
                updates.get("intensity", current.intensity),
                updates.get("duration_minutes", current.duration_minutes),
            )

        updated = await self.workout_store.update(workout_id, **updates)
        if updated is None:
            raise RecordNotFoundError(workout_id)

        self.workouts = tuple(updated if w.id == workout_id else w for w in self.workouts)
        return updated

    async def delete_workout(self, workout_id: str) -> bool:
        """Delete a workout by id. Returns True if one was removed."""
        deleted = await self.workout_store.delete(workout_id)
        self.workouts = tuple(w for w in self.workouts if w.id != workout_id)
        return deleted

    async def add_check_in(
        self,
        mood: int,
        energy: Union[EnergyLevel, str],
        notes: str = "",
        timestamp: Optional[Instant] = None,
    ) -> CheckInRecord:
        """Record a mood/energy check-in."""
        check_in = await self.check_in_store.add(
            mood=mood,
            energy=EnergyLevel(energy),
            notes=notes,
            timestamp_millis=self._timestamp(timestamp),
        )
        self.check_ins = self.check_ins + (check_in,)
        return check_in

    async def set_daily_goal(self, target_minutes: int, target_calories: int) -> DailyGoal:
        """Replace the daily goal."""
        goal = DailyGoal(target_minutes=target_minutes, target_calories=target_calories)
        await self.goal_store.set(goal)
        self.daily_goal = goal
        return goal

    async def reset(self) -> None:
        """Delete all stored data and reset the snapshot."""
        await clear_all_data(self.kv)
        self.workouts = ()
        self.check_ins = ()
        self.daily_goal = default_daily_goal()

    # ========================================
    # Queries
    # ========================================

    def today_workouts(self) -> Tuple[WorkoutRecord, ...]:
        return filter_window(self.workouts, day_bounds(self.now(), self.tz))

    def today_summary(self) -> DailySummary:
        """Count and totals of today's workouts."""
        return summarize(self.today_workouts())

    def today_progress(self) -> GoalProgress:
        """Today's progress towards the daily goal."""
        return goal_progress(self.today_summary(), self.daily_goal)

    def today_check_in(self) -> Optional[CheckInRecord]:
        """First check-in logged today, if any."""
        matches = filter_window(self.check_ins, day_bounds(self.now(), self.tz))
        return matches[0] if matches else None

    def stats(
        self,
        period: Optional[Union[Period, str]] = None,
        distinct_days: bool = False,
    ) -> WorkoutStats:
        """
        Statistics over the current day/week/month, or all workouts.

        The streak is computed over the same workouts as the totals.
        """
        now = self.now()
        workouts = self.workouts
        if period is not None:
            workouts = filter_window(workouts, period_window(period, now, self.tz))

        return compute_stats(workouts, now, self.tz, distinct_days)

    def workouts_by_date(self) -> Dict:
        """Workouts grouped by local day, newest day first."""
        ordered = sorted(self.workouts, key=lambda w: w.timestamp_millis, reverse=True)
        return group_by_date(ordered, self.tz)

    def _find_workout(self, workout_id: str) -> WorkoutRecord:
        for workout in self.workouts:
            if workout.id == workout_id:
                return workout
        raise RecordNotFoundError(workout_id)

    def _timestamp(self, timestamp: Optional[Instant]) -> int:
        if timestamp is None:
            return to_millis(self.now())
        return to_millis(to_local(timestamp, self.tz))
