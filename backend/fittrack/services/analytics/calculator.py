"""
Stats Calculator - aggregate statistics over workout snapshots.

Every function here is pure: inputs are read, never mutated, and each
call returns fresh values. "Now" is taken as an argument so results are
reproducible; ``None`` falls back to the current time.
"""
from collections import Counter
from datetime import date, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fittrack.core.logging import get_logger
from fittrack.models.records import DailyGoal, WorkoutRecord
from fittrack.models.stats import (
    DailySummary,
    GoalProgress,
    WorkoutStats,
    empty_breakdown,
)
from fittrack.services.analytics.calories import round_half_up
from fittrack.services.analytics.windows import (
    ONE_DAY,
    Instant,
    local_date,
    local_tz,
)

logger = get_logger(__name__)


def summarize(workouts: Iterable[WorkoutRecord]) -> DailySummary:
    """
    Count and total a pre-filtered set of workouts.

    Args:
        workouts: Workouts already narrowed to the window of interest

    Returns:
        DailySummary, all zeros for empty input
    """
    count = total_minutes = total_calories = 0
    for workout in workouts:
        count += 1
        total_minutes += workout.duration_minutes
        total_calories += workout.calories

    return DailySummary(
        count=count,
        total_minutes=total_minutes,
        total_calories=total_calories,
    )


def compute_streak(
    workouts: Iterable[WorkoutRecord],
    now: Optional[Instant] = None,
    tz: Optional[tzinfo] = None,
    distinct_days: bool = False,
) -> int:
    """
    Count consecutive active days walking backwards from today.

    The default walk visits workouts newest first with a cursor starting
    at today. A workout on the cursor day or the day before it counts
    one and moves the cursor back a day; anything else ends the walk. The
    cursor moves once per workout visited, so repeated workouts on one
    day can extend or end the streak depending on where the cursor sits.

    With ``distinct_days`` each calendar day counts at most once, and the
    result is the number of consecutive days with a workout ending today
    (or yesterday, if nothing is logged yet today).

    Args:
        workouts: Workouts in any order
        now: Reference instant for "today"
        tz: Timezone for calendar days
        distinct_days: Collapse same-day workouts before walking

    Returns:
        Streak length, 0 if the newest workout is older than yesterday
    """
    tz = tz or local_tz()
    today = local_date(now, tz)

    if distinct_days:
        return _distinct_day_streak(workouts, today, tz)

    ordered = sorted(workouts, key=lambda w: w.timestamp_millis, reverse=True)
    cursor = today
    streak = 0

    for workout in ordered:
        day = local_date(workout.timestamp_millis, tz)
        if day == cursor or day == cursor - ONE_DAY:
            streak += 1
            cursor -= ONE_DAY
        else:
            break

    return streak


def _distinct_day_streak(
    workouts: Iterable[WorkoutRecord],
    today: date,
    tz: tzinfo,
) -> int:
    days = sorted({local_date(w.timestamp_millis, tz) for w in workouts}, reverse=True)
    if not days:
        return 0

    expected = today if days[0] == today else today - ONE_DAY
    streak = 0
    for day in days:
        if day != expected:
            break
        streak += 1
        expected -= ONE_DAY

    return streak


def compute_stats(
    workouts: Iterable[WorkoutRecord],
    now: Optional[Instant] = None,
    tz: Optional[tzinfo] = None,
    distinct_days: bool = False,
) -> WorkoutStats:
    """
    Compute totals, average duration, category breakdown and streak.

    Args:
        workouts: Workouts to aggregate, usually one window's worth
        now: Reference instant for the streak
        tz: Timezone for calendar days
        distinct_days: Streak mode, see compute_streak

    Returns:
        WorkoutStats; every category key is present in the breakdown
    """
    snapshot: Sequence[WorkoutRecord] = tuple(workouts)

    if not snapshot:
        return WorkoutStats(exercise_breakdown=empty_breakdown())

    summary = summarize(snapshot)
    breakdown = empty_breakdown()
    breakdown.update(Counter(w.exercise_category for w in snapshot))

    stats = WorkoutStats(
        total_workouts=summary.count,
        total_minutes=summary.total_minutes,
        total_calories=summary.total_calories,
        average_duration=round_half_up(summary.total_minutes / summary.count),
        current_streak=compute_streak(snapshot, now, tz, distinct_days),
        exercise_breakdown=breakdown,
    )

    logger.debug(
        "Computed workout stats",
        total_workouts=stats.total_workouts,
        current_streak=stats.current_streak,
    )

    return stats


def group_by_date(
    workouts: Iterable[WorkoutRecord],
    tz: Optional[tzinfo] = None,
) -> Dict[date, Tuple[WorkoutRecord, ...]]:
    """
    Group workouts by local calendar day.

    Days appear in the order they are first seen; workouts keep their
    input order within a day.
    """
    tz = tz or local_tz()
    grouped: Dict[date, List[WorkoutRecord]] = {}

    for workout in workouts:
        day = local_date(workout.timestamp_millis, tz)
        grouped.setdefault(day, []).append(workout)

    return {day: tuple(items) for day, items in grouped.items()}


def goal_progress(summary: DailySummary, goal: DailyGoal) -> GoalProgress:
    """
    Progress of a day's summary towards the daily goal.

    Fractions are clamped to [0, 1]; remaining amounts never go negative.
    """
    minutes_progress = min(summary.total_minutes / goal.target_minutes, 1.0)
    calories_progress = min(summary.total_calories / goal.target_calories, 1.0)

    return GoalProgress(
        minutes_progress=max(minutes_progress, 0.0),
        calories_progress=max(calories_progress, 0.0),
        minutes_remaining=max(goal.target_minutes - summary.total_minutes, 0),
        calories_remaining=max(goal.target_calories - summary.total_calories, 0),
        achieved=(
            summary.total_minutes >= goal.target_minutes
            and summary.total_calories >= goal.target_calories
        ),
    )
