"""
Analytics module - workout statistics and calendar aggregation.

This module provides:
- Calorie estimation from the per-minute rate table
- Day/week/month windows and calendar-day comparisons
- Summaries, full statistics and streak calculation
- Display formatting for durations and dates
"""
from fittrack.services.analytics.calories import (
    CALORIE_RATES,
    calories_per_minute,
    estimate_calories,
    round_half_up,
)
from fittrack.services.analytics.windows import (
    Period,
    TimeWindow,
    day_bounds,
    week_bounds,
    month_bounds,
    period_window,
    filter_window,
    is_same_calendar_day,
    is_today,
    is_yesterday,
    local_tz,
    to_millis,
    from_millis,
)
from fittrack.services.analytics.calculator import (
    summarize,
    compute_stats,
    compute_streak,
    group_by_date,
    goal_progress,
)
from fittrack.services.analytics.formatting import (
    format_duration,
    format_date,
    format_date_short,
    format_time,
)

__all__ = [
    # Calories
    "CALORIE_RATES",
    "calories_per_minute",
    "estimate_calories",
    "round_half_up",
    # Windows
    "Period",
    "TimeWindow",
    "day_bounds",
    "week_bounds",
    "month_bounds",
    "period_window",
    "filter_window",
    "is_same_calendar_day",
    "is_today",
    "is_yesterday",
    "local_tz",
    "to_millis",
    "from_millis",
    # Calculator
    "summarize",
    "compute_stats",
    "compute_streak",
    "group_by_date",
    "goal_progress",
    # Formatting
    "format_duration",
    "format_date",
    "format_date_short",
    "format_time",
]
