"""
Display helpers for durations, dates and times.
"""
from datetime import tzinfo
from typing import Optional

from fittrack.services.analytics.windows import Instant, to_local


def format_duration(minutes: int) -> str:
    """Format minutes as "45m", "1h 30m" or "2h"."""
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"


def format_date(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    """Format as "Jan 22, 2026"."""
    moment = to_local(instant, tz)
    return f"{moment:%b} {moment.day}, {moment.year}"


def format_date_short(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    """Format as "Jan 22"."""
    moment = to_local(instant, tz)
    return f"{moment:%b} {moment.day}"


def format_time(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    """Format as "2:30 PM"."""
    moment = to_local(instant, tz)
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"
