"""
Calendar windows - day/week/month boundaries in local time.

Instants are accepted as timezone-aware datetimes or Unix epoch
milliseconds. Naive datetimes are read as wall-clock time in ``tz``.
Passing ``None`` for an instant means "now"; callers that need
reproducible results pass it explicitly.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from typing import Iterable, Optional, Tuple, TypeVar, Union
from zoneinfo import ZoneInfo

from fittrack.core.config import settings

Instant = Union[datetime, int, float]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_DAY = timedelta(days=1)
END_OF_DAY = time(23, 59, 59, 999000)


class Period(str, Enum):
    """Calendar periods a window can span."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [start, end] range of instants."""
    start: datetime
    end: datetime

    @property
    def start_ms(self) -> int:
        return to_millis(self.start)

    @property
    def end_ms(self) -> int:
        return to_millis(self.end)

    def contains(self, timestamp_ms: int) -> bool:
        """Check whether an epoch-millisecond timestamp falls in the window."""
        return self.start_ms <= timestamp_ms <= self.end_ms


def local_tz() -> tzinfo:
    """Timezone used for calendar arithmetic."""
    return ZoneInfo(settings.TIMEZONE)


def to_millis(moment: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return (moment - EPOCH) // timedelta(milliseconds=1)


def from_millis(timestamp_ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """Convert epoch milliseconds to an aware datetime in ``tz``."""
    return (EPOCH + timedelta(milliseconds=timestamp_ms)).astimezone(tz or local_tz())


def to_local(instant: Optional[Instant] = None, tz: Optional[tzinfo] = None) -> datetime:
    """Resolve an instant to an aware datetime in ``tz``."""
    tz = tz or local_tz()

    if instant is None:
        return datetime.now(tz)
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant.replace(tzinfo=tz)
        return instant.astimezone(tz)
    return from_millis(int(instant), tz)


def local_date(instant: Optional[Instant] = None, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of an instant in ``tz``."""
    return to_local(instant, tz).date()


def _window(first: date, last: date, tz: tzinfo) -> TimeWindow:
    return TimeWindow(
        start=datetime.combine(first, time.min, tzinfo=tz),
        end=datetime.combine(last, END_OF_DAY, tzinfo=tz),
    )


def day_bounds(instant: Optional[Instant] = None, tz: Optional[tzinfo] = None) -> TimeWindow:
    """Local midnight to 23:59:59.999 of the instant's day."""
    tz = tz or local_tz()
    day = local_date(instant, tz)
    return _window(day, day, tz)


def week_bounds(instant: Optional[Instant] = None, tz: Optional[tzinfo] = None) -> TimeWindow:
    """
    Monday-to-Sunday week containing the instant.

    A Sunday belongs to the week that started six days earlier.
    """
    tz = tz or local_tz()
    day = local_date(instant, tz)
    monday = day - timedelta(days=day.weekday())
    return _window(monday, monday + timedelta(days=6), tz)


def month_bounds(instant: Optional[Instant] = None, tz: Optional[tzinfo] = None) -> TimeWindow:
    """First to last calendar day of the instant's month."""
    tz = tz or local_tz()
    first = local_date(instant, tz).replace(day=1)
    # Step into the next month, then back up one day
    next_first = (first + timedelta(days=32)).replace(day=1)
    return _window(first, next_first - ONE_DAY, tz)


def period_window(
    period: Union[Period, str],
    instant: Optional[Instant] = None,
    tz: Optional[tzinfo] = None,
) -> TimeWindow:
    """Window for a named period around the instant."""
    bounds = {
        Period.DAY: day_bounds,
        Period.WEEK: week_bounds,
        Period.MONTH: month_bounds,
    }
    return bounds[Period(period)](instant, tz)


def is_same_calendar_day(a: Instant, b: Instant, tz: Optional[tzinfo] = None) -> bool:
    """True if both instants fall on the same local calendar day."""
    return local_date(a, tz) == local_date(b, tz)


def is_today(
    instant: Instant,
    relative_to: Optional[Instant] = None,
    tz: Optional[tzinfo] = None,
) -> bool:
    """True if the instant falls on the local day of ``relative_to``."""
    return is_same_calendar_day(instant, to_local(relative_to, tz), tz)


def is_yesterday(
    instant: Instant,
    relative_to: Optional[Instant] = None,
    tz: Optional[tzinfo] = None,
) -> bool:
    """True if the instant falls on the local day before ``relative_to``."""
    return local_date(instant, tz) == local_date(relative_to, tz) - ONE_DAY


T = TypeVar("T")


def filter_window(records: Iterable[T], window: TimeWindow) -> Tuple[T, ...]:
    """Records whose ``timestamp_millis`` falls inside the window (inclusive)."""
    start, end = window.start_ms, window.end_ms
    return tuple(r for r in records if start <= r.timestamp_millis <= end)
