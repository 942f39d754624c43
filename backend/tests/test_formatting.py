from datetime import datetime

import pytest

from fittrack.services.analytics import (
    format_date,
    format_date_short,
    format_duration,
    format_time,
    to_millis,
)

from conftest import BERLIN, UTC


@pytest.mark.parametrize(
    "minutes,expected",
    [(0, "0m"), (30, "30m"), (45, "45m"), (60, "1h"), (90, "1h 30m"), (120, "2h"), (125, "2h 5m")],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_format_date():
    timestamp = to_millis(datetime(2026, 1, 22, 12, 0, tzinfo=UTC))

    assert format_date(timestamp, UTC) == "Jan 22, 2026"
    assert format_date_short(timestamp, UTC) == "Jan 22"


def test_format_date_uses_timezone():
    timestamp = to_millis(datetime(2025, 12, 31, 23, 30, tzinfo=UTC))

    assert format_date(timestamp, UTC) == "Dec 31, 2025"
    assert format_date(timestamp, BERLIN) == "Jan 1, 2026"


@pytest.mark.parametrize(
    "hour,minute,expected",
    [(14, 30, "2:30 PM"), (0, 5, "12:05 AM"), (12, 0, "12:00 PM"), (9, 7, "9:07 AM")],
)
def test_format_time(hour, minute, expected):
    moment = datetime(2026, 1, 22, hour, minute, tzinfo=UTC)

    assert format_time(moment, UTC) == expected
