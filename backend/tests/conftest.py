from datetime import datetime, timedelta
from itertools import count
from zoneinfo import ZoneInfo

import pytest

from fittrack.core.database import create_engine, create_session_factory, init_db
from fittrack.core.logging import setup_logging
from fittrack.models.records import WorkoutRecord
from fittrack.services.analytics import estimate_calories, to_millis
from fittrack.services.storage import KeyValueStore

UTC = ZoneInfo("UTC")
BERLIN = ZoneInfo("Europe/Berlin")

# Thursday afternoon
NOW = datetime(2026, 1, 22, 15, 30, tzinfo=UTC)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    setup_logging()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_workout():
    """Build WorkoutRecords relative to NOW."""
    ids = count(1)

    def _make(
        days_ago: int = 0,
        category: str = "cardio",
        duration: int = 30,
        intensity: str = "moderate",
        calories: int = None,
        hour: int = 12,
        at: datetime = None,
    ) -> WorkoutRecord:
        if at is None:
            at = (NOW - timedelta(days=days_ago)).replace(hour=hour, minute=0)
        if calories is None:
            calories = estimate_calories(category, intensity, duration)
        return WorkoutRecord(
            id=str(next(ids)),
            exercise_category=category,
            duration_minutes=duration,
            intensity=intensity,
            calories=calories,
            timestamp_millis=to_millis(at),
        )

    return _make


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'fittrack.db'}"


@pytest.fixture
async def session_factory(database_url):
    engine = create_engine(database_url)
    await init_db(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def kv(session_factory):
    return KeyValueStore(session_factory)
