import json
from datetime import timedelta

import pytest

from fittrack.core.exceptions import StorageError
from fittrack.models.records import DailyGoal, EnergyLevel, ExerciseCategory, Intensity
from fittrack.services.analytics import day_bounds, to_millis
from fittrack.services.storage import (
    CHECK_INS_KEY,
    DAILY_GOAL_KEY,
    WORKOUTS_KEY,
    CheckInStore,
    DailyGoalStore,
    WorkoutStore,
    clear_all_data,
)

from conftest import NOW, UTC


def workout_fields(days_ago=0, **overrides):
    fields = {
        "exercise_category": ExerciseCategory.CARDIO,
        "duration_minutes": 30,
        "intensity": Intensity.MODERATE,
        "calories": 240,
        "notes": "",
        "timestamp_millis": to_millis(NOW - timedelta(days=days_ago)),
    }
    fields.update(overrides)
    return fields


class TestKeyValueStore:
    async def test_missing_key(self, kv):
        assert await kv.get_item("missing") is None

    async def test_last_write_wins(self, kv):
        await kv.set_item("key", "first")
        await kv.set_item("key", "second")

        assert await kv.get_item("key") == "second"

    async def test_multi_remove(self, kv):
        await kv.set_item("a", "1")
        await kv.set_item("b", "2")
        await kv.set_item("c", "3")

        await kv.multi_remove(["a", "b", "not-there"])

        assert await kv.get_item("a") is None
        assert await kv.get_item("b") is None
        assert await kv.get_item("c") == "3"


class TestWorkoutStore:
    async def test_empty(self, kv):
        assert await WorkoutStore(kv).get_all() == []

    async def test_add_assigns_id_and_persists(self, kv):
        workout = await WorkoutStore(kv).add(**workout_fields(notes="Morning run"))

        assert workout.id
        assert await WorkoutStore(kv).get_all() == [workout]

    async def test_ids_are_unique(self, kv):
        store = WorkoutStore(kv)
        first = await store.add(**workout_fields())
        second = await store.add(**workout_fields())

        assert first.id != second.id

    async def test_persisted_json_shape(self, kv):
        workout = await WorkoutStore(kv).add(**workout_fields())

        stored = json.loads(await kv.get_item(WORKOUTS_KEY))

        assert stored == [
            {
                "id": workout.id,
                "exerciseCategory": "cardio",
                "durationMinutes": 30,
                "intensity": "moderate",
                "calories": 240,
                "notes": "",
                "timestampMillis": to_millis(NOW),
            }
        ]

    async def test_update_replaces_fields_and_keeps_id(self, kv):
        store = WorkoutStore(kv)
        workout = await store.add(**workout_fields())

        updated = await store.update(workout.id, duration_minutes=45, notes="Longer", id="other")

        assert updated.id == workout.id
        assert updated.duration_minutes == 45
        assert updated.notes == "Longer"
        assert updated.calories == 240
        assert await store.get_all() == [updated]

    async def test_update_missing(self, kv):
        assert await WorkoutStore(kv).update("nope", notes="x") is None

    async def test_update_validates(self, kv):
        store = WorkoutStore(kv)
        workout = await store.add(**workout_fields())

        with pytest.raises(ValueError):
            await store.update(workout.id, duration_minutes=-1)

    async def test_delete(self, kv):
        store = WorkoutStore(kv)
        keep = await store.add(**workout_fields())
        drop = await store.add(**workout_fields())

        assert await store.delete(drop.id) is True
        assert await store.delete(drop.id) is False
        assert await store.get_all() == [keep]

    async def test_get_by_date(self, kv):
        store = WorkoutStore(kv)
        today = await store.add(**workout_fields(days_ago=0))
        await store.add(**workout_fields(days_ago=1))

        assert await store.get_by_date(NOW, UTC) == [today]

    async def test_get_by_date_range_is_inclusive(self, kv):
        store = WorkoutStore(kv)
        window = day_bounds(NOW, UTC)
        at_start = await store.add(**workout_fields(timestamp_millis=window.start_ms))
        at_end = await store.add(**workout_fields(timestamp_millis=window.end_ms))
        await store.add(**workout_fields(timestamp_millis=window.end_ms + 1))

        assert await store.get_by_date_range(window.start, window.end) == [at_start, at_end]

    @pytest.mark.parametrize("raw", ["not json", '{"id": 1}', "[{\"id\": \"1\"}]", "42"])
    async def test_malformed_data_reads_as_empty(self, kv, raw):
        await kv.set_item(WORKOUTS_KEY, raw)

        assert await WorkoutStore(kv).get_all() == []

    @pytest.mark.parametrize(
        "write",
        [
            lambda store: store.add(**workout_fields()),
            lambda store: store.update("a", notes="edited"),
            lambda store: store.delete("a"),
        ],
        ids=["add", "update", "delete"],
    )
    async def test_writes_keep_partly_invalid_collection(self, kv, write):
        good = {
            "id": "a",
            "exerciseCategory": "cardio",
            "durationMinutes": 30,
            "intensity": "moderate",
            "calories": 240,
            "notes": "",
            "timestampMillis": to_millis(NOW),
        }
        raw = json.dumps([good, {**good, "id": "b", "exerciseCategory": "swimming"}])
        await kv.set_item(WORKOUTS_KEY, raw)

        with pytest.raises(StorageError):
            await write(WorkoutStore(kv))

        assert await kv.get_item(WORKOUTS_KEY) == raw


class TestCheckInStore:
    async def test_add_and_get_all(self, kv):
        store = CheckInStore(kv)
        check_in = await store.add(
            mood=4, energy=EnergyLevel.HIGH, timestamp_millis=to_millis(NOW)
        )

        assert check_in.id
        assert await store.get_all() == [check_in]

    async def test_get_by_date_returns_first_match(self, kv):
        store = CheckInStore(kv)
        await store.add(mood=2, energy="low", timestamp_millis=to_millis(NOW - timedelta(days=1)))
        first = await store.add(mood=3, energy="medium", timestamp_millis=to_millis(NOW))
        await store.add(
            mood=5, energy="high", timestamp_millis=to_millis(NOW - timedelta(hours=5))
        )

        assert await store.get_by_date(NOW, UTC) == first

    async def test_get_by_date_without_match(self, kv):
        store = CheckInStore(kv)
        await store.add(mood=3, energy="medium", timestamp_millis=to_millis(NOW))

        assert await store.get_by_date(NOW - timedelta(days=1), UTC) is None

    async def test_mood_is_validated(self, kv):
        with pytest.raises(ValueError):
            await CheckInStore(kv).add(mood=6, energy="high", timestamp_millis=0)


class TestDailyGoalStore:
    async def test_default_goal(self, kv):
        goal = await DailyGoalStore(kv).get()

        assert goal == DailyGoal(target_minutes=30, target_calories=500)

    async def test_set_overwrites(self, kv):
        store = DailyGoalStore(kv)
        await store.set(DailyGoal(target_minutes=45, target_calories=600))
        await store.set(DailyGoal(target_minutes=60, target_calories=700))

        assert await store.get() == DailyGoal(target_minutes=60, target_calories=700)
        assert json.loads(await kv.get_item(DAILY_GOAL_KEY)) == {
            "targetMinutes": 60,
            "targetCalories": 700,
        }

    async def test_malformed_goal_falls_back_to_default(self, kv):
        await kv.set_item(DAILY_GOAL_KEY, '{"targetMinutes": 0}')

        assert await DailyGoalStore(kv).get() == DailyGoal(target_minutes=30, target_calories=500)


async def test_clear_all_data(kv):
    await WorkoutStore(kv).add(**workout_fields())
    await CheckInStore(kv).add(mood=3, energy="medium", timestamp_millis=to_millis(NOW))
    await DailyGoalStore(kv).set(DailyGoal(target_minutes=10, target_calories=100))

    await clear_all_data(kv)

    for key in (WORKOUTS_KEY, CHECK_INS_KEY, DAILY_GOAL_KEY):
        assert await kv.get_item(key) is None
