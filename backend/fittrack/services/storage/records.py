"""
Record Stores - workouts, check-ins and the daily goal on top of the
key-value store.

Each collection is stored as one JSON array under its key. Malformed
stored data is logged and read as empty (or as the default goal), but is
never written over: adding, updating or deleting on top of a malformed
collection raises StorageError, as do storage failures.
"""
import json
import uuid
from datetime import datetime, tzinfo
from typing import Any, List, Optional, Type, TypeVar

from pydantic import ValidationError

from fittrack.core.config import settings
from fittrack.core.exceptions import StorageError
from fittrack.core.logging import get_logger
from fittrack.models.records import CheckInRecord, DailyGoal, RecordModel, WorkoutRecord
from fittrack.services.analytics.windows import (
    Instant,
    TimeWindow,
    day_bounds,
    filter_window,
)
from fittrack.services.storage.store import KeyValueStore

logger = get_logger(__name__)

WORKOUTS_KEY = "@fitness_tracker/workouts"
CHECK_INS_KEY = "@fitness_tracker/check_ins"
DAILY_GOAL_KEY = "@fitness_tracker/daily_goal"

R = TypeVar("R", bound=RecordModel)


def new_record_id() -> str:
    """Generate an opaque unique record id."""
    return str(uuid.uuid4())


def default_daily_goal() -> DailyGoal:
    """Goal used until the user saves one."""
    return DailyGoal(
        target_minutes=settings.DEFAULT_TARGET_MINUTES,
        target_calories=settings.DEFAULT_TARGET_CALORIES,
    )


class _CollectionStore:
    """Shared read/write of a JSON array of records under one key."""

    key: str
    model: Type[RecordModel]

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    async def get_all(self) -> List[Any]:
        """
        Load every record in storage order.

        Returns:
            List of records, empty if nothing is stored or data is malformed
        """
        raw = await self.kv.get_item(self.key)
        if not raw:
            return []

        try:
            return self._decode(raw)
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning("Ignoring malformed stored records", key=self.key, error=str(e))
            return []

    def _decode(self, raw: str) -> List[Any]:
        return [self.model.model_validate(item) for item in json.loads(raw)]

    async def _load_for_write(self) -> List[Any]:
        """
        Load the collection before rewriting it.

        Raises:
            StorageError: If the stored collection is malformed
        """
        raw = await self.kv.get_item(self.key)
        if not raw:
            return []

        try:
            return self._decode(raw)
        except (ValueError, TypeError, ValidationError) as e:
            logger.error("Refusing to overwrite malformed records", key=self.key, error=str(e))
            raise StorageError(f"Stored data under {self.key!r} is malformed") from e

    async def _save_all(self, records: List[Any]) -> None:
        await self.kv.set_item(self.key, json.dumps([r.to_dict() for r in records]))

    async def _append(self, record: R) -> R:
        records = await self._load_for_write()
        records.append(record)
        await self._save_all(records)
        return record


class WorkoutStore(_CollectionStore):
    """Persistence for workout records."""

    key = WORKOUTS_KEY
    model = WorkoutRecord

    async def add(self, **fields: Any) -> WorkoutRecord:
        """
        Store a new workout, assigning it an id.

        Args:
            **fields: WorkoutRecord fields other than id

        Returns:
            The stored workout
        """
        workout = WorkoutRecord(id=new_record_id(), **fields)
        await self._append(workout)

        logger.info(
            "Workout stored",
            workout_id=workout.id,
            category=workout.exercise_category.value,
            calories=workout.calories,
        )
        return workout

    async def update(self, workout_id: str, **updates: Any) -> Optional[WorkoutRecord]:
        """
        Replace fields of a stored workout.

        The id cannot be changed; calories are taken as given.

        Args:
            workout_id: Workout to update
            **updates: Fields to replace

        Returns:
            Updated workout or None if not found
        """
        workouts = await self._load_for_write()

        for index, workout in enumerate(workouts):
            if workout.id == workout_id:
                updated = WorkoutRecord.model_validate(
                    {**workout.model_dump(), **updates, "id": workout.id}
                )
                workouts[index] = updated
                await self._save_all(workouts)
                logger.info("Workout updated", workout_id=workout_id, fields=sorted(updates))
                return updated

        logger.warning("Workout not found for update", workout_id=workout_id)
        return None

    async def delete(self, workout_id: str) -> bool:
        """
        Delete a workout by id.

        Returns:
            True if a workout was removed
        """
        workouts = await self._load_for_write()
        remaining = [w for w in workouts if w.id != workout_id]
        await self._save_all(remaining)

        deleted = len(remaining) < len(workouts)
        logger.info("Workout deleted", workout_id=workout_id, deleted=deleted)
        return deleted

    async def get_by_date(
        self,
        day: Optional[Instant] = None,
        tz: Optional[tzinfo] = None,
    ) -> List[WorkoutRecord]:
        """Workouts on the local calendar day of an instant."""
        return list(filter_window(await self.get_all(), day_bounds(day, tz)))

    async def get_by_date_range(self, start: datetime, end: datetime) -> List[WorkoutRecord]:
        """Workouts with start <= timestamp <= end."""
        window = TimeWindow(start=start, end=end)
        return list(filter_window(await self.get_all(), window))


class CheckInStore(_CollectionStore):
    """Persistence for daily check-ins."""

    key = CHECK_INS_KEY
    model = CheckInRecord

    async def add(self, **fields: Any) -> CheckInRecord:
        """
        Store a new check-in, assigning it an id.

        Returns:
            The stored check-in
        """
        check_in = CheckInRecord(id=new_record_id(), **fields)
        await self._append(check_in)

        logger.info("Check-in stored", check_in_id=check_in.id, mood=check_in.mood)
        return check_in

    async def get_by_date(
        self,
        day: Optional[Instant] = None,
        tz: Optional[tzinfo] = None,
    ) -> Optional[CheckInRecord]:
        """
        First stored check-in on the local calendar day of an instant.

        Several check-ins on one day are allowed; the earliest stored wins.
        """
        matches = filter_window(await self.get_all(), day_bounds(day, tz))
        return matches[0] if matches else None


class DailyGoalStore:
    """Persistence for the single daily goal."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    async def get(self) -> DailyGoal:
        """
        Load the daily goal.

        Returns:
            Stored goal, or the default if unset or malformed
        """
        raw = await self.kv.get_item(DAILY_GOAL_KEY)
        if not raw:
            return default_daily_goal()

        try:
            return DailyGoal.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring malformed daily goal", error=str(e))
            return default_daily_goal()

    async def set(self, goal: DailyGoal) -> None:
        """Overwrite the daily goal."""
        await self.kv.set_item(DAILY_GOAL_KEY, json.dumps(goal.to_dict()))
        logger.info(
            "Daily goal saved",
            target_minutes=goal.target_minutes,
            target_calories=goal.target_calories,
        )


async def clear_all_data(kv: KeyValueStore) -> None:
    """Remove all workouts, check-ins and the daily goal."""
    await kv.multi_remove([WORKOUTS_KEY, CHECK_INS_KEY, DAILY_GOAL_KEY])
    logger.info("All data cleared")
