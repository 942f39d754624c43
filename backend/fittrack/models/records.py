"""
Record models - immutable values logged by the user.

Persisted JSON uses camelCase keys (``exerciseCategory``, ``durationMinutes``,
``timestampMillis``...); Python code uses the snake_case attribute names.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExerciseCategory(str, Enum):
    """Workout categories."""
    CARDIO = "cardio"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"
    SPORTS = "sports"


class Intensity(str, Enum):
    """Perceived workout intensity."""
    EASY = "easy"
    MODERATE = "moderate"
    INTENSE = "intense"


class EnergyLevel(str, Enum):
    """Self-reported energy in a daily check-in."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


EXERCISE_LABELS = {
    ExerciseCategory.CARDIO: "Cardio",
    ExerciseCategory.STRENGTH: "Strength",
    ExerciseCategory.FLEXIBILITY: "Flexibility",
    ExerciseCategory.SPORTS: "Sports",
}

INTENSITY_LABELS = {
    Intensity.EASY: "Easy",
    Intensity.MODERATE: "Moderate",
    Intensity.INTENSE: "Intense",
}

ENERGY_LABELS = {
    EnergyLevel.LOW: "Low",
    EnergyLevel.MEDIUM: "Medium",
    EnergyLevel.HIGH: "High",
}


class RecordModel(BaseModel):
    """Base for frozen, camelCase-serialised models."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class WorkoutRecord(RecordModel):
    """A logged workout. ``calories`` is estimated once, at creation."""

    id: str
    exercise_category: ExerciseCategory
    duration_minutes: int = Field(ge=0)
    intensity: Intensity
    calories: int = Field(ge=0)
    notes: str = ""
    timestamp_millis: int


class CheckInRecord(RecordModel):
    """A daily mood/energy check-in."""

    id: str
    mood: int = Field(ge=1, le=5)
    energy: EnergyLevel
    notes: str = ""
    timestamp_millis: int


class DailyGoal(RecordModel):
    """Daily activity targets."""

    target_minutes: int = Field(gt=0)
    target_calories: int = Field(gt=0)
