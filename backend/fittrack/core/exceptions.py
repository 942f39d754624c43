"""
Exception hierarchy.

The statistics engine itself raises only at its input boundary (negative
durations, unknown enum values). Storage failures are wrapped so callers can
catch a single base class.
"""


class FitTrackError(Exception):
    """Base class for all FitTrack errors."""


class InvalidDurationError(FitTrackError, ValueError):
    """A workout duration was negative."""

    def __init__(self, duration_minutes: float):
        self.duration_minutes = duration_minutes
        super().__init__(f"Duration must be non-negative, got {duration_minutes}")


class RecordNotFoundError(FitTrackError, KeyError):
    """No record exists with the requested id."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(record_id)

    def __str__(self) -> str:
        return f"Record not found: {self.record_id}"


class StorageError(FitTrackError):
    """The key-value store could not complete a read or write."""
