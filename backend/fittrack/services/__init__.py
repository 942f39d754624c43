"""
Services module - Application business logic layer.

Modules:
- analytics: Calorie estimation, calendar windows and workout statistics
- storage: Key-value persistence for records and the daily goal
- tracker: FitnessTracker service tying storage and analytics together
"""
# Main exports for convenience
from fittrack.services.storage import KeyValueStore
from fittrack.services.tracker import FitnessTracker

__all__ = [
    "KeyValueStore",
    "FitnessTracker",
]
