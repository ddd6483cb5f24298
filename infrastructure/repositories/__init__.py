"""
Repository implementations over a RecordStore.

Each repository owns one collection key and serializes its writes with
the shared per-collection lock.
"""

from infrastructure.repositories.exercise_repository import (
    EXERCISES_KEY,
    StoreExerciseRepository,
    default_exercises,
)
from infrastructure.repositories.personal_record_repository import (
    PERSONAL_RECORDS_KEY,
    PR_NOTIFICATIONS_KEY,
    StorePersonalRecordRepository,
    StorePRNotificationRepository,
)
from infrastructure.repositories.workout_repository import (
    WORKOUTS_KEY,
    StoreWorkoutRepository,
)

__all__ = [
    "StoreExerciseRepository",
    "StoreWorkoutRepository",
    "StorePersonalRecordRepository",
    "StorePRNotificationRepository",
    "default_exercises",
    "EXERCISES_KEY",
    "WORKOUTS_KEY",
    "PERSONAL_RECORDS_KEY",
    "PR_NOTIFICATIONS_KEY",
]
