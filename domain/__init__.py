"""
Domain layer for LiftLog.

This package contains pure domain models that are independent of
infrastructure concerns (storage, API, external services).
"""

from domain.models import (
    Exercise,
    ExerciseEntry,
    PersonalRecord,
    PRNotification,
    Workout,
    WorkoutSet,
)

__all__ = [
    "Exercise",
    "ExerciseEntry",
    "PersonalRecord",
    "PRNotification",
    "Workout",
    "WorkoutSet",
]
