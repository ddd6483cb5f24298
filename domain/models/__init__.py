"""
Domain models for LiftLog.

This package contains pure domain models that are independent of
infrastructure concerns (storage, API, file formats).

These models represent the core business concepts:
- Exercise: A catalog entry with muscle groups and equipment
- Workout: The aggregate root containing exercise entries and their sets
- PersonalRecord / PRNotification: Best-ever values and their notices
- ImportResult: What a single file import produced

Usage:
    >>> from domain.models import Workout, ExerciseEntry, WorkoutSet

    >>> # Serialize for the record store
    >>> data = workout.model_dump(mode="json")

    >>> # Deserialize
    >>> workout = Workout.model_validate(data)
"""

from domain.models.exercise import DEFAULT_INSTRUCTIONS, EquipmentType, Exercise, MuscleGroup
from domain.models.ids import new_id
from domain.models.import_result import ImportResult, ImportSource
from domain.models.personal_record import PersonalRecord, PRNotification, RecordType
from domain.models.workout import (
    Difficulty,
    ExerciseEntry,
    ProgressionRecommendation,
    Workout,
    WorkoutSet,
)

__all__ = [
    # Main entities
    "Exercise",
    "Workout",
    "ExerciseEntry",
    "WorkoutSet",
    "PersonalRecord",
    "PRNotification",
    "ImportResult",
    "ProgressionRecommendation",
    # Enums
    "MuscleGroup",
    "EquipmentType",
    "RecordType",
    "ImportSource",
    "Difficulty",
    # Helpers
    "DEFAULT_INSTRUCTIONS",
    "new_id",
]
