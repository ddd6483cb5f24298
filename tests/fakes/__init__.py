"""
Fakes and Factories for Testing.

This package provides in-memory fake implementations of the RecordStore
protocol plus factory functions for domain objects. Repositories under test
are the real record-store repositories wired to a fake store.

Features:
- Fakes implement the same Protocol interface as the JSON file store
- Supports seeding and direct inspection of collections
- Failure injection for StorageError paths

Usage:
    from tests.fakes import FakeRecordStore, make_workout, make_set

    store = FakeRecordStore()
    repo = StoreWorkoutRepository(store)
    await repo.save(make_workout(entries=[make_entry(sets=[make_set(135, 5)])]))
"""
from datetime import datetime, timezone
from typing import List, Optional

from domain.models import (
    EquipmentType,
    Exercise,
    ExerciseEntry,
    MuscleGroup,
    Workout,
    WorkoutSet,
)
from tests.fakes.record_store import FailingRecordStore, FakeRecordStore


# =============================================================================
# Factory Functions
# =============================================================================


def make_exercise(
    name: str = "Bench Press",
    *,
    exercise_id: Optional[str] = None,
    is_custom: bool = True,
) -> Exercise:
    """Create a catalog exercise with chest/barbell taxonomy."""
    kwargs = {"id": exercise_id} if exercise_id else {}
    return Exercise(
        name=name,
        primary_muscle_groups=[MuscleGroup.CHEST],
        equipment=[EquipmentType.BARBELL],
        is_custom=is_custom,
        **kwargs,
    )


def make_set(
    weight: float = 100,
    reps: int = 5,
    *,
    rpe: Optional[float] = None,
    is_completed: bool = True,
) -> WorkoutSet:
    """Create a set, completed unless told otherwise."""
    return WorkoutSet(weight=weight, reps=reps, rpe=rpe, is_completed=is_completed)


def make_entry(
    exercise: Optional[Exercise] = None,
    sets: Optional[List[WorkoutSet]] = None,
) -> ExerciseEntry:
    """Create an exercise entry for `exercise` (default: Bench Press)."""
    exercise = exercise or make_exercise()
    return ExerciseEntry(exercise_id=exercise.id, exercise=exercise, sets=sets or [])


def make_workout(
    entries: Optional[List[ExerciseEntry]] = None,
    *,
    name: str = "Test Workout",
    date: Optional[datetime] = None,
    is_completed: bool = True,
) -> Workout:
    """Create a workout dated 2024-01-01 UTC unless a date is given."""
    return Workout(
        name=name,
        date=date or datetime(2024, 1, 1, tzinfo=timezone.utc),
        exercises=entries or [],
        is_completed=is_completed,
    )


__all__ = [
    # Stores
    "FakeRecordStore",
    "FailingRecordStore",
    # Factories
    "make_exercise",
    "make_set",
    "make_entry",
    "make_workout",
]
