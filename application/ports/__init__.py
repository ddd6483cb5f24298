"""
Repository Interfaces (Ports) for LiftLog.

This package defines abstract interfaces that decouple domain logic from
infrastructure (local storage, files). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutRepository, PersonalRecordRepository

    class ProgressionService:
        def __init__(self, workout_repo: WorkoutRepository):
            self.workout_repo = workout_repo

        async def history(self):
            return await self.workout_repo.get_all()
"""

# Key-value storage
from application.ports.record_store import RecordStore

# Exercise catalog
from application.ports.exercise_repository import ExerciseRepository

# Workout persistence
from application.ports.workout_repository import WorkoutRepository

# Personal records
from application.ports.personal_record_repository import (
    PersonalRecordRepository,
    PRNotificationRepository,
)

__all__ = [
    # Storage
    "RecordStore",
    # Catalog
    "ExerciseRepository",
    # Workout
    "WorkoutRepository",
    # Personal records
    "PersonalRecordRepository",
    "PRNotificationRepository",
]
