"""
Application Use Cases for LiftLog.

This package contains use case classes that orchestrate business operations
across services and repositories.

Use cases follow the Clean Architecture pattern:
- Depend on abstractions (ports), not implementations
- Orchestrate domain logic and persistence
- Are independent of delivery mechanism (API, CLI)

Usage:
    from application.use_cases import ImportWorkoutsUseCase

    use_case = ImportWorkoutsUseCase(exercise_repo=exercise_repo, workout_repo=workout_repo)
    result = await use_case.import_from_file("strong_export.json")
"""

from application.use_cases.complete_workout import (
    CompleteWorkoutResult,
    CompleteWorkoutUseCase,
)
from application.use_cases.import_workouts import ImportWorkoutsUseCase

__all__ = [
    # Import
    "ImportWorkoutsUseCase",
    # Completion
    "CompleteWorkoutUseCase",
    "CompleteWorkoutResult",
]
