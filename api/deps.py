"""
FastAPI Dependency Providers for the LiftLog API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and the record store are cached per-process (lru_cache)
- Repository, service and use case providers create new instances per-request;
  they share the cached store and therefore its per-collection locks

Usage in routers:
    from api.deps import get_workout_repo
    from application.ports import WorkoutRepository

    @router.get("/workouts")
    async def list_workouts(
        workout_repo: WorkoutRepository = Depends(get_workout_repo),
    ):
        return await workout_repo.get_all()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_record_store] = lambda: FakeRecordStore()
"""

from functools import lru_cache

from fastapi import Depends

# Protocol types (interfaces)
from application.ports import (
    ExerciseRepository,
    PersonalRecordRepository,
    PRNotificationRepository,
    RecordStore,
    WorkoutRepository,
)

# Concrete implementations
from infrastructure import (
    JsonFileRecordStore,
    StoreExerciseRepository,
    StorePersonalRecordRepository,
    StorePRNotificationRepository,
    StoreWorkoutRepository,
)

from application.use_cases import CompleteWorkoutUseCase, ImportWorkoutsUseCase
from backend.core.personal_record_service import PersonalRecordService
from backend.core.progression_service import ProgressionService
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Record Store Provider
# =============================================================================


@lru_cache
def _record_store_for(data_dir: str) -> JsonFileRecordStore:
    return JsonFileRecordStore(data_dir)


def get_record_store(settings: Settings = Depends(get_settings)) -> RecordStore:
    """
    Get the record store (one instance per data directory).

    Returns:
        RecordStore: JSON file store rooted at settings.data_dir
    """
    return _record_store_for(str(settings.data_dir))


# =============================================================================
# Repository Providers
# =============================================================================


def get_exercise_repo(
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> ExerciseRepository:
    """
    Get exercise repository instance.

    Returns:
        ExerciseRepository: Implementation of ExerciseRepository protocol
    """
    return StoreExerciseRepository(store, seed_defaults=settings.seed_default_exercises)


def get_workout_repo(store: RecordStore = Depends(get_record_store)) -> WorkoutRepository:
    """
    Get workout repository instance.

    Returns:
        WorkoutRepository: Implementation of WorkoutRepository protocol
    """
    return StoreWorkoutRepository(store)


def get_personal_record_repo(
    store: RecordStore = Depends(get_record_store),
) -> PersonalRecordRepository:
    """
    Get personal record repository instance.

    Returns:
        PersonalRecordRepository: Implementation of PersonalRecordRepository protocol
    """
    return StorePersonalRecordRepository(store)


def get_pr_notification_repo(
    store: RecordStore = Depends(get_record_store),
) -> PRNotificationRepository:
    """
    Get PR notification repository instance.

    Returns:
        PRNotificationRepository: Implementation of PRNotificationRepository protocol
    """
    return StorePRNotificationRepository(store)


# =============================================================================
# Service Providers
# =============================================================================


def get_pr_service(
    record_repo: PersonalRecordRepository = Depends(get_personal_record_repo),
    notification_repo: PRNotificationRepository = Depends(get_pr_notification_repo),
) -> PersonalRecordService:
    """Get the personal record service."""
    return PersonalRecordService(record_repo, notification_repo)


def get_progression_service(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
) -> ProgressionService:
    """Get the progression service."""
    return ProgressionService(workout_repo)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_import_workouts_use_case(
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    settings: Settings = Depends(get_settings),
) -> ImportWorkoutsUseCase:
    """
    Get ImportWorkoutsUseCase instance.

    Returns:
        ImportWorkoutsUseCase: Use case for importing third-party exports
    """
    return ImportWorkoutsUseCase(
        exercise_repo,
        workout_repo,
        max_bytes=settings.max_import_bytes,
    )


def get_complete_workout_use_case(
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    pr_service: PersonalRecordService = Depends(get_pr_service),
) -> CompleteWorkoutUseCase:
    """
    Get CompleteWorkoutUseCase instance.

    Returns:
        CompleteWorkoutUseCase: Use case for completing workouts
    """
    return CompleteWorkoutUseCase(workout_repo, pr_service)


__all__ = [
    # Settings
    "get_settings",
    # Storage
    "get_record_store",
    # Repositories
    "get_exercise_repo",
    "get_workout_repo",
    "get_personal_record_repo",
    "get_pr_notification_repo",
    # Services
    "get_pr_service",
    "get_progression_service",
    # Use Cases
    "get_import_workouts_use_case",
    "get_complete_workout_use_case",
]
