"""
API package for the LiftLog API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_record_store,
    get_exercise_repo,
    get_workout_repo,
    get_personal_record_repo,
    get_pr_notification_repo,
    get_pr_service,
    get_progression_service,
    get_import_workouts_use_case,
    get_complete_workout_use_case,
)

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
