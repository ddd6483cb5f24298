"""
Router package for the LiftLog API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- imports: Third-party workout history import
- workouts: Workout logging, completion and totals
- exercises: Exercise catalog, statistics and progression
- personal_records: Current bests and PR notifications
"""

from api.routers.health import router as health_router
from api.routers.imports import router as imports_router
from api.routers.workouts import router as workouts_router
from api.routers.exercises import router as exercises_router
from api.routers.personal_records import router as personal_records_router

__all__ = [
    "health_router",
    "imports_router",
    "workouts_router",
    "exercises_router",
    "personal_records_router",
]
