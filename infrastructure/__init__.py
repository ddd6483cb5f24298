"""
Infrastructure Layer for LiftLog.

This package contains concrete implementations of repository interfaces:
- storage/: RecordStore adapters (JSON files) and per-collection locks
- repositories/: Entity repositories built on a RecordStore
"""

from infrastructure.repositories import (
    StoreExerciseRepository,
    StorePersonalRecordRepository,
    StorePRNotificationRepository,
    StoreWorkoutRepository,
)
from infrastructure.storage import JsonFileRecordStore

__all__ = [
    "JsonFileRecordStore",
    "StoreExerciseRepository",
    "StoreWorkoutRepository",
    "StorePersonalRecordRepository",
    "StorePRNotificationRepository",
]
