"""
Workout Repository Interface (Port).

This module defines the abstract interface for workout persistence operations.
Implementations may use a local record store, in-memory storage, or other backends.
"""
from typing import List, Optional, Protocol

from domain.models import Workout


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout persistence operations.

    Domain types are used instead of storage-specific types to maintain
    clean architecture boundaries.
    """

    async def get_all(self) -> List[Workout]:
        """
        Get every stored workout.

        Returns:
            List of workouts in storage order
        """
        ...

    async def get_completed(self) -> List[Workout]:
        """
        Get the workouts that have been marked completed.

        Returns:
            Completed workouts in storage order
        """
        ...

    async def get_recent(self, limit: int) -> List[Workout]:
        """
        Get the most recent workouts by date.

        Args:
            limit: Maximum number of workouts to return

        Returns:
            Workouts ordered by date descending
        """
        ...

    async def get_by_id(self, workout_id: str) -> Optional[Workout]:
        """
        Get a single workout by ID.

        Args:
            workout_id: Workout ID

        Returns:
            Workout or None if not found
        """
        ...

    async def save(self, workout: Workout) -> Workout:
        """
        Create or replace a workout (matched by id).

        Args:
            workout: Workout to store

        Returns:
            The stored workout
        """
        ...

    async def delete(self, workout_id: str) -> bool:
        """
        Delete a workout.

        Args:
            workout_id: Workout ID

        Returns:
            True if a workout was deleted
        """
        ...
