"""
Exercise Repository Interface (Port).

This module defines the abstract interface for the exercise catalog.
Used by the import use case for reconciliation and by the API for listing.
"""
from typing import List, Optional, Protocol

from domain.models import Exercise


class ExerciseRepository(Protocol):
    """
    Abstract interface for exercise catalog persistence.

    The catalog is seeded with the built-in exercises on first access.
    """

    async def get_all(self) -> List[Exercise]:
        """
        Get the whole catalog, seeding built-in exercises if needed.

        Returns:
            List of exercises in storage order
        """
        ...

    async def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        """
        Get an exercise by ID.

        Args:
            exercise_id: Exercise ID

        Returns:
            Exercise or None if not found
        """
        ...

    async def find_by_name(self, name: str) -> Optional[Exercise]:
        """
        Find an exercise by case-insensitive exact name.

        Args:
            name: Exercise name

        Returns:
            Exercise or None if not found
        """
        ...

    async def save(self, exercise: Exercise) -> Exercise:
        """
        Create or replace an exercise (matched by id).

        Args:
            exercise: Exercise to store

        Returns:
            The stored exercise
        """
        ...

    async def save_many(self, exercises: List[Exercise]) -> List[Exercise]:
        """
        Create or replace several exercises in one write.

        Args:
            exercises: Exercises to store

        Returns:
            The stored exercises
        """
        ...

    async def delete(self, exercise_id: str) -> bool:
        """
        Delete a custom exercise. Built-in exercises are never deleted.

        Args:
            exercise_id: Exercise ID

        Returns:
            True if an exercise was deleted
        """
        ...
