"""
Record store implementation of ExerciseRepository.

The catalog is seeded with the built-in exercises the first time the
collection is read and found missing.
"""
import logging
from typing import List, Optional

from application.ports.record_store import RecordStore
from domain.models import Exercise
from infrastructure.repositories.base import StoreCollection
from shared.dictionaries import load_dictionary

logger = logging.getLogger(__name__)

EXERCISES_KEY = "exercises"


def default_exercises() -> List[Exercise]:
    """Build the built-in catalog with fresh ids."""
    return [
        Exercise(**entry, is_custom=False)
        for entry in load_dictionary("default_exercises")
    ]


class StoreExerciseRepository(StoreCollection[Exercise]):
    """
    RecordStore implementation of ExerciseRepository protocol.

    Built-in exercises (`is_custom=False`) are protected from deletion.
    """

    key = EXERCISES_KEY
    model = Exercise

    def __init__(self, store: RecordStore, *, seed_defaults: bool = True):
        """
        Initialize with a record store.

        Args:
            store: RecordStore instance
            seed_defaults: Seed the built-in catalog when the collection is missing
        """
        super().__init__(store)
        self._seed_defaults = seed_defaults

    async def get_all(self) -> List[Exercise]:
        exercises = await self._load()
        if exercises is not None or not self._seed_defaults:
            return exercises or []

        async with self._lock:
            # Another writer may have seeded while we waited
            exercises = await self._load()
            if exercises is None:
                exercises = default_exercises()
                await self._write(exercises)
                logger.info(f"Seeded exercise catalog with {len(exercises)} built-in exercises")
        return exercises

    async def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        return next((e for e in await self.get_all() if e.id == exercise_id), None)

    async def find_by_name(self, name: str) -> Optional[Exercise]:
        return next((e for e in await self.get_all() if e.matches_name(name)), None)

    async def save(self, exercise: Exercise) -> Exercise:
        await self.get_all()
        return await self._upsert(exercise)

    async def save_many(self, exercises: List[Exercise]) -> List[Exercise]:
        if not exercises:
            return []
        await self.get_all()
        return await self._upsert_many(exercises)

    async def delete(self, exercise_id: str) -> bool:
        exercise = await self.get_by_id(exercise_id)
        if exercise is None:
            return False
        if not exercise.is_custom:
            logger.warning(f"Refusing to delete built-in exercise '{exercise.name}'")
            return False
        return await self._delete_by_id(exercise_id)
