"""
Record store implementation of WorkoutRepository.
"""
from typing import List, Optional

from domain.models import Workout
from infrastructure.repositories.base import StoreCollection

WORKOUTS_KEY = "workouts"


class StoreWorkoutRepository(StoreCollection[Workout]):
    """RecordStore implementation of WorkoutRepository protocol."""

    key = WORKOUTS_KEY
    model = Workout

    async def get_all(self) -> List[Workout]:
        return await self._list()

    async def get_completed(self) -> List[Workout]:
        return [w for w in await self._list() if w.is_completed]

    async def get_recent(self, limit: int) -> List[Workout]:
        workouts = sorted(await self._list(), key=lambda w: w.date, reverse=True)
        return workouts[:limit]

    async def get_by_id(self, workout_id: str) -> Optional[Workout]:
        return await self._find(lambda w: w.id == workout_id)

    async def save(self, workout: Workout) -> Workout:
        return await self._upsert(workout)

    async def delete(self, workout_id: str) -> bool:
        return await self._delete_by_id(workout_id)
