"""
CompleteWorkout Use Case.

Marks a logged workout as completed and runs PR detection on it. Completing
is one-way and must always succeed on its own; PR detection is advisory and
only ever adds to the result.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from application.exceptions import WorkoutAlreadyCompletedError, WorkoutNotFoundError
from application.ports import WorkoutRepository
from backend.core.personal_record_service import PersonalRecordService
from domain.models import PersonalRecord, Workout

logger = logging.getLogger(__name__)


@dataclass
class CompleteWorkoutResult:
    """Result of the CompleteWorkout use case execution."""

    workout: Workout
    new_records: List[PersonalRecord] = field(default_factory=list)


class CompleteWorkoutUseCase:
    """
    Use case for completing a workout.

    Usage:
        >>> use_case = CompleteWorkoutUseCase(workout_repo, pr_service)
        >>> result = await use_case.execute("workout-123")
        >>> if result.new_records:
        ...     print(f"{len(result.new_records)} new PRs!")
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        pr_service: PersonalRecordService,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            workout_repo: Repository for workouts
            pr_service: Service for PR detection
        """
        self._workout_repo = workout_repo
        self._pr_service = pr_service

    async def execute(self, workout_id: str) -> CompleteWorkoutResult:
        """
        Complete a stored workout.

        Args:
            workout_id: Workout to complete

        Returns:
            CompleteWorkoutResult with the saved workout and any new PRs

        Raises:
            WorkoutNotFoundError: If no workout has this id
            WorkoutAlreadyCompletedError: If the workout was completed before
        """
        workout = await self._workout_repo.get_by_id(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(workout_id)
        if workout.is_completed:
            raise WorkoutAlreadyCompletedError(workout_id)

        completed = workout.model_copy(update={"is_completed": True})
        await self._workout_repo.save(completed)
        logger.info(f"Workout completed: {workout_id}")

        new_records = await self._pr_service.check_for_personal_records(completed)
        return CompleteWorkoutResult(workout=completed, new_records=new_records)
