"""
Progression Service for next-session recommendations.

Given an exercise's history, suggests the sets for the next session with a
fixed heuristic based on the most recent completed entry:

- all sets completed and average RPE < 8: +5% weight
- all sets completed and average RPE >= 8: same weight
- otherwise: -5% weight

Changed weights are rounded to the nearest 2.5 (halves up). Missing RPE
values count as 0 in the average.
"""
import logging
from typing import List, Optional

from application.ports import WorkoutRepository
from backend.core.stats_service import WEIGHT_UNIT, format_number, round_half_up
from domain.models import (
    Difficulty,
    ExerciseEntry,
    ProgressionRecommendation,
    WorkoutSet,
    new_id,
)

logger = logging.getLogger(__name__)

MIN_HISTORY_ENTRIES = 2
RPE_CEILING = 8.0
INCREASE_FACTOR = 1.05
DECREASE_FACTOR = 0.95
WEIGHT_STEP = 2.5


def _average_rpe(sets: List[WorkoutSet]) -> float:
    if not sets:
        return 0.0
    return sum(s.rpe or 0 for s in sets) / len(sets)


def _suggest_sets(entry: ExerciseEntry) -> List[WorkoutSet]:
    completed = entry.completed_sets
    all_reps_completed = all(s.is_completed for s in entry.sets)
    average_rpe = _average_rpe(completed)

    if all_reps_completed and average_rpe < RPE_CEILING:
        factor = INCREASE_FACTOR
    elif all_reps_completed:
        factor = None
    else:
        factor = DECREASE_FACTOR

    suggested = []
    for s in completed:
        weight = s.weight if factor is None else round_half_up(s.weight * factor, WEIGHT_STEP)
        suggested.append(s.model_copy(update={
            "id": new_id(),
            "weight": weight,
            "is_completed": False,
        }))
    return suggested


def _reasoning(weight_delta: float) -> str:
    if weight_delta > 0:
        return (
            "Based on your last workout's performance, we've increased the weight "
            f"by {format_number(weight_delta)} {WEIGHT_UNIT}."
        )
    if weight_delta < 0:
        return (
            "To ensure good form and progress, we've slightly reduced the weight "
            f"by {format_number(abs(weight_delta))} {WEIGHT_UNIT}."
        )
    return (
        "Based on your last workout, we recommend maintaining the same weight "
        "to continue building strength."
    )


def _difficulty(total_delta: float) -> Difficulty:
    if total_delta > 0:
        return Difficulty.HARDER
    if total_delta < 0:
        return Difficulty.EASIER
    return Difficulty.SAME


class ProgressionService:
    """
    Service for progression recommendations.

    Recommendations are advisory: insufficient history and failures both
    produce None.
    """

    def __init__(self, workout_repo: WorkoutRepository):
        """
        Initialize the progression service.

        Args:
            workout_repo: Repository for workout history
        """
        self._workout_repo = workout_repo

    async def get_exercise_history(self, exercise_id: str) -> List[ExerciseEntry]:
        """
        Get entries for an exercise from completed workouts, most recent first.

        Only entries with at least one completed set are included.
        """
        workouts = await self._workout_repo.get_completed()
        workouts.sort(key=lambda w: w.date, reverse=True)

        history = []
        for workout in workouts:
            entry = workout.entry_for(exercise_id)
            if entry is not None and entry.has_completed_sets:
                history.append(entry)
        return history

    async def get_progression_recommendations(
        self,
        exercise_id: str,
    ) -> Optional[ProgressionRecommendation]:
        """
        Recommend the sets for the next session of an exercise.

        Args:
            exercise_id: Exercise to recommend for

        Returns:
            ProgressionRecommendation, or None with fewer than 2 historical
            entries or if the history could not be read
        """
        try:
            history = await self.get_exercise_history(exercise_id)
        except Exception:
            logger.exception(f"Could not load history for exercise {exercise_id}")
            return None

        if len(history) < MIN_HISTORY_ENTRIES:
            logger.debug(
                f"Not enough history for exercise {exercise_id}: {len(history)} entries"
            )
            return None

        latest = history[0]
        latest_sets = latest.completed_sets
        suggested = _suggest_sets(latest)
        deltas = [new.weight - old.weight for new, old in zip(suggested, latest_sets)]

        return ProgressionRecommendation(
            exercise_id=exercise_id,
            exercise_name=latest.exercise.name,
            suggested_sets=suggested,
            reasoning=_reasoning(deltas[0]),
            difficulty=_difficulty(sum(deltas)),
        )
