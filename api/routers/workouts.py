"""
Workouts router for workout logging and completion.

This router contains endpoints for:
- /workouts - List and create workouts
- /workouts/{workout_id} - Get, delete workout
- /workouts/{workout_id}/complete - Complete a workout and detect PRs
- /workouts/{workout_id}/stats - Totals over completed sets
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import get_complete_workout_use_case, get_exercise_repo, get_workout_repo
from application.ports import ExerciseRepository, WorkoutRepository
from application.use_cases import CompleteWorkoutUseCase
from backend.core.stats_service import compute_workout_stats
from domain.models import ExerciseEntry, PersonalRecord, Workout

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateWorkoutRequest(BaseModel):
    """Request for logging a new, not yet completed workout."""
    name: str = Field(..., min_length=1)
    date: Optional[datetime] = None
    exercises: List[ExerciseEntry] = Field(default_factory=list)
    duration: Optional[int] = Field(default=None, ge=0, description="Minutes")
    notes: Optional[str] = None


class CompleteWorkoutResponse(BaseModel):
    """Completed workout plus the personal records it set."""
    workout: Workout
    new_records: List[PersonalRecord] = Field(default_factory=list)


class WorkoutStatsResponse(BaseModel):
    """Totals over the completed sets of a workout."""
    workout_id: str
    total_volume: float
    completed_sets: int
    total_reps: int
    exercise_count: int


# =============================================================================
# Endpoints
# =============================================================================


async def _resolve_entries(
    entries: List[ExerciseEntry],
    exercise_repo: ExerciseRepository,
) -> List[ExerciseEntry]:
    """Check each entry against the catalog and refresh its embedded exercise."""
    if not entries:
        return []
    catalog = {exercise.id: exercise for exercise in await exercise_repo.get_all()}
    resolved = []
    for entry in entries:
        exercise = catalog.get(entry.exercise_id)
        if exercise is None:
            raise HTTPException(status_code=422, detail=f"Exercise not found: {entry.exercise_id}")
        resolved.append(entry.model_copy(update={"exercise": exercise}))
    return resolved


@router.get("", response_model=List[Workout])
async def list_workouts(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Most recent N workouts"),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
):
    """List workouts, most recent first."""
    if limit is not None:
        return await workout_repo.get_recent(limit)
    workouts = await workout_repo.get_all()
    return sorted(workouts, key=lambda w: w.date, reverse=True)


@router.post("", response_model=Workout, status_code=201)
async def create_workout(
    request: CreateWorkoutRequest,
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
):
    """
    Log a new workout. Workouts start incomplete.

    Every entry must reference a catalog exercise; its embedded copy is
    replaced with the stored one. Unknown exercises return 422.
    """
    workout = Workout(
        name=request.name,
        date=request.date or datetime.now(timezone.utc),
        exercises=await _resolve_entries(request.exercises, exercise_repo),
        duration=request.duration,
        notes=request.notes,
    )
    saved = await workout_repo.save(workout)
    logger.info(f"Workout created: {saved.id}")
    return saved


@router.get("/{workout_id}", response_model=Workout)
async def get_workout(
    workout_id: str,
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
):
    """Get a single workout."""
    workout = await workout_repo.get_by_id(workout_id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.get("/{workout_id}/stats", response_model=WorkoutStatsResponse)
async def get_workout_stats(
    workout_id: str,
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
):
    """Get volume, set and rep totals for a workout."""
    workout = await workout_repo.get_by_id(workout_id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    stats = compute_workout_stats(workout)
    return WorkoutStatsResponse(
        workout_id=workout_id,
        total_volume=stats.total_volume,
        completed_sets=stats.completed_sets,
        total_reps=stats.total_reps,
        exercise_count=stats.exercise_count,
    )


@router.post("/{workout_id}/complete", response_model=CompleteWorkoutResponse)
async def complete_workout(
    workout_id: str,
    use_case: CompleteWorkoutUseCase = Depends(get_complete_workout_use_case),
):
    """
    Mark a workout completed and detect personal records.

    Returns 404 for an unknown workout and 409 if it was already completed.
    """
    result = await use_case.execute(workout_id)
    return CompleteWorkoutResponse(workout=result.workout, new_records=result.new_records)


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: str,
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
):
    """Delete a workout."""
    if not await workout_repo.delete(workout_id):
        raise HTTPException(status_code=404, detail="Workout not found")
    return {
        "success": True,
        "message": "Workout deleted successfully",
    }
