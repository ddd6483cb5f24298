"""
Exercises router for the catalog, statistics and progression.

This router provides endpoints for:
- Listing the exercise catalog and looking up single exercises
- Deleting custom exercises (built-ins are protected)
- Per-workout statistics and progress highlights for an exercise
- Next-session progression recommendations
"""
from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel, Field

from api.deps import get_exercise_repo, get_progression_service, get_workout_repo
from application.ports import ExerciseRepository, WorkoutRepository
from backend.core.progression_service import ProgressionService
from backend.core.stats_service import compute_exercise_stats, find_progress_highlights
from domain.models import Exercise, ProgressionRecommendation

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)


# =============================================================================
# Response Models
# =============================================================================


class ExerciseStatResponse(BaseModel):
    """Response model for one workout's stats of an exercise."""
    date: datetime
    volume: float
    max_weight: float
    e1rm: float = Field(..., description="Estimated 1RM (Epley)")
    best_set: str


class ProgressHighlightResponse(BaseModel):
    """Response model for an improvement over all earlier sessions."""
    metric: str
    value: str
    improvement: str


class ExerciseStatsResponse(BaseModel):
    """Response model for exercise statistics."""
    exercise_id: str
    exercise_name: str
    stats: List[ExerciseStatResponse] = Field(default_factory=list)
    highlights: List[ProgressHighlightResponse] = Field(default_factory=list)


class ProgressionResponse(BaseModel):
    """Response model for a progression recommendation."""
    exercise_id: str
    recommendation: Optional[ProgressionRecommendation] = Field(
        None,
        description="Null when there is not enough history yet",
    )


# =============================================================================
# Endpoints
# =============================================================================


async def _get_exercise_or_404(exercise_repo: ExerciseRepository, exercise_id: str) -> Exercise:
    exercise = await exercise_repo.get_by_id(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail=f"Exercise not found: {exercise_id}")
    return exercise


@router.get("", response_model=List[Exercise])
async def list_exercises(
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
):
    """List the exercise catalog sorted by name."""
    exercises = await exercise_repo.get_all()
    return sorted(exercises, key=lambda e: e.name_key)


@router.get("/{exercise_id}", response_model=Exercise)
async def get_exercise(
    exercise_id: str = Path(..., description="Exercise ID"),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
):
    """Get a single exercise by ID."""
    return await _get_exercise_or_404(exercise_repo, exercise_id)


@router.delete("/{exercise_id}")
async def delete_exercise(
    exercise_id: str = Path(..., description="Exercise ID"),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
):
    """Delete a custom exercise. Built-in exercises cannot be deleted."""
    exercise = await _get_exercise_or_404(exercise_repo, exercise_id)
    if not exercise.is_custom:
        raise HTTPException(status_code=409, detail="Built-in exercises cannot be deleted")
    await exercise_repo.delete(exercise_id)
    return {
        "success": True,
        "message": "Exercise deleted successfully",
    }


@router.get("/{exercise_id}/stats", response_model=ExerciseStatsResponse)
async def get_exercise_stats(
    exercise_id: str = Path(..., description="Exercise ID"),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
):
    """
    Get per-workout statistics for an exercise.

    One entry per completed workout with at least one completed set of the exercise,
    ascending by date, plus highlights where the latest session beat every
    earlier one.
    """
    exercise = await _get_exercise_or_404(exercise_repo, exercise_id)
    stats = compute_exercise_stats(await workout_repo.get_completed(), exercise_id)
    return ExerciseStatsResponse(
        exercise_id=exercise_id,
        exercise_name=exercise.name,
        stats=[ExerciseStatResponse(**asdict(s)) for s in stats],
        highlights=[ProgressHighlightResponse(**asdict(h)) for h in find_progress_highlights(stats)],
    )


@router.get("/{exercise_id}/progression", response_model=ProgressionResponse)
async def get_exercise_progression(
    exercise_id: str = Path(..., description="Exercise ID"),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    service: ProgressionService = Depends(get_progression_service),
):
    """Recommend the sets for the next session of an exercise."""
    await _get_exercise_or_404(exercise_repo, exercise_id)
    recommendation = await service.get_progression_recommendations(exercise_id)
    return ProgressionResponse(exercise_id=exercise_id, recommendation=recommendation)
