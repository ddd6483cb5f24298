"""
Imports router for third-party workout history.

This router provides endpoints for:
- /imports - Upload a Hevy JSON, Strong JSON or Liftin' CSV export

Import failures are raised as application exceptions and mapped to HTTP
responses by the handlers registered in backend.main.
"""

import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel, Field

from api.deps import get_import_workouts_use_case
from application.use_cases import ImportWorkoutsUseCase
from domain.models import Exercise, ImportResult

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/imports",
    tags=["Imports"],
)


# =============================================================================
# Response Models
# =============================================================================


class ImportedWorkoutSummary(BaseModel):
    """One imported workout, without its sets."""
    id: str
    name: str
    date: datetime
    exercise_count: int


class ImportResponse(BaseModel):
    """Summary of a completed import."""
    source: str = Field(..., description="App the file was exported from")
    workout_count: int
    exercise_count: int = Field(..., description="Exercises added to the catalog")
    workouts: List[ImportedWorkoutSummary] = Field(default_factory=list)
    exercises: List[Exercise] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ImportResult) -> "ImportResponse":
        return cls(
            source=result.source,
            workout_count=len(result.workouts),
            exercise_count=len(result.exercises),
            workouts=[
                ImportedWorkoutSummary(
                    id=w.id,
                    name=w.name,
                    date=w.date,
                    exercise_count=len(w.exercises),
                )
                for w in result.workouts
            ],
            exercises=result.exercises,
        )


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "",
    response_model=ImportResponse,
    status_code=201,
    summary="Import workout history",
    description="Upload an export from Hevy (JSON), Strong (JSON) or Liftin' (CSV)",
)
async def import_workouts(
    file: UploadFile = File(..., description="Exported workout history"),
    use_case: ImportWorkoutsUseCase = Depends(get_import_workouts_use_case),
):
    """
    Detect the file's format, import its workouts and any new exercises.

    Returns:
        ImportResponse with counts, workout summaries and created exercises
    """
    content = await file.read()
    logger.info(f"Import requested: {file.filename} ({len(content)} bytes)")
    result = await use_case.import_from_content(content)
    return ImportResponse.from_result(result)
