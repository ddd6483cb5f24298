"""
Workout aggregate and its children.

A Workout is created empty (or from an import), filled in while incomplete,
then marked completed exactly once. Completed workouts are treated as
history: PR detection and progression only look at completed workouts,
and every derived metric counts completed sets only.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.exercise import Exercise
from domain.models.ids import new_id
from domain.models.timestamps import as_utc


class WorkoutSet(BaseModel):
    """A single set: reps at a weight, optionally rated by RPE (1-10)."""

    id: str = Field(default_factory=new_id)
    reps: int = Field(default=0, ge=0)
    weight: float = Field(default=0, ge=0, description="Load in the user's unit (lbs by default)")
    rpe: Optional[float] = Field(default=None, ge=1, le=10, description="Rating of perceived exertion")
    is_completed: bool = False
    notes: Optional[str] = None

    @property
    def volume(self) -> float:
        return self.weight * self.reps


class ExerciseEntry(BaseModel):
    """One exercise performed within a workout, with its ordered sets."""

    id: str = Field(default_factory=new_id)
    exercise_id: str
    exercise: Exercise = Field(..., description="Denormalized copy of the catalog entry")
    sets: List[WorkoutSet] = Field(default_factory=list)
    notes: Optional[str] = None

    @property
    def completed_sets(self) -> List[WorkoutSet]:
        return [s for s in self.sets if s.is_completed]

    @property
    def has_completed_sets(self) -> bool:
        return any(s.is_completed for s in self.sets)


class Workout(BaseModel):
    """
    Aggregate root for a training session.

    Examples:
        >>> workout = Workout(name="Push Day", date=datetime(2024, 1, 1))
        >>> workout.is_completed
        False
    """

    id: str = Field(default_factory=new_id)
    name: str
    date: datetime
    exercises: List[ExerciseEntry] = Field(default_factory=list)
    duration: Optional[int] = Field(default=None, ge=0, description="Duration in minutes")
    notes: Optional[str] = None
    is_completed: bool = False

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        """Store every workout date as an aware (UTC if unspecified) datetime."""
        return as_utc(v)

    def entry_for(self, exercise_id: str) -> Optional[ExerciseEntry]:
        """Return the first entry for `exercise_id`, if the workout contains it."""
        return next((e for e in self.exercises if e.exercise_id == exercise_id), None)


class Difficulty(str, Enum):
    """Direction of a progression recommendation relative to the last session."""

    EASIER = "easier"
    SAME = "same"
    HARDER = "harder"


class ProgressionRecommendation(BaseModel):
    """Suggested sets for the next session of an exercise."""

    exercise_id: str
    exercise_name: str
    suggested_sets: List[WorkoutSet]
    reasoning: str
    difficulty: Difficulty
