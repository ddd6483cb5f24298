"""
Intermediate schemas for third-party workout exports.

Foreign payloads are validated into these types at the parser boundary,
before any core logic touches them:

- HevyExport / StrongExport: JSON exports with `exercises[]` and `workouts[]`
- LiftinRow: one data line of a Liftin' CSV export

Unknown keys are ignored. Field names follow the exporters' camelCase via
aliases.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.timestamps import as_utc

logger = logging.getLogger(__name__)

# Epoch values above this are taken as milliseconds
EPOCH_MS_THRESHOLD = 100_000_000_000

LIFTIN_DATE_FORMATS = ("%m/%d/%Y", "%Y/%m/%d")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an exporter timestamp.

    Accepts ISO-8601 strings (with or without time, `Z` suffix allowed),
    a few common date layouts, and Unix epochs in seconds or milliseconds.

    Returns:
        The parsed datetime, or None if the value is missing or unparseable
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > EPOCH_MS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        try:
            return as_utc(datetime.fromisoformat(text))
        except ValueError:
            pass
        for fmt in LIFTIN_DATE_FORMATS:
            try:
                return as_utc(datetime.strptime(text, fmt))
            except ValueError:
                continue
    return None


class _ForeignModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)


class ForeignSet(_ForeignModel):
    """A set as exported by Hevy or Strong."""
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    rpe: Optional[float] = None
    notes: Optional[str] = None

    @field_validator("rpe", mode="before")
    @classmethod
    def lenient_rpe(cls, v: Any) -> Optional[float]:
        if v is None or v == "" or isinstance(v, bool):
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric RPE: {v!r}")
            return None


class ForeignExerciseEntry(_ForeignModel):
    """An exercise performed inside an exported workout."""
    name: str = Field(..., min_length=1)
    notes: Optional[str] = None
    sets: List[ForeignSet] = Field(default_factory=list)

    @field_validator("sets", mode="before")
    @classmethod
    def null_sets(cls, v: Any) -> Any:
        return [] if v is None else v


class ForeignWorkout(_ForeignModel):
    """A workout as exported by Hevy or Strong."""
    name: Optional[str] = None
    start_time: Optional[datetime] = Field(default=None, alias="startTime")
    date: Optional[datetime] = None
    duration: Optional[float] = Field(default=None, ge=0, description="Seconds")
    notes: Optional[str] = None
    exercises: List[ForeignExerciseEntry] = Field(default_factory=list)

    @field_validator("start_time", "date", mode="before")
    @classmethod
    def lenient_timestamp(cls, v: Any) -> Optional[datetime]:
        parsed = parse_timestamp(v)
        if parsed is None and v not in (None, ""):
            logger.warning(f"Ignoring unparseable workout timestamp: {v!r}")
        return parsed

    @field_validator("exercises", mode="before")
    @classmethod
    def null_exercises(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def performed_at(self) -> Optional[datetime]:
        return self.start_time or self.date

    @property
    def duration_minutes(self) -> Optional[int]:
        if self.duration is None:
            return None
        return int(self.duration // 60)


class ForeignExercise(_ForeignModel):
    """An exercise definition from an export's `exercises[]` list."""
    name: str = Field(..., min_length=1)
    primary_muscles: List[str] = Field(default_factory=list, alias="primaryMuscles")
    secondary_muscles: List[str] = Field(default_factory=list, alias="secondaryMuscles")
    equipment: Union[str, List[str], None] = None
    instructions: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("primary_muscles", "secondary_muscles", mode="before")
    @classmethod
    def null_muscles(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def equipment_labels(self) -> List[str]:
        if self.equipment is None:
            return []
        if isinstance(self.equipment, str):
            return [self.equipment]
        return list(self.equipment)


class JsonWorkoutExport(_ForeignModel):
    """Fields shared by the JSON exports."""
    exercises: List[ForeignExercise] = Field(default_factory=list)
    workouts: List[ForeignWorkout] = Field(default_factory=list)

    @field_validator("exercises", "workouts", mode="before")
    @classmethod
    def null_lists(cls, v: Any) -> Any:
        return [] if v is None else v


class HevyExport(JsonWorkoutExport):
    """Hevy export: identified by its `routines` key."""
    routines: Any = None


class StrongExport(JsonWorkoutExport):
    """Strong export: identified by `exportedFromApp` or `measurements`."""
    exported_from_app: Optional[str] = Field(default=None, alias="exportedFromApp")
    measurements: Any = None


class LiftinRow(BaseModel):
    """One data line of a Liftin' CSV: date,exercise,set,weight,reps,rpe?"""
    line_number: int
    date_label: str = Field(..., min_length=1, description="Raw date column, used for grouping")
    performed_at: datetime
    exercise_name: str = Field(..., min_length=1)
    set_number: Optional[int] = None
    weight: float = Field(..., ge=0)
    reps: int = Field(..., ge=0)
    rpe: Optional[float] = None
