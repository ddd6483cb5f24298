"""
Personal record entities.

Older records for the same (exercise, type) pair are kept as history; the
current best is the maximum value among them, not the latest one inserted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.ids import new_id
from domain.models.timestamps import as_utc


class RecordType(str, Enum):
    """What a personal record measures."""

    WEIGHT = "weight"
    REPS = "reps"
    VOLUME = "volume"
    TIME = "time"  # modeled, not produced by PR detection yet


class PersonalRecord(BaseModel):
    """A best-ever value for one exercise and record type."""

    id: str = Field(default_factory=new_id)
    exercise_id: str
    exercise_name: str
    value: float
    type: RecordType
    date: datetime
    workout_id: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return as_utc(v)


class PRNotification(BaseModel):
    """User-facing notice created alongside each new personal record."""

    id: str = Field(default_factory=new_id)
    pr_id: str
    exercise_name: str
    improvement: str = Field(..., description="Formatted delta, e.g. '+5 lbs'")
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_read: bool = False
