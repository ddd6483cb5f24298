"""
Import outcome types.

ImportResult is ephemeral: it describes what a single file import produced
and is never persisted itself.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from domain.models.exercise import Exercise
from domain.models.workout import Workout


class ImportSource(str, Enum):
    """Third-party apps whose exports can be imported."""

    HEVY = "hevy"
    STRONG = "strong"
    LIFTIN = "liftin"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    ImportSource.HEVY: "Hevy",
    ImportSource.STRONG: "Strong",
    ImportSource.LIFTIN: "Liftin'",
    ImportSource.UNKNOWN: "Unknown",
}


class ImportResult(BaseModel):
    """Workouts and newly created exercises produced by one import."""

    workouts: List[Workout] = Field(default_factory=list)
    exercises: List[Exercise] = Field(default_factory=list)
    source: str
