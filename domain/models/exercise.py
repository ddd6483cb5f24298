"""
Exercise catalog entity and its closed taxonomies.

Exercises are identified by `id`. For import purposes, uniqueness is enforced
by case-insensitive name match against the existing catalog (see
backend.core.reconciler).
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator

from domain.models.ids import new_id


class MuscleGroup(str, Enum):
    """Muscle groups an exercise can target."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    CALVES = "calves"
    GLUTES = "glutes"
    ABDOMINALS = "abdominals"
    OBLIQUES = "obliques"
    TRAPS = "traps"
    LATS = "lats"


class EquipmentType(str, Enum):
    """Equipment an exercise can be performed with."""

    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    KETTLEBELL = "kettlebell"
    MACHINE = "machine"
    CABLE = "cable"
    BODYWEIGHT = "bodyweight"
    RESISTANCE_BAND = "resistance band"
    OTHER = "other"


DEFAULT_INSTRUCTIONS = "No instructions available."


class Exercise(BaseModel):
    """
    An exercise in the catalog.

    `is_custom=False` marks built-in entries, which cannot be deleted.
    Muscle groups and equipment are stored as de-duplicated lists that keep
    the order in which they were first seen.

    Examples:
        >>> exercise = Exercise(
        ...     name="Barbell Bench Press",
        ...     primary_muscle_groups=[MuscleGroup.CHEST],
        ...     equipment=[EquipmentType.BARBELL],
        ... )
        >>> exercise.matches_name("barbell bench press")
        True
    """

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, description="Display name")
    primary_muscle_groups: List[MuscleGroup] = Field(default_factory=list)
    secondary_muscle_groups: List[MuscleGroup] = Field(default_factory=list)
    equipment: List[EquipmentType] = Field(default_factory=list)
    instructions: str = DEFAULT_INSTRUCTIONS
    is_custom: bool = False
    is_bookmarked: bool = False

    @field_validator("primary_muscle_groups", "secondary_muscle_groups", "equipment")
    @classmethod
    def dedupe(cls, v: list) -> list:
        """Drop repeated taxonomy values, keeping first occurrence."""
        seen = []
        for item in v:
            if item not in seen:
                seen.append(item)
        return seen

    @property
    def name_key(self) -> str:
        """Case-insensitive identity used when reconciling imports."""
        return self.name.strip().lower()

    def matches_name(self, name: str) -> bool:
        """Check whether `name` refers to this exercise (case-insensitive)."""
        return self.name_key == name.strip().lower()
