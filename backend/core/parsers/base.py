"""
Shared pieces of the import parsers.

Every parser turns raw file content into domain Workouts and the Exercises
it had to create, given the current catalog. Parsers are pure: they never
touch storage, so persisting their output is the caller's job.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol

from backend.core.taxonomy import map_equipment_list, map_muscle_groups
from domain.models import (
    DEFAULT_INSTRUCTIONS,
    EquipmentType,
    Exercise,
    ImportSource,
    MuscleGroup,
    Workout,
)

logger = logging.getLogger(__name__)

# Fallbacks when no foreign label maps onto the internal taxonomy
DEFAULT_PRIMARY_MUSCLES = [MuscleGroup.CHEST]
DEFAULT_EQUIPMENT = [EquipmentType.BARBELL]

DEFAULT_WORKOUT_NAME = "Imported Workout"

RPE_MIN = 1.0
RPE_MAX = 10.0


@dataclass
class ParsedImport:
    """Output of one parse: workouts plus catalog entries created for them."""
    workouts: List[Workout] = field(default_factory=list)
    exercises: List[Exercise] = field(default_factory=list)


class ImportParser(Protocol):
    """Parses one third-party export format."""

    source: ImportSource

    def parse(self, raw_content: str, catalog: List[Exercise]) -> ParsedImport:
        """
        Parse raw file content against the existing exercise catalog.

        Args:
            raw_content: Full text of the imported file
            catalog: Exercises already stored; matched by case-insensitive name

        Returns:
            ParsedImport with all workouts and only the newly created exercises

        Raises:
            ParseError: If the content cannot be parsed structurally
        """
        ...


def build_exercise(
    name: str,
    primary_labels: Optional[Iterable[str]] = None,
    secondary_labels: Optional[Iterable[str]] = None,
    equipment_labels: Optional[Iterable[str]] = None,
    instructions: Optional[str] = None,
) -> Exercise:
    """
    Synthesize a custom catalog entry from foreign labels.

    Unmapped labels are dropped and logged. Primary muscles fall back to
    chest and equipment to barbell when nothing maps; secondary muscles
    stay empty.

    Args:
        name: Exercise name as exported
        primary_labels: Foreign primary muscle labels
        secondary_labels: Foreign secondary muscle labels
        equipment_labels: Foreign equipment labels
        instructions: Free-text instructions, if exported

    Returns:
        New Exercise with `is_custom=True`
    """
    primary = map_muscle_groups(primary_labels)
    secondary = map_muscle_groups(secondary_labels)
    equipment = map_equipment_list(equipment_labels)

    for label in primary.unmapped + secondary.unmapped:
        logger.warning(f"Unmapped muscle group '{label}' for exercise '{name}'")
    for label in equipment.unmapped:
        logger.warning(f"Unmapped equipment '{label}' for exercise '{name}'")

    if not primary.values:
        logger.info(f"Defaulting primary muscle group of '{name}' to chest")
    if not equipment.values:
        logger.info(f"Defaulting equipment of '{name}' to barbell")

    return Exercise(
        name=name.strip(),
        primary_muscle_groups=primary.values or list(DEFAULT_PRIMARY_MUSCLES),
        secondary_muscle_groups=secondary.values,
        equipment=equipment.values or list(DEFAULT_EQUIPMENT),
        instructions=(instructions or "").strip() or DEFAULT_INSTRUCTIONS,
        is_custom=True,
    )


def clean_rpe(value: Optional[float], context: str = "") -> Optional[float]:
    """Keep an RPE only when it lies within 1-10."""
    if value is None:
        return None
    if math.isnan(value) or not RPE_MIN <= value <= RPE_MAX:
        logger.warning(f"Dropping out-of-range RPE {value} {context}".rstrip())
        return None
    return value
