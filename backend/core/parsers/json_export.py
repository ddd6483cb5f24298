"""
Parsers for the JSON exports of Hevy and Strong.

Both apps export an object with top-level `exercises[]` and `workouts[]`.
The exercise list is reconciled first so that workout entries referencing
those names pick up their muscle and equipment mapping; names that only
appear inside workouts get a placeholder exercise with default taxonomy.
"""
import json
import logging
from datetime import datetime, timezone
from typing import List, Optional, Type

from pydantic import ValidationError

from application.exceptions import ParseError
from backend.core.parsers.base import (
    DEFAULT_WORKOUT_NAME,
    ParsedImport,
    build_exercise,
    clean_rpe,
)
from backend.core.reconciler import ExerciseReconciler
from backend.schemas.imports import (
    ForeignExercise,
    ForeignExerciseEntry,
    ForeignWorkout,
    HevyExport,
    JsonWorkoutExport,
    StrongExport,
)
from domain.models import Exercise, ExerciseEntry, ImportSource, Workout, WorkoutSet

logger = logging.getLogger(__name__)


def _format_validation_errors(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


class JsonExportParser:
    """
    Parser for `{exercises: [...], workouts: [...]}` exports.

    Subclasses pick the export schema and where instructions come from.
    """

    source: ImportSource = ImportSource.UNKNOWN
    schema: Type[JsonWorkoutExport] = JsonWorkoutExport

    def parse(self, raw_content: str, catalog: List[Exercise]) -> ParsedImport:
        export = self._load(raw_content)
        reconciler = ExerciseReconciler(catalog)

        for foreign in export.exercises:
            if reconciler.find(foreign.name) is None:
                reconciler.reconcile(
                    build_exercise(
                        foreign.name,
                        primary_labels=foreign.primary_muscles,
                        secondary_labels=foreign.secondary_muscles,
                        equipment_labels=foreign.equipment_labels,
                        instructions=self._instructions(foreign),
                    )
                )

        imported_at = datetime.now(timezone.utc)
        workouts = [
            self._build_workout(foreign, reconciler, imported_at)
            for foreign in export.workouts
        ]

        logger.info(
            f"Parsed {self.source.display_name} export: {len(workouts)} workouts, "
            f"{len(reconciler.created)} new exercises"
        )
        return ParsedImport(workouts=workouts, exercises=reconciler.created)

    def _load(self, raw_content: str) -> JsonWorkoutExport:
        label = self.source.display_name
        try:
            data = json.loads(raw_content)
        except json.JSONDecodeError as e:
            raise ParseError(f"{label} export is not valid JSON", errors=[str(e)]) from e

        if not isinstance(data, dict):
            raise ParseError(f"{label} export must be a JSON object")

        try:
            return self.schema.model_validate(data)
        except ValidationError as e:
            errors = _format_validation_errors(e)
            logger.warning(f"{label} export failed validation: {errors}")
            raise ParseError(f"{label} export is malformed", errors=errors) from e

    def _instructions(self, foreign: ForeignExercise) -> Optional[str]:
        return foreign.instructions

    def _build_workout(
        self,
        foreign: ForeignWorkout,
        reconciler: ExerciseReconciler,
        imported_at: datetime,
    ) -> Workout:
        return Workout(
            name=(foreign.name or "").strip() or DEFAULT_WORKOUT_NAME,
            date=foreign.performed_at or imported_at,
            exercises=[self._build_entry(entry, reconciler) for entry in foreign.exercises],
            duration=foreign.duration_minutes if foreign.duration else None,
            notes=foreign.notes,
            is_completed=True,
        )

    def _build_entry(
        self,
        foreign: ForeignExerciseEntry,
        reconciler: ExerciseReconciler,
    ) -> ExerciseEntry:
        exercise = reconciler.find(foreign.name)
        if exercise is None:
            exercise = reconciler.reconcile(build_exercise(foreign.name))

        sets = [
            WorkoutSet(
                reps=s.reps or 0,
                weight=s.weight or 0,
                rpe=clean_rpe(s.rpe, f"in '{foreign.name}'"),
                is_completed=True,
                notes=s.notes,
            )
            for s in foreign.sets
        ]
        return ExerciseEntry(
            exercise_id=exercise.id,
            exercise=exercise,
            sets=sets,
            notes=foreign.notes,
        )


class HevyParser(JsonExportParser):
    """Hevy JSON export."""

    source = ImportSource.HEVY
    schema = HevyExport


class StrongParser(JsonExportParser):
    """Strong JSON export. Exercise notes stand in for missing instructions."""

    source = ImportSource.STRONG
    schema = StrongExport

    def _instructions(self, foreign: ForeignExercise) -> Optional[str]:
        return foreign.instructions or foreign.notes
