"""
Parser for the Liftin' CSV export.

The first line is a header and is discarded. Every following line is

    date,exerciseName,setNumber,weight,reps[,rpe]

with no quoting or embedded commas. Rows are grouped into one workout per
distinct date string (non-contiguous rows with the same date merge) and one
exercise entry per (date, exercise), keeping sets in file order.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import ValidationError

from application.exceptions import ParseError
from backend.core.format_detector import LIFTIN_CSV_HEADER, LIFTIN_MARKER
from backend.core.parsers.base import ParsedImport, build_exercise, clean_rpe
from backend.core.reconciler import ExerciseReconciler
from backend.schemas.imports import LiftinRow, parse_timestamp
from domain.models import Exercise, ExerciseEntry, ImportSource, Workout, WorkoutSet

logger = logging.getLogger(__name__)

MIN_COLUMNS = 5


def _to_float(value: str) -> Optional[float]:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _to_int(value: str) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


def parse_row(line: str, line_number: int) -> Optional[LiftinRow]:
    """
    Parse one data line.

    Args:
        line: Raw CSV line without the trailing newline
        line_number: 1-based position in the file, for logging

    Returns:
        LiftinRow, or None if the line has to be skipped
    """
    columns = [c.strip() for c in line.split(",")]
    if len(columns) < MIN_COLUMNS:
        logger.warning(f"Skipping Liftin' line {line_number}: expected at least {MIN_COLUMNS} fields")
        return None

    date_label, exercise_name, set_column, weight_column, reps_column = columns[:MIN_COLUMNS]
    performed_at = parse_timestamp(date_label)
    weight = _to_float(weight_column)
    reps = _to_int(reps_column)
    if performed_at is None or weight is None or reps is None:
        logger.warning(f"Skipping Liftin' line {line_number}: unparseable date, weight or reps")
        return None

    rpe = None
    if len(columns) > MIN_COLUMNS and columns[MIN_COLUMNS]:
        rpe = clean_rpe(_to_float(columns[MIN_COLUMNS]), f"on line {line_number}")

    try:
        return LiftinRow(
            line_number=line_number,
            date_label=date_label,
            performed_at=performed_at,
            exercise_name=exercise_name,
            set_number=_to_int(set_column),
            weight=weight,
            reps=reps,
            rpe=rpe,
        )
    except ValidationError as e:
        logger.warning(f"Skipping Liftin' line {line_number}: {e.error_count()} invalid fields")
        return None


@dataclass
class _DayGroup:
    row: LiftinRow
    entries: Dict[str, ExerciseEntry] = field(default_factory=dict)


class LiftinCsvParser:
    """Liftin' CSV export."""

    source = ImportSource.LIFTIN

    def parse(self, raw_content: str, catalog: List[Exercise]) -> ParsedImport:
        lines = raw_content.lstrip("\ufeff").splitlines()
        reconciler = ExerciseReconciler(catalog)
        days: Dict[str, _DayGroup] = {}
        row_count = 0

        for line_number, raw_line in enumerate(lines[1:], start=2):
            line = raw_line.strip()
            if not line or line == LIFTIN_CSV_HEADER or line == LIFTIN_MARKER:
                continue

            row = parse_row(line, line_number)
            if row is None:
                continue
            row_count += 1

            exercise = reconciler.find(row.exercise_name)
            if exercise is None:
                exercise = reconciler.reconcile(build_exercise(row.exercise_name))

            day = days.setdefault(row.date_label, _DayGroup(row=row))
            entry = day.entries.get(exercise.id)
            if entry is None:
                entry = day.entries[exercise.id] = ExerciseEntry(
                    exercise_id=exercise.id,
                    exercise=exercise,
                )
            entry.sets.append(
                WorkoutSet(reps=row.reps, weight=row.weight, rpe=row.rpe, is_completed=True)
            )

        if row_count == 0:
            raise ParseError("No valid rows found in Liftin' export")

        workouts = [
            Workout(
                name=f"Workout {date_label}",
                date=day.row.performed_at,
                exercises=list(day.entries.values()),
                is_completed=True,
            )
            for date_label, day in days.items()
        ]

        logger.info(
            f"Parsed Liftin' export: {row_count} sets in {len(workouts)} workouts, "
            f"{len(reconciler.created)} new exercises"
        )
        return ParsedImport(workouts=workouts, exercises=reconciler.created)
