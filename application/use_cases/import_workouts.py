"""
ImportWorkouts Use Case.

Orchestrates a single-file import:

1. Read the file (UTF-8, BOM tolerated)
2. Detect the originating app
3. Parse against the current exercise catalog
4. Persist new exercises, then every workout
5. Report what was imported

Persistence is not transactional: if saving fails halfway, whatever was
already written stays written and the StorageError propagates.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from application.exceptions import ParseError, UnsupportedFormatError
from application.ports import ExerciseRepository, WorkoutRepository
from backend.core.format_detector import detect_source
from backend.core.parsers import get_parser
from domain.models import ImportResult, ImportSource

logger = logging.getLogger(__name__)


def _decode(raw: Union[str, bytes]) -> str:
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError("File is not valid UTF-8 text", errors=[str(e)]) from e
    return raw.lstrip("\ufeff")


class ImportWorkoutsUseCase:
    """
    Use case for importing workout history exported by another app.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = ImportWorkoutsUseCase(exercise_repo, workout_repo)
        >>> result = await use_case.import_from_file("hevy_export.json")
        >>> print(f"Imported {len(result.workouts)} workouts from {result.source}")
    """

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        workout_repo: WorkoutRepository,
        *,
        max_bytes: Optional[int] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            exercise_repo: Repository for the exercise catalog
            workout_repo: Repository for persisting workouts
            max_bytes: Reject larger files; None for no limit
        """
        self._exercise_repo = exercise_repo
        self._workout_repo = workout_repo
        self._max_bytes = max_bytes

    async def import_from_file(self, path: Union[str, Path]) -> ImportResult:
        """
        Import a file from disk.

        Args:
            path: Path of the exported file

        Returns:
            ImportResult with the imported workouts and new exercises

        Raises:
            ParseError: If the file cannot be read or parsed
            UnsupportedFormatError: If the format is not recognized
            StorageError: If persisting fails
        """
        try:
            raw = await asyncio.to_thread(Path(path).read_bytes)
        except OSError as e:
            logger.warning(f"Could not read import file {path}: {e}")
            raise ParseError("Could not read the selected file", errors=[str(e)]) from e

        return await self.import_from_content(raw)

    async def import_from_content(self, raw: Union[str, bytes]) -> ImportResult:
        """
        Import already loaded file content.

        Args:
            raw: File content as text or UTF-8 bytes

        Returns:
            ImportResult with the imported workouts and new exercises
        """
        size = len(raw.encode("utf-8")) if isinstance(raw, str) else len(raw)
        if self._max_bytes is not None and size > self._max_bytes:
            raise ParseError(f"File is too large ({size} bytes, limit {self._max_bytes})")

        content = _decode(raw)
        source = detect_source(content)
        if source == ImportSource.UNKNOWN:
            logger.warning("Import rejected: unrecognized file format")
            raise UnsupportedFormatError()

        parser = get_parser(source)
        catalog = await self._exercise_repo.get_all()
        parsed = parser.parse(content, catalog)

        # Exercises first so stored workouts never reference a missing entry
        await self._exercise_repo.save_many(parsed.exercises)
        for workout in parsed.workouts:
            await self._workout_repo.save(workout)

        logger.info(
            f"Imported {len(parsed.workouts)} workouts and {len(parsed.exercises)} "
            f"new exercises from {source.display_name}"
        )
        return ImportResult(
            workouts=parsed.workouts,
            exercises=parsed.exercises,
            source=source.display_name,
        )
