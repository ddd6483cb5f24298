"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
Import failures carry a user-facing message and whether retrying with a
different or corrected file can help.
"""

from typing import List, Optional


class LiftLogError(Exception):
    """Base class for all LiftLog errors."""

    pass


class ImportFailedError(LiftLogError):
    """A file could not be imported.

    Aborts only the current file's import. Anything persisted before the
    failure is kept.
    """

    retryable: bool = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFormatError(ImportFailedError):
    """Format detection found no parser for the file.

    Not retryable without picking a different file.
    """

    retryable = False

    def __init__(self, message: str = "Unsupported file format"):
        super().__init__(message)


class ParseError(ImportFailedError):
    """Content matched a known format but could not be parsed structurally.

    Raised for malformed JSON, payloads of the wrong shape and CSV files
    without a single valid row.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class StorageError(LiftLogError):
    """Reading from or writing to the record store failed."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.key = key


class WorkoutNotFoundError(LiftLogError):
    """No stored workout has the requested id."""

    def __init__(self, workout_id: str):
        super().__init__(f"Workout '{workout_id}' not found")
        self.workout_id = workout_id


class WorkoutAlreadyCompletedError(LiftLogError):
    """Completion is one-way; a completed workout cannot be completed again."""

    def __init__(self, workout_id: str):
        super().__init__(f"Workout '{workout_id}' is already completed")
        self.workout_id = workout_id
