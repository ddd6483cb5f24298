"""
Source format detection for imported workout files.

The supported exports overlap in surface structure and carry no reliable
format version header, so detection sniffs shapes in a fixed order:

1. JSON object with `workouts` and `routines`            -> Hevy
2. JSON object with `exportedFromApp == "Strong"`, or
   with both `measurements` and `workouts`               -> Strong
3. Text containing the Liftin' marker or CSV header line  -> Liftin'
4. Anything else                                         -> unknown
"""
import json
import logging

from domain.models import ImportSource

logger = logging.getLogger(__name__)

LIFTIN_MARKER = "Liftin Workout History"
LIFTIN_CSV_HEADER = "Date,Exercise,Set,Weight,Reps,RPE"
STRONG_APP_ID = "Strong"


def _detect_json_source(content: str) -> ImportSource:
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, ValueError):
        return ImportSource.UNKNOWN

    if not isinstance(data, dict):
        return ImportSource.UNKNOWN

    if "workouts" in data and "routines" in data:
        return ImportSource.HEVY

    if data.get("exportedFromApp") == STRONG_APP_ID or (
        "measurements" in data and "workouts" in data
    ):
        return ImportSource.STRONG

    return ImportSource.UNKNOWN


def _is_liftin_csv(content: str) -> bool:
    if LIFTIN_MARKER in content:
        return True
    return any(line.strip() == LIFTIN_CSV_HEADER for line in content.splitlines())


def detect_source(content: str) -> ImportSource:
    """
    Classify raw file content by originating app.

    Args:
        content: Full text of the imported file

    Returns:
        ImportSource.HEVY, STRONG, LIFTIN, or UNKNOWN
    """
    source = _detect_json_source(content)
    if source == ImportSource.UNKNOWN and _is_liftin_csv(content):
        source = ImportSource.LIFTIN

    logger.debug(f"Detected import source: {source.value}")
    return source
