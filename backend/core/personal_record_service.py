"""
Personal record detection.

Called once per completed workout. For every exercise entry with at least
one completed set, three record types are evaluated independently:

- weight: heaviest completed set
- reps: most reps in a completed set
- volume: sum of weight × reps over the completed sets (only when > 0)

A candidate is a new PR when there is no record yet for the
(exercise, type) pair or it beats the current best, which is the maximum
value among all stored records of that pair. Each new PR is saved and gets
exactly one notification.

Detection is advisory: failures are logged and reported as "no new PRs" so
they never block logging the workout itself.
"""
import logging
from typing import List, Optional, Tuple

from application.ports import PersonalRecordRepository, PRNotificationRepository
from backend.core.stats_service import WEIGHT_UNIT, format_number
from domain.models import ExerciseEntry, PersonalRecord, PRNotification, RecordType, Workout

logger = logging.getLogger(__name__)

_UNITS = {
    RecordType.WEIGHT: WEIGHT_UNIT,
    RecordType.REPS: "reps",
    RecordType.VOLUME: WEIGHT_UNIT,
}


def _candidates(entry: ExerciseEntry) -> List[Tuple[RecordType, float, str]]:
    """(type, value, notes) per record type; notes describe the set behind the value."""
    completed = entry.completed_sets
    if not completed:
        return []

    heaviest = max(completed, key=lambda s: s.weight)
    most_reps = max(completed, key=lambda s: s.reps)
    candidates = [
        (
            RecordType.WEIGHT,
            heaviest.weight,
            f"New weight PR: {format_number(heaviest.weight)} {WEIGHT_UNIT} for {heaviest.reps} reps",
        ),
        (
            RecordType.REPS,
            float(most_reps.reps),
            f"New reps PR: {most_reps.reps} reps at {format_number(most_reps.weight)} {WEIGHT_UNIT}",
        ),
    ]
    volume = sum(s.volume for s in completed)
    if volume > 0:
        candidates.append((
            RecordType.VOLUME,
            volume,
            f"New volume PR: {format_number(volume)} {WEIGHT_UNIT} total volume",
        ))
    return candidates


def format_improvement(record_type: RecordType, value: float, previous: Optional[float]) -> str:
    """
    Format the notification text for a new record.

    Examples:
        >>> format_improvement(RecordType.WEIGHT, 140, 135)
        '+5 lbs'
        >>> format_improvement(RecordType.REPS, 5, None)
        '5 reps'
    """
    unit = _UNITS.get(record_type, "")
    if previous is None:
        return f"{format_number(value)} {unit}".strip()
    return f"+{format_number(value - previous)} {unit}".strip()


class PersonalRecordService:
    """
    Service for detecting and reading personal records.

    Wraps the record and notification repositories; never touches storage
    directly.
    """

    def __init__(
        self,
        record_repo: PersonalRecordRepository,
        notification_repo: PRNotificationRepository,
    ):
        """
        Initialize the personal record service.

        Args:
            record_repo: Repository for personal records
            notification_repo: Repository for PR notifications
        """
        self._record_repo = record_repo
        self._notification_repo = notification_repo

    async def check_for_personal_records(self, workout: Workout) -> List[PersonalRecord]:
        """
        Detect, save and announce new personal records set in a workout.

        Args:
            workout: A completed workout

        Returns:
            Newly created records; empty when the workout set none, is not
            completed, or detection failed
        """
        if not workout.is_completed:
            logger.debug(f"Skipping PR check for incomplete workout {workout.id}")
            return []

        try:
            return await self._detect(workout)
        except Exception:
            logger.exception(f"PR detection failed for workout {workout.id}")
            return []

    async def _detect(self, workout: Workout) -> List[PersonalRecord]:
        new_records: List[PersonalRecord] = []

        for entry in workout.exercises:
            for record_type, value, notes in _candidates(entry):
                best = await self._record_repo.get_current_best(entry.exercise_id, record_type)
                if best is not None and value <= best.value:
                    continue

                record = await self._record_repo.save(PersonalRecord(
                    exercise_id=entry.exercise_id,
                    exercise_name=entry.exercise.name,
                    value=value,
                    type=record_type,
                    date=workout.date,
                    workout_id=workout.id,
                    notes=notes,
                ))
                improvement = format_improvement(
                    record_type, value, best.value if best is not None else None
                )
                await self._notification_repo.create(record.id, record.exercise_name, improvement)
                new_records.append(record)
                logger.info(
                    f"New {record_type.value} PR for '{record.exercise_name}': {improvement}"
                )

        return new_records

    async def get_current_bests(self, exercise_id: Optional[str] = None) -> List[PersonalRecord]:
        """
        Get the current best record per (exercise, type) pair.

        Args:
            exercise_id: Restrict to one exercise

        Returns:
            One record per pair, ordered by exercise name then type
        """
        if exercise_id:
            records = await self._record_repo.get_by_exercise(exercise_id)
        else:
            records = await self._record_repo.get_all()

        bests = {}
        for record in records:
            key = (record.exercise_id, record.type)
            if key not in bests or record.value > bests[key].value:
                bests[key] = record
        return sorted(bests.values(), key=lambda r: (r.exercise_name.lower(), r.type.value))

    async def get_unread_notifications(self) -> List[PRNotification]:
        return await self._notification_repo.get_unread()

    async def mark_notification_read(self, notification_id: str) -> bool:
        return await self._notification_repo.mark_read(notification_id)
