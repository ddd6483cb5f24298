"""
Personal Record Repository Interfaces (Ports).

This module defines the abstract interfaces for personal records and the
notifications created alongside them. Used by the PersonalRecordService.
"""
from typing import List, Optional, Protocol

from domain.models import PersonalRecord, PRNotification, RecordType


class PersonalRecordRepository(Protocol):
    """
    Abstract interface for personal record persistence.

    Records are append-only history: superseded records stay stored.
    """

    async def get_all(self) -> List[PersonalRecord]:
        """Get every stored personal record."""
        ...

    async def get_by_exercise(self, exercise_id: str) -> List[PersonalRecord]:
        """
        Get all records (current and superseded) for an exercise.

        Args:
            exercise_id: Exercise ID

        Returns:
            Records in storage order
        """
        ...

    async def get_current_best(
        self,
        exercise_id: str,
        record_type: RecordType,
    ) -> Optional[PersonalRecord]:
        """
        Get the record with the highest value for an (exercise, type) pair.

        Args:
            exercise_id: Exercise ID
            record_type: Record type

        Returns:
            The best record, or None if the pair has no records
        """
        ...

    async def save(self, record: PersonalRecord) -> PersonalRecord:
        """
        Create or replace a record (matched by id).

        Args:
            record: Record to store

        Returns:
            The stored record
        """
        ...

    async def delete(self, record_id: str) -> bool:
        """
        Delete a record.

        Args:
            record_id: Record ID

        Returns:
            True if a record was deleted
        """
        ...


class PRNotificationRepository(Protocol):
    """Abstract interface for PR notification persistence."""

    async def get_all(self) -> List[PRNotification]:
        """Get every stored notification."""
        ...

    async def get_unread(self) -> List[PRNotification]:
        """Get notifications not yet marked as read."""
        ...

    async def create(
        self,
        pr_id: str,
        exercise_name: str,
        improvement: str,
    ) -> PRNotification:
        """
        Create and store a notification for a new personal record.

        Args:
            pr_id: ID of the personal record
            exercise_name: Exercise display name
            improvement: Formatted improvement (e.g., "+5 lbs")

        Returns:
            The stored notification
        """
        ...

    async def mark_read(self, notification_id: str) -> bool:
        """
        Mark a notification as read.

        Args:
            notification_id: Notification ID

        Returns:
            True if the notification exists
        """
        ...
