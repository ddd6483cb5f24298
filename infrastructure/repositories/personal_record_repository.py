"""
Record store implementations of the personal record repositories.
"""
from typing import List, Optional

from domain.models import PersonalRecord, PRNotification, RecordType
from infrastructure.repositories.base import StoreCollection

PERSONAL_RECORDS_KEY = "personal_records"
PR_NOTIFICATIONS_KEY = "pr_notifications"


class StorePersonalRecordRepository(StoreCollection[PersonalRecord]):
    """
    RecordStore implementation of PersonalRecordRepository protocol.

    Superseded records are never removed by PR detection; the current best
    is computed from the full history on every lookup.
    """

    key = PERSONAL_RECORDS_KEY
    model = PersonalRecord

    async def get_all(self) -> List[PersonalRecord]:
        return await self._list()

    async def get_by_exercise(self, exercise_id: str) -> List[PersonalRecord]:
        return [r for r in await self._list() if r.exercise_id == exercise_id]

    async def get_current_best(
        self,
        exercise_id: str,
        record_type: RecordType,
    ) -> Optional[PersonalRecord]:
        candidates = [
            r for r in await self.get_by_exercise(exercise_id)
            if r.type == record_type
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda r: r.value)

    async def save(self, record: PersonalRecord) -> PersonalRecord:
        return await self._upsert(record)

    async def delete(self, record_id: str) -> bool:
        return await self._delete_by_id(record_id)


class StorePRNotificationRepository(StoreCollection[PRNotification]):
    """RecordStore implementation of PRNotificationRepository protocol."""

    key = PR_NOTIFICATIONS_KEY
    model = PRNotification

    async def get_all(self) -> List[PRNotification]:
        return await self._list()

    async def get_unread(self) -> List[PRNotification]:
        return [n for n in await self._list() if not n.is_read]

    async def create(
        self,
        pr_id: str,
        exercise_name: str,
        improvement: str,
    ) -> PRNotification:
        notification = PRNotification(
            pr_id=pr_id,
            exercise_name=exercise_name,
            improvement=improvement,
        )
        return await self._upsert(notification)

    async def mark_read(self, notification_id: str) -> bool:
        async with self._lock:
            notifications = await self._list()
            for notification in notifications:
                if notification.id == notification_id:
                    notification.is_read = True
                    await self._write(notifications)
                    return True
        return False
