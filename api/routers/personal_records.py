"""
Personal records router.

This router provides endpoints for:
- Current best records per exercise and record type
- Unread PR notifications and marking them read
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_pr_service
from backend.core.personal_record_service import PersonalRecordService
from domain.models import PersonalRecord, PRNotification

router = APIRouter(
    prefix="/personal-records",
    tags=["Personal Records"],
)


@router.get("", response_model=List[PersonalRecord])
async def list_current_bests(
    exercise_id: Optional[str] = Query(None, description="Only records for this exercise"),
    service: PersonalRecordService = Depends(get_pr_service),
):
    """Get the current best record for each (exercise, type) pair."""
    return await service.get_current_bests(exercise_id)


@router.get("/notifications", response_model=List[PRNotification])
async def list_unread_notifications(
    service: PersonalRecordService = Depends(get_pr_service),
):
    """Get PR notifications that have not been read yet."""
    return await service.get_unread_notifications()


@router.post("/notifications/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    service: PersonalRecordService = Depends(get_pr_service),
):
    """Mark a PR notification as read."""
    if not await service.mark_notification_read(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True}
