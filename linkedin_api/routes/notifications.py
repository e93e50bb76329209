"""
Notification Routes
"""

from uuid import UUID

from fastapi import APIRouter

from linkedin_api.services.notification_service import NotificationService
from linkedin_api.utils.dependencies import CurrentUser, DatabaseDep

router = APIRouter()


@router.get("")
@router.get("/", include_in_schema=False)
async def get_user_notifications(current_user: CurrentUser, db: DatabaseDep):
    """The current user's notifications, newest first"""
    return await NotificationService.get_user_notifications(db, current_user["id"])


@router.put("/{notification_id}/read")
async def mark_notification_as_read(notification_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    return await NotificationService.mark_as_read(db, notification_id, current_user["id"])


@router.delete("/{notification_id}")
async def delete_notification(notification_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    await NotificationService.delete_notification(db, notification_id, current_user["id"])
    return {"message": "Notification deleted successfully"}
