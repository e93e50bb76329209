"""
Notification Service
Activity notifications for likes, comments and accepted connections
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog

from linkedin_api.db import Database
from linkedin_api.models.social import NotificationType
from linkedin_api.services.exceptions import NotFoundError

logger = structlog.get_logger(__name__)


class NotificationService:
    """Notification management service"""

    @staticmethod
    async def create_notification(
        executor,
        recipient_id: UUID,
        notification_type: NotificationType,
        related_user_id: UUID,
        related_post_id: Optional[UUID] = None,
    ) -> None:
        """
        Record a notification

        Args:
            executor: Database or a connection inside an open transaction
        """
        await executor.execute(
            """
            INSERT INTO notifications (recipient_id, type, related_user_id, related_post_id)
            VALUES ($1, $2, $3, $4)
            """,
            recipient_id, notification_type.value, related_user_id, related_post_id,
        )

    @staticmethod
    async def get_user_notifications(db: Database, user_id: UUID) -> List[Dict[str, Any]]:
        """Notifications for a user, newest first"""
        return await db.fetch(
            """
            SELECT n.id, n.type, n.read, n.created_at,
                   CASE WHEN ru.id IS NULL THEN NULL ELSE json_build_object(
                       'id', ru.id, 'name', ru.name, 'username', ru.username,
                       'profile_picture', ru.profile_picture
                   ) END AS related_user,
                   CASE WHEN rp.id IS NULL THEN NULL ELSE json_build_object(
                       'id', rp.id, 'content', rp.content, 'image', rp.image
                   ) END AS related_post
            FROM notifications n
            LEFT JOIN users ru ON ru.id = n.related_user_id
            LEFT JOIN posts rp ON rp.id = n.related_post_id
            WHERE n.recipient_id = $1
            ORDER BY n.created_at DESC
            """,
            user_id,
        )

    @staticmethod
    async def mark_as_read(db: Database, notification_id: UUID, user_id: UUID) -> Dict[str, Any]:
        """
        Mark one of the user's notifications as read

        Raises:
            NotFoundError: If the notification does not exist or belongs to someone else
        """
        notification = await db.fetchrow(
            """
            UPDATE notifications SET read = TRUE
            WHERE id = $1 AND recipient_id = $2
            RETURNING id, type, read, created_at
            """,
            notification_id, user_id,
        )
        if not notification:
            raise NotFoundError("Notification not found")
        return notification

    @staticmethod
    async def delete_notification(db: Database, notification_id: UUID, user_id: UUID) -> None:
        """
        Delete one of the user's notifications

        Raises:
            NotFoundError: If the notification does not exist or belongs to someone else
        """
        deleted = await db.fetchval(
            "DELETE FROM notifications WHERE id = $1 AND recipient_id = $2 RETURNING id",
            notification_id, user_id,
        )
        if not deleted:
            raise NotFoundError("Notification not found")
        logger.info("Notification deleted", notification_id=str(notification_id))
