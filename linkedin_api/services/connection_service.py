"""
Connection Service
Connection requests and the symmetric connection graph
"""

from typing import Any, Dict, List
from uuid import UUID

import asyncpg
import structlog

from linkedin_api.db import Database
from linkedin_api.models.social import ConnectionStatus, NotificationType, RequestStatus
from linkedin_api.services.exceptions import (
    InvalidRequestError, NotFoundError, PermissionDeniedError
)
from linkedin_api.services.notification_service import NotificationService

logger = structlog.get_logger(__name__)


class ConnectionService:
    """Connection management service"""

    @staticmethod
    async def are_connected(executor, user_id: UUID, other_id: UUID) -> bool:
        return await executor.fetchval(
            "SELECT EXISTS(SELECT 1 FROM user_connections WHERE user_id = $1 AND connection_id = $2)",
            user_id, other_id,
        )

    @staticmethod
    async def send_request(db: Database, sender_id: UUID, recipient_id: UUID) -> Dict[str, Any]:
        """
        Send a connection request

        Raises:
            InvalidRequestError: Self-request, existing connection or pending request
            NotFoundError: If the recipient does not exist
        """
        if sender_id == recipient_id:
            raise InvalidRequestError("You can't send a request to yourself")

        if not await db.fetchval("SELECT EXISTS(SELECT 1 FROM users WHERE id = $1)", recipient_id):
            raise NotFoundError("User not found")

        if await ConnectionService.are_connected(db, sender_id, recipient_id):
            raise InvalidRequestError("You are already connected")

        pending = await db.fetchval(
            """
            SELECT EXISTS(
                SELECT 1 FROM connection_requests
                WHERE status = 'pending'
                  AND ((sender_id = $1 AND recipient_id = $2) OR (sender_id = $2 AND recipient_id = $1))
            )
            """,
            sender_id, recipient_id,
        )
        if pending:
            raise InvalidRequestError("A connection request already exists")

        try:
            request = await db.fetchrow(
                """
                INSERT INTO connection_requests (sender_id, recipient_id)
                VALUES ($1, $2)
                RETURNING id, sender_id, recipient_id, status, created_at
                """,
                sender_id, recipient_id,
            )
        except asyncpg.UniqueViolationError:
            raise InvalidRequestError("A connection request already exists")

        logger.info("Connection request sent", sender_id=str(sender_id), recipient_id=str(recipient_id))
        return request

    @staticmethod
    async def _respond(db: Database, request_id: UUID, user_id: UUID, new_status: RequestStatus) -> Dict[str, Any]:
        async with db.transaction() as conn:
            request = await conn.fetchrow(
                "SELECT id, sender_id, recipient_id, status FROM connection_requests WHERE id = $1 FOR UPDATE",
                request_id,
            )
            if not request:
                raise NotFoundError("Connection request not found")
            if request["recipient_id"] != user_id:
                raise PermissionDeniedError("Not authorized to respond to this request")
            if request["status"] != RequestStatus.PENDING.value:
                raise InvalidRequestError("This request has already been processed")

            await conn.execute(
                "UPDATE connection_requests SET status = $2, updated_at = NOW() WHERE id = $1",
                request_id, new_status.value,
            )

            if new_status is RequestStatus.ACCEPTED:
                sender_id = request["sender_id"]
                await conn.execute(
                    """
                    INSERT INTO user_connections (user_id, connection_id)
                    VALUES ($1, $2), ($2, $1)
                    ON CONFLICT DO NOTHING
                    """,
                    sender_id, user_id,
                )
                await NotificationService.create_notification(
                    conn, sender_id, NotificationType.CONNECTION_ACCEPTED, user_id
                )

        logger.info("Connection request answered", request_id=str(request_id), status=new_status.value)
        return {
            "id": request["id"],
            "sender_id": request["sender_id"],
            "recipient_id": request["recipient_id"],
            "status": new_status.value,
        }

    @staticmethod
    async def accept_request(db: Database, request_id: UUID, user_id: UUID) -> Dict[str, Any]:
        """Accept a pending request addressed to the user and connect both users"""
        return await ConnectionService._respond(db, request_id, user_id, RequestStatus.ACCEPTED)

    @staticmethod
    async def reject_request(db: Database, request_id: UUID, user_id: UUID) -> Dict[str, Any]:
        """Reject a pending request addressed to the user"""
        return await ConnectionService._respond(db, request_id, user_id, RequestStatus.REJECTED)

    @staticmethod
    async def get_pending_requests(db: Database, user_id: UUID) -> List[Dict[str, Any]]:
        """Pending requests addressed to the user, with sender summaries"""
        return await db.fetch(
            """
            SELECT r.id, r.status, r.created_at,
                   json_build_object(
                       'id', s.id, 'name', s.name, 'username', s.username,
                       'profile_picture', s.profile_picture, 'headline', s.headline
                   ) AS sender
            FROM connection_requests r
            JOIN users s ON s.id = r.sender_id
            WHERE r.recipient_id = $1 AND r.status = 'pending'
            ORDER BY r.created_at DESC
            """,
            user_id,
        )

    @staticmethod
    async def get_connections(db: Database, user_id: UUID) -> List[Dict[str, Any]]:
        """The user's connections"""
        return await db.fetch(
            """
            SELECT u.id, u.name, u.username, u.profile_picture, u.headline
            FROM user_connections uc
            JOIN users u ON u.id = uc.connection_id
            WHERE uc.user_id = $1
            ORDER BY u.name
            """,
            user_id,
        )

    @staticmethod
    async def remove_connection(db: Database, user_id: UUID, other_id: UUID) -> None:
        """Remove a connection in both directions"""
        await db.execute(
            """
            DELETE FROM user_connections
            WHERE (user_id = $1 AND connection_id = $2) OR (user_id = $2 AND connection_id = $1)
            """,
            user_id, other_id,
        )
        logger.info("Connection removed", user_id=str(user_id), other_id=str(other_id))

    @staticmethod
    async def get_status(db: Database, user_id: UUID, other_id: UUID) -> Dict[str, Any]:
        """Relationship between the user and another user"""
        if await ConnectionService.are_connected(db, user_id, other_id):
            return {"status": ConnectionStatus.CONNECTED.value}

        pending = await db.fetchrow(
            """
            SELECT id, sender_id FROM connection_requests
            WHERE status = 'pending'
              AND ((sender_id = $1 AND recipient_id = $2) OR (sender_id = $2 AND recipient_id = $1))
            ORDER BY created_at DESC
            LIMIT 1
            """,
            user_id, other_id,
        )
        if not pending:
            return {"status": ConnectionStatus.NOT_CONNECTED.value}
        if pending["sender_id"] == user_id:
            return {"status": ConnectionStatus.PENDING.value}
        return {"status": ConnectionStatus.RECEIVED.value, "request_id": pending["id"]}
