"""
Service Layer Tests
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import asyncpg
import pytest

from linkedin_api.models.social import ConnectionStatus, NotificationType, RequestStatus
from linkedin_api.services.connection_service import ConnectionService
from linkedin_api.services.exceptions import (
    InvalidRequestError, NotFoundError, PermissionDeniedError
)
from linkedin_api.services.notification_service import NotificationService
from linkedin_api.services.post_service import PostService
from linkedin_api.services.user_service import UserService


@pytest.fixture
def post_row():
    return {"id": uuid4(), "content": "Hello", "likes": [], "comments": []}


class TestPostService:
    @pytest.mark.asyncio
    async def test_get_missing_post(self, mock_db):
        with pytest.raises(NotFoundError):
            await PostService.get_post(mock_db, uuid4())

    @pytest.mark.asyncio
    async def test_delete_post_by_non_author(self, mock_db):
        mock_db.fetchval.return_value = uuid4()

        with pytest.raises(PermissionDeniedError, match="not authorized"):
            await PostService.delete_post(mock_db, uuid4(), uuid4())

        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_post_by_author(self, mock_db):
        author_id, post_id = uuid4(), uuid4()
        mock_db.fetchval.return_value = author_id

        await PostService.delete_post(mock_db, post_id, author_id)

        mock_db.execute.assert_awaited_once()
        assert mock_db.execute.await_args.args[1] == post_id

    @pytest.mark.asyncio
    async def test_like_notifies_author(self, transactional_db, mock_conn, post_row):
        author_id, liker_id = uuid4(), uuid4()
        mock_conn.fetchval.side_effect = [author_id, None]
        transactional_db.fetchrow.return_value = post_row

        with patch.object(NotificationService, "create_notification", new=AsyncMock()) as mock_notify:
            result = await PostService.toggle_like(transactional_db, post_row["id"], liker_id)

        assert result == post_row
        mock_conn.execute.assert_awaited_once()
        mock_notify.assert_awaited_once_with(
            mock_conn, author_id, NotificationType.LIKE, liker_id, post_row["id"]
        )

    @pytest.mark.asyncio
    async def test_like_own_post_does_not_notify(self, transactional_db, mock_conn, post_row):
        author_id = uuid4()
        mock_conn.fetchval.side_effect = [author_id, None]
        transactional_db.fetchrow.return_value = post_row

        with patch.object(NotificationService, "create_notification", new=AsyncMock()) as mock_notify:
            await PostService.toggle_like(transactional_db, post_row["id"], author_id)

        mock_notify.assert_not_called()

    @pytest.mark.asyncio
    async def test_second_like_removes_it(self, transactional_db, mock_conn, post_row):
        mock_conn.fetchval.side_effect = [uuid4(), post_row["id"]]
        transactional_db.fetchrow.return_value = post_row

        with patch.object(NotificationService, "create_notification", new=AsyncMock()) as mock_notify:
            await PostService.toggle_like(transactional_db, post_row["id"], uuid4())

        mock_conn.execute.assert_not_called()
        mock_notify.assert_not_called()

    @pytest.mark.asyncio
    async def test_comment_on_missing_post(self, transactional_db, mock_conn):
        with pytest.raises(NotFoundError):
            await PostService.add_comment(transactional_db, uuid4(), uuid4(), "Nice")

        mock_conn.execute.assert_not_called()


class TestConnectionService:
    @pytest.mark.asyncio
    async def test_request_to_self(self, mock_db):
        user_id = uuid4()

        with pytest.raises(InvalidRequestError, match="yourself"):
            await ConnectionService.send_request(mock_db, user_id, user_id)

    @pytest.mark.asyncio
    async def test_request_to_unknown_user(self, mock_db):
        mock_db.fetchval.return_value = False

        with pytest.raises(NotFoundError):
            await ConnectionService.send_request(mock_db, uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_request_when_already_connected(self, mock_db):
        mock_db.fetchval.side_effect = [True, True]

        with pytest.raises(InvalidRequestError, match="already connected"):
            await ConnectionService.send_request(mock_db, uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_duplicate_pending_request(self, mock_db):
        mock_db.fetchval.side_effect = [True, False, True]

        with pytest.raises(InvalidRequestError, match="already exists"):
            await ConnectionService.send_request(mock_db, uuid4(), uuid4())

        mock_db.fetchrow.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_request_hits_unique_index(self, mock_db):
        mock_db.fetchval.side_effect = [True, False, False]
        mock_db.fetchrow.side_effect = asyncpg.UniqueViolationError("duplicate key")

        with pytest.raises(InvalidRequestError, match="already exists"):
            await ConnectionService.send_request(mock_db, uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_send_request(self, mock_db):
        sender_id, recipient_id = uuid4(), uuid4()
        mock_db.fetchval.side_effect = [True, False, False]
        mock_db.fetchrow.return_value = {"id": uuid4(), "status": "pending"}

        request = await ConnectionService.send_request(mock_db, sender_id, recipient_id)

        assert request["status"] == "pending"
        assert mock_db.fetchrow.await_args.args[1:] == (sender_id, recipient_id)

    @pytest.mark.asyncio
    async def test_accept_missing_request(self, transactional_db):
        with pytest.raises(NotFoundError):
            await ConnectionService.accept_request(transactional_db, uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_accept_request_addressed_to_someone_else(self, transactional_db, mock_conn):
        mock_conn.fetchrow.return_value = {
            "id": uuid4(), "sender_id": uuid4(), "recipient_id": uuid4(), "status": "pending",
        }

        with pytest.raises(PermissionDeniedError):
            await ConnectionService.accept_request(transactional_db, uuid4(), uuid4())

        mock_conn.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_accept_processed_request(self, transactional_db, mock_conn):
        user_id = uuid4()
        mock_conn.fetchrow.return_value = {
            "id": uuid4(), "sender_id": uuid4(), "recipient_id": user_id, "status": "rejected",
        }

        with pytest.raises(InvalidRequestError, match="already been processed"):
            await ConnectionService.accept_request(transactional_db, uuid4(), user_id)

    @pytest.mark.asyncio
    async def test_accept_connects_both_users(self, transactional_db, mock_conn):
        user_id, sender_id, request_id = uuid4(), uuid4(), uuid4()
        mock_conn.fetchrow.return_value = {
            "id": request_id, "sender_id": sender_id, "recipient_id": user_id, "status": "pending",
        }

        with patch.object(NotificationService, "create_notification", new=AsyncMock()) as mock_notify:
            result = await ConnectionService.accept_request(transactional_db, request_id, user_id)

        assert result["status"] == RequestStatus.ACCEPTED.value
        assert mock_conn.execute.await_count == 2
        assert mock_conn.execute.await_args_list[1].args[1:] == (sender_id, user_id)
        mock_notify.assert_awaited_once_with(
            mock_conn, sender_id, NotificationType.CONNECTION_ACCEPTED, user_id
        )

    @pytest.mark.asyncio
    async def test_reject_only_updates_status(self, transactional_db, mock_conn):
        user_id = uuid4()
        mock_conn.fetchrow.return_value = {
            "id": uuid4(), "sender_id": uuid4(), "recipient_id": user_id, "status": "pending",
        }

        with patch.object(NotificationService, "create_notification", new=AsyncMock()) as mock_notify:
            result = await ConnectionService.reject_request(transactional_db, uuid4(), user_id)

        assert result["status"] == RequestStatus.REJECTED.value
        mock_conn.execute.assert_awaited_once()
        mock_notify.assert_not_called()

    @pytest.mark.asyncio
    async def test_status_connected(self, mock_db):
        mock_db.fetchval.return_value = True

        status = await ConnectionService.get_status(mock_db, uuid4(), uuid4())

        assert status == {"status": ConnectionStatus.CONNECTED.value}

    @pytest.mark.asyncio
    async def test_status_not_connected(self, mock_db):
        mock_db.fetchval.return_value = False

        status = await ConnectionService.get_status(mock_db, uuid4(), uuid4())

        assert status == {"status": ConnectionStatus.NOT_CONNECTED.value}

    @pytest.mark.asyncio
    async def test_status_pending_when_user_sent_request(self, mock_db):
        user_id = uuid4()
        mock_db.fetchval.return_value = False
        mock_db.fetchrow.return_value = {"id": uuid4(), "sender_id": user_id}

        status = await ConnectionService.get_status(mock_db, user_id, uuid4())

        assert status == {"status": ConnectionStatus.PENDING.value}

    @pytest.mark.asyncio
    async def test_status_received_carries_request_id(self, mock_db):
        request_id, other_id = uuid4(), uuid4()
        mock_db.fetchval.return_value = False
        mock_db.fetchrow.return_value = {"id": request_id, "sender_id": other_id}

        status = await ConnectionService.get_status(mock_db, uuid4(), other_id)

        assert status == {"status": ConnectionStatus.RECEIVED.value, "request_id": request_id}


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_mark_missing_notification(self, mock_db):
        with pytest.raises(NotFoundError):
            await NotificationService.mark_as_read(mock_db, uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_delete_missing_notification(self, mock_db):
        with pytest.raises(NotFoundError):
            await NotificationService.delete_notification(mock_db, uuid4(), uuid4())

    @pytest.mark.asyncio
    async def test_create_notification_stores_type_value(self, mock_db):
        recipient_id, user_id, post_id = uuid4(), uuid4(), uuid4()

        await NotificationService.create_notification(
            mock_db, recipient_id, NotificationType.COMMENT, user_id, post_id
        )

        assert mock_db.execute.await_args.args[1:] == (recipient_id, "comment", user_id, post_id)


class TestUserService:
    @pytest.mark.asyncio
    async def test_update_without_fields_returns_current_user(self, mock_db, sample_user):
        mock_db.fetchrow.return_value = sample_user

        user = await UserService.update_profile(mock_db, sample_user["id"], {"password": "x"})

        assert user == sample_user
        mock_db.fetchval.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_builds_assignments_for_known_fields(self, mock_db, sample_user):
        mock_db.fetchval.return_value = sample_user["id"]
        mock_db.fetchrow.return_value = sample_user

        await UserService.update_profile(
            mock_db, sample_user["id"], {"headline": "Engineer", "email": "new@example.com"}
        )

        query, *args = mock_db.fetchval.await_args.args
        assert "headline = $2" in query
        assert "email" not in query
        assert args == [sample_user["id"], "Engineer"]

    @pytest.mark.asyncio
    async def test_update_to_taken_username(self, mock_db):
        mock_db.fetchval.side_effect = asyncpg.UniqueViolationError("duplicate key")

        with pytest.raises(InvalidRequestError, match="Username already taken"):
            await UserService.update_profile(mock_db, uuid4(), {"username": "taken"})

    @pytest.mark.asyncio
    async def test_unknown_profile(self, mock_db):
        with pytest.raises(NotFoundError):
            await UserService.get_public_profile(mock_db, "ghost")
