"""
User Route Tests
"""

from unittest.mock import AsyncMock, patch

import pytest

from linkedin_api.services.user_service import UserService


class TestProfileUpdate:
    def test_only_sent_fields_are_updated(self, auth_client, sample_user):
        with patch.object(UserService, "update_profile", new=AsyncMock(return_value=sample_user)) as mock_update:
            response = auth_client.put("/api/v1/users/profile", json={"headline": "Engineer"})

        assert response.status_code == 200
        _, user_id, changes = mock_update.await_args.args
        assert user_id == sample_user["id"]
        assert changes == {"headline": "Engineer"}

    @pytest.mark.parametrize("body", [
        {"headline": None},
        {"skills": None},
        {"headline": None, "skills": None},
        {"name": "Ada", "education": None},
    ])
    def test_null_field_is_rejected(self, auth_client, body):
        with patch.object(UserService, "update_profile", new=AsyncMock()) as mock_update:
            response = auth_client.put("/api/v1/users/profile", json=body)

        assert response.status_code == 422
        mock_update.assert_not_called()

    def test_username_with_whitespace_is_rejected(self, auth_client):
        with patch.object(UserService, "update_profile", new=AsyncMock()) as mock_update:
            response = auth_client.put("/api/v1/users/profile", json={"username": "ada l"})

        assert response.status_code == 422
        mock_update.assert_not_called()

    def test_empty_body_changes_nothing(self, auth_client, sample_user):
        with patch.object(UserService, "update_profile", new=AsyncMock(return_value=sample_user)) as mock_update:
            response = auth_client.put("/api/v1/users/profile", json={})

        assert response.status_code == 200
        assert mock_update.await_args.args[2] == {}
