"""
User Service
Profile lookup, suggestions and profile updates
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

import asyncpg
import structlog

from linkedin_api.db import Database
from linkedin_api.services.exceptions import InvalidRequestError, NotFoundError

logger = structlog.get_logger(__name__)

PUBLIC_USER_COLUMNS = """
    u.id, u.name, u.username, u.email, u.profile_picture, u.banner_img,
    u.headline, u.location, u.about, u.skills, u.experience, u.education,
    u.created_at, u.updated_at
"""

CONNECTION_IDS = """
    COALESCE(
        (SELECT array_agg(uc.connection_id) FROM user_connections uc WHERE uc.user_id = u.id),
        '{}'::uuid[]
    ) AS connections
"""

UPDATABLE_FIELDS = (
    "name", "username", "headline", "about", "location",
    "profile_picture", "banner_img", "skills", "experience", "education",
)


class UserService:
    """User management service"""

    @staticmethod
    async def get_user_by_id(db: Database, user_id: UUID) -> Optional[Dict[str, Any]]:
        """
        Get user by ID

        Returns:
            dict: User data without password hash, or None
        """
        return await db.fetchrow(
            f"SELECT {PUBLIC_USER_COLUMNS}, {CONNECTION_IDS} FROM users u WHERE u.id = $1",
            user_id,
        )

    @staticmethod
    async def get_credentials(db: Database, username: str) -> Optional[Dict[str, Any]]:
        """Get user ID and password hash for login"""
        return await db.fetchrow(
            "SELECT id, password_hash FROM users WHERE username = $1",
            username,
        )

    @staticmethod
    async def email_exists(db: Database, email: str) -> bool:
        return await db.fetchval("SELECT EXISTS(SELECT 1 FROM users WHERE email = $1)", email)

    @staticmethod
    async def username_exists(db: Database, username: str) -> bool:
        return await db.fetchval("SELECT EXISTS(SELECT 1 FROM users WHERE username = $1)", username)

    @staticmethod
    async def create_user(db: Database, name: str, username: str, email: str, password_hash: str) -> UUID:
        """Insert a new user and return its ID"""
        return await db.fetchval(
            """
            INSERT INTO users (name, username, email, password_hash)
            VALUES ($1, $2, $3, $4)
            RETURNING id
            """,
            name, username, email, password_hash,
        )

    @staticmethod
    async def get_public_profile(db: Database, username: str) -> Dict[str, Any]:
        """
        Get a user's public profile by username

        Raises:
            NotFoundError: If no user has that username
        """
        profile = await db.fetchrow(
            f"SELECT {PUBLIC_USER_COLUMNS}, {CONNECTION_IDS} FROM users u WHERE u.username = $1",
            username,
        )
        if not profile:
            raise NotFoundError("User not found")
        return profile

    @staticmethod
    async def get_suggestions(db: Database, user_id: UUID, limit: int = 3) -> List[Dict[str, Any]]:
        """Users that are neither the current user nor already connected"""
        return await db.fetch(
            """
            SELECT u.id, u.name, u.username, u.profile_picture, u.headline
            FROM users u
            WHERE u.id <> $1
              AND NOT EXISTS (
                  SELECT 1 FROM user_connections uc
                  WHERE uc.user_id = $1 AND uc.connection_id = u.id
              )
            ORDER BY random()
            LIMIT $2
            """,
            user_id, limit,
        )

    @staticmethod
    async def update_profile(db: Database, user_id: UUID, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update profile fields

        Args:
            user_id: User being updated
            changes: Field values keyed by column; unknown keys are ignored

        Returns:
            dict: Updated user data
        """
        fields = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        if not fields:
            return await UserService.get_user_by_id(db, user_id)

        assignments = []
        values: List[Any] = []
        for index, (column, value) in enumerate(fields.items(), start=2):
            assignments.append(f"{column} = ${index}")
            values.append(value)

        try:
            updated = await db.fetchval(
                f"UPDATE users SET {', '.join(assignments)}, updated_at = NOW() WHERE id = $1 RETURNING id",
                user_id, *values,
            )
        except asyncpg.UniqueViolationError:
            raise InvalidRequestError("Username already taken")

        if not updated:
            raise NotFoundError("User not found")

        logger.info("Profile updated", user_id=str(user_id), fields=sorted(fields))
        return await UserService.get_user_by_id(db, user_id)
