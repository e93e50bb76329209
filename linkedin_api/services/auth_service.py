"""
Authentication Service
Account registration and credential checks
"""

from typing import Any, Dict

import asyncpg
import structlog

from linkedin_api.db import Database
from linkedin_api.models.user import SignupRequest
from linkedin_api.services.exceptions import AuthenticationError, InvalidRequestError
from linkedin_api.services.user_service import UserService
from linkedin_api.utils.security import hash_password, verify_password

logger = structlog.get_logger(__name__)


class AuthService:
    """User authentication service"""

    @staticmethod
    async def register_user(db: Database, signup: SignupRequest) -> Dict[str, Any]:
        """
        Register new user

        Args:
            signup: Validated signup payload

        Returns:
            dict: The created user, without password hash

        Raises:
            InvalidRequestError: If the email or username is already in use
        """
        if await UserService.email_exists(db, signup.email):
            raise InvalidRequestError("Email already exists")
        if await UserService.username_exists(db, signup.username):
            raise InvalidRequestError("Username already exists")

        password_hash = await hash_password(signup.password)

        try:
            user_id = await UserService.create_user(
                db, signup.name, signup.username, signup.email, password_hash
            )
        except asyncpg.UniqueViolationError:
            # Lost a race with a concurrent signup for the same email/username
            raise InvalidRequestError("Email or username already exists")

        logger.info("User registered", user_id=str(user_id), username=signup.username)
        return await UserService.get_user_by_id(db, user_id)

    @staticmethod
    async def authenticate_user(db: Database, username: str, password: str) -> Dict[str, Any]:
        """
        Check username and password

        Raises:
            AuthenticationError: On unknown username or wrong password
        """
        credentials = await UserService.get_credentials(db, username)
        if not credentials or not await verify_password(password, credentials["password_hash"]):
            logger.info("Login rejected", username=username)
            raise AuthenticationError("Invalid credentials")

        return await UserService.get_user_by_id(db, credentials["id"])
