"""
FastAPI Dependencies
Database, settings and cookie-session authentication
"""

from typing import Annotated, Optional
from uuid import UUID

import structlog
from fastapi import Depends, HTTPException, Request, status

from linkedin_api.config import Settings
from linkedin_api.db import Database
from linkedin_api.services.user_service import UserService
from linkedin_api.utils.security import SESSION_COOKIE, decode_session_token

logger = structlog.get_logger(__name__)


def get_database(request: Request) -> Database:
    """Dependency to get database instance"""
    return request.app.state.db


def get_app_settings(request: Request) -> Settings:
    """Dependency to get the settings the app was built with"""
    return request.app.state.settings


DatabaseDep = Annotated[Database, Depends(get_database)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]


async def get_current_user(request: Request, db: DatabaseDep, settings: SettingsDep) -> dict:
    """
    Get current authenticated user from the session cookie

    Raises:
        HTTPException: 401 if the cookie is missing, invalid, expired, or
            names a user that no longer exists
    """
    token: Optional[str] = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - No Token Provided",
        )

    user_id = decode_session_token(token, settings)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - Invalid Token",
        )

    try:
        user = await UserService.get_user_by_id(db, UUID(user_id))
    except ValueError:
        user = None

    if not user:
        logger.warning("Session refers to unknown user", user_id=user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


CurrentUser = Annotated[dict, Depends(get_current_user)]
