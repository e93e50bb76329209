"""
Security utilities

Password hashing and session tokens carried in the auth cookie.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
import structlog

from linkedin_api.config import Settings

logger = structlog.get_logger(__name__)

SESSION_COOKIE = "jwt-linkedin"


def _sync_hash_password(password: str) -> str:
    """Synchronous bcrypt hash (CPU-bound)"""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def _sync_verify_password(password: str, hashed_password: str) -> bool:
    """Synchronous bcrypt verify (CPU-bound)"""
    return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))


async def hash_password(password: str) -> str:
    """Hash password using bcrypt in a worker thread"""
    return await asyncio.to_thread(_sync_hash_password, password)


async def verify_password(password: str, hashed_password: str) -> bool:
    """Verify password against hash in a worker thread"""
    return await asyncio.to_thread(_sync_verify_password, password, hashed_password)


def create_session_token(user_id: str, settings: Settings) -> str:
    """
    Generate the JWT stored in the session cookie

    Args:
        user_id: Authenticated user ID
        settings: Settings carrying the signing secret and lifetime

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expires_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str, settings: Settings) -> Optional[str]:
    """
    Verify a session token

    Returns:
        The user ID it was issued for, or None if invalid or expired
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Session token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid session token", error=str(e))
        return None
    return payload.get("userId")


def session_cookie_options(settings: Settings) -> dict:
    """Keyword arguments for Response.set_cookie"""
    return {
        "key": SESSION_COOKIE,
        "httponly": True,
        "samesite": "strict",
        "secure": settings.is_production,
        "max_age": settings.jwt_expires_days * 24 * 60 * 60,
    }
