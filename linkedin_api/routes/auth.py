"""
Authentication Routes
Signup, login, logout and the current session's user
"""

import structlog
from fastapi import APIRouter, HTTPException, Response, status

from linkedin_api.models.user import LoginRequest, SignupRequest
from linkedin_api.services.auth_service import AuthService
from linkedin_api.services.exceptions import ServiceError
from linkedin_api.utils.dependencies import CurrentUser, DatabaseDep, SettingsDep
from linkedin_api.utils.security import (
    SESSION_COOKIE, create_session_token, session_cookie_options
)

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(signup_data: SignupRequest, response: Response, db: DatabaseDep, settings: SettingsDep):
    """
    Register new user

    Creates the account and starts a session for it
    """
    try:
        user = await AuthService.register_user(db, signup_data)
    except ServiceError:
        raise
    except Exception as e:
        logger.error("Signup failed", error=str(e), username=signup_data.username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed",
        )

    token = create_session_token(user["id"], settings)
    response.set_cookie(value=token, **session_cookie_options(settings))

    return {"message": "User registered successfully", "user": user}


@router.post("/login")
async def login(login_data: LoginRequest, response: Response, db: DatabaseDep, settings: SettingsDep):
    """Authenticate with username and password"""
    try:
        user = await AuthService.authenticate_user(db, login_data.username, login_data.password)
    except ServiceError:
        raise
    except Exception as e:
        logger.error("Login failed", error=str(e), username=login_data.username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed",
        )

    token = create_session_token(user["id"], settings)
    response.set_cookie(value=token, **session_cookie_options(settings))

    logger.info("User logged in", user_id=str(user["id"]))
    return {"message": "Logged in successfully", "user": user}


@router.post("/logout")
async def logout(response: Response, settings: SettingsDep):
    """End the session by clearing its cookie"""
    options = session_cookie_options(settings)
    response.delete_cookie(
        key=SESSION_COOKIE,
        httponly=options["httponly"],
        samesite=options["samesite"],
        secure=options["secure"],
    )
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_me(current_user: CurrentUser):
    """The user the session cookie belongs to"""
    return current_user
