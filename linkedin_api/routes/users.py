"""
User Management Routes
Suggestions, public profiles and profile updates
"""

from fastapi import APIRouter

from linkedin_api.models.user import ProfileUpdate
from linkedin_api.services.user_service import UserService
from linkedin_api.utils.dependencies import CurrentUser, DatabaseDep

router = APIRouter()


@router.get("/suggestions")
async def get_suggested_connections(current_user: CurrentUser, db: DatabaseDep):
    """People the current user may know and is not connected to"""
    return await UserService.get_suggestions(db, current_user["id"])


@router.get("/{username}")
async def get_public_profile(username: str, current_user: CurrentUser, db: DatabaseDep):
    """Public profile of any user"""
    return await UserService.get_public_profile(db, username)


@router.put("/profile")
async def update_profile(profile_data: ProfileUpdate, current_user: CurrentUser, db: DatabaseDep):
    """
    Update the current user's profile

    Only fields present in the request body are changed
    """
    changes = profile_data.model_dump(exclude_unset=True, mode="json")
    return await UserService.update_profile(db, current_user["id"], changes)
