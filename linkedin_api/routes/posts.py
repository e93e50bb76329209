"""
Post Routes
Feed, publishing, comments and likes
"""

from uuid import UUID

from fastapi import APIRouter, status

from linkedin_api.models.post import CommentCreate, PostCreate
from linkedin_api.services.post_service import PostService
from linkedin_api.utils.dependencies import CurrentUser, DatabaseDep

router = APIRouter()


@router.get("")
@router.get("/", include_in_schema=False)
async def get_feed_posts(current_user: CurrentUser, db: DatabaseDep):
    """Posts from the current user and their connections, newest first"""
    return await PostService.get_feed_posts(db, current_user["id"])


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_post(post_data: PostCreate, current_user: CurrentUser, db: DatabaseDep):
    """Publish a post"""
    return await PostService.create_post(db, current_user["id"], post_data)


@router.delete("/delete/{post_id}")
async def delete_post(post_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    """Delete a post written by the current user"""
    await PostService.delete_post(db, post_id, current_user["id"])
    return {"message": "Post deleted successfully"}


@router.get("/{post_id}")
async def get_post_by_id(post_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    """Single post with author, likes and comments"""
    return await PostService.get_post(db, post_id)


@router.post("/{post_id}/comment")
async def create_comment(post_id: UUID, comment: CommentCreate, current_user: CurrentUser, db: DatabaseDep):
    """Comment on a post"""
    return await PostService.add_comment(db, post_id, current_user["id"], comment.content)


@router.post("/{post_id}/like")
async def like_post(post_id: UUID, current_user: CurrentUser, db: DatabaseDep):
    """Toggle the current user's like on a post"""
    return await PostService.toggle_like(db, post_id, current_user["id"])
