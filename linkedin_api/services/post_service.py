"""
Post Service
Feed, publishing, comments and likes
"""

from typing import Any, Dict, List
from uuid import UUID

import structlog

from linkedin_api.db import Database
from linkedin_api.models.post import PostCreate
from linkedin_api.models.social import NotificationType
from linkedin_api.services.exceptions import NotFoundError, PermissionDeniedError
from linkedin_api.services.notification_service import NotificationService

logger = structlog.get_logger(__name__)

POST_SELECT = """
    SELECT p.id, p.content, p.image, p.created_at, p.updated_at,
           json_build_object(
               'id', a.id, 'name', a.name, 'username', a.username,
               'profile_picture', a.profile_picture, 'headline', a.headline
           ) AS author,
           COALESCE(
               (SELECT array_agg(l.user_id) FROM post_likes l WHERE l.post_id = p.id),
               '{}'::uuid[]
           ) AS likes,
           COALESCE(
               (SELECT json_agg(json_build_object(
                    'id', c.id, 'content', c.content, 'created_at', c.created_at,
                    'user', json_build_object(
                        'id', cu.id, 'name', cu.name, 'username', cu.username,
                        'profile_picture', cu.profile_picture
                    )
                ) ORDER BY c.created_at)
                FROM post_comments c JOIN users cu ON cu.id = c.user_id
                WHERE c.post_id = p.id),
               '[]'::json
           ) AS comments
    FROM posts p
    JOIN users a ON a.id = p.author_id
"""


class PostService:
    """Post management service"""

    @staticmethod
    async def get_feed_posts(db: Database, user_id: UUID) -> List[Dict[str, Any]]:
        """Posts by the user and the user's connections, newest first"""
        return await db.fetch(
            POST_SELECT + """
            WHERE p.author_id = $1
               OR p.author_id IN (SELECT connection_id FROM user_connections WHERE user_id = $1)
            ORDER BY p.created_at DESC
            """,
            user_id,
        )

    @staticmethod
    async def get_post(db: Database, post_id: UUID) -> Dict[str, Any]:
        """
        Get a single post with author, likes and comments

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await db.fetchrow(POST_SELECT + " WHERE p.id = $1", post_id)
        if not post:
            raise NotFoundError("Post not found")
        return post

    @staticmethod
    async def create_post(db: Database, author_id: UUID, post: PostCreate) -> Dict[str, Any]:
        """Publish a post and return it"""
        post_id = await db.fetchval(
            "INSERT INTO posts (author_id, content, image) VALUES ($1, $2, $3) RETURNING id",
            author_id, post.content, post.image,
        )
        logger.info("Post created", post_id=str(post_id), author_id=str(author_id))
        return await PostService.get_post(db, post_id)

    @staticmethod
    async def _get_author_id(executor, post_id: UUID) -> UUID:
        author_id = await executor.fetchval("SELECT author_id FROM posts WHERE id = $1", post_id)
        if author_id is None:
            raise NotFoundError("Post not found")
        return author_id

    @staticmethod
    async def delete_post(db: Database, post_id: UUID, user_id: UUID) -> None:
        """
        Delete a post owned by the user

        Raises:
            NotFoundError: If the post does not exist
            PermissionDeniedError: If the user is not the author
        """
        author_id = await PostService._get_author_id(db, post_id)
        if author_id != user_id:
            raise PermissionDeniedError("You are not authorized to delete this post")

        await db.execute("DELETE FROM posts WHERE id = $1", post_id)
        logger.info("Post deleted", post_id=str(post_id))

    @staticmethod
    async def add_comment(db: Database, post_id: UUID, user_id: UUID, content: str) -> Dict[str, Any]:
        """Comment on a post, notifying its author unless they commented themselves"""
        async with db.transaction() as conn:
            author_id = await PostService._get_author_id(conn, post_id)
            await conn.execute(
                "INSERT INTO post_comments (post_id, user_id, content) VALUES ($1, $2, $3)",
                post_id, user_id, content,
            )
            if author_id != user_id:
                await NotificationService.create_notification(
                    conn, author_id, NotificationType.COMMENT, user_id, post_id
                )

        return await PostService.get_post(db, post_id)

    @staticmethod
    async def toggle_like(db: Database, post_id: UUID, user_id: UUID) -> Dict[str, Any]:
        """Like a post, or remove the like if already present"""
        async with db.transaction() as conn:
            author_id = await PostService._get_author_id(conn, post_id)
            unliked = await conn.fetchval(
                "DELETE FROM post_likes WHERE post_id = $1 AND user_id = $2 RETURNING post_id",
                post_id, user_id,
            )
            if unliked is None:
                await conn.execute(
                    "INSERT INTO post_likes (post_id, user_id) VALUES ($1, $2) ON CONFLICT DO NOTHING",
                    post_id, user_id,
                )
                if author_id != user_id:
                    await NotificationService.create_notification(
                        conn, author_id, NotificationType.LIKE, user_id, post_id
                    )

        return await PostService.get_post(db, post_id)
