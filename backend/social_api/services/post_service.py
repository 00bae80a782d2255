"""
Social API: Post Service (Business Logic)
=========================================

What:  The statements behind every /posts.* endpoint.
How:   Each method issues one or two parameterized statements against the
       posts table through the request's AsyncSession and maps rows to
       PostResponse objects.
Who:   Called by route handlers in routes/posts.py.

Visibility Rules:
    list / get / edit / like / dislike   → only rows with removed = false
    delete / restore                     → any row whose flag would change

Counter Updates:
    Like and dislike run a single `UPDATE ... SET likes = likes + :delta`
    guarded by `removed = false`, then read the row back. Concurrent likes
    on the same post are serialized by the database row lock.

Design Decision:
    PostService is stateless: it receives the session for each call, so a
    request never shares state with another request.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from sqlalchemy import Row, false, insert, select, true, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.exceptions import DatabaseError, NotFoundError
from social_api.models.post import Post
from social_api.schemas.post import PostResponse

logger = logging.getLogger(__name__)

# Columns exposed in responses; `removed` stays internal
POST_COLUMNS = (Post.id, Post.content, Post.likes, Post.created)


@contextmanager
def _database_errors(operation: str, **context: Any) -> Iterator[None]:
    """
    Translate SQLAlchemy failures into DatabaseError.

    Application exceptions (NotFoundError) pass through untouched; driver
    details go to the log and into the exception context only.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            message=f"Could not {operation}. Please try again.",
            context={**context, "error_type": type(e).__name__},
        )


def _to_response(row: Row) -> PostResponse:
    return PostResponse(**row._mapping)


def _select_posts(visible_only: bool = True):
    query = select(*POST_COLUMNS)
    if visible_only:
        query = query.where(Post.removed == false())
    return query


class PostService:
    """
    Business logic layer for post operations.

    Responsibilities:
        - list_posts(): visible posts, newest first
        - get_post(): one visible post
        - create_post(): insert and read back
        - edit_post(): replace content of a visible post
        - delete_post() / restore_post(): toggle the soft-delete flag
        - like_post() / dislike_post(): adjust the counter by one
    """

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """
        List every visible post ordered by id, highest first.

        Query:
            SELECT id, content, likes, created FROM posts
            WHERE removed = false ORDER BY id DESC
        """
        with _database_errors("list posts"):
            result = await db.execute(_select_posts().order_by(Post.id.desc()))
            return [_to_response(row) for row in result.all()]

    async def get_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """
        Fetch one visible post.

        Raises:
            NotFoundError: no row with that id, or the row is soft-deleted (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        with _database_errors("retrieve the post", post_id=post_id):
            row = await self._fetch(db, post_id)
        if row is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return _to_response(row)

    async def create_post(self, db: AsyncSession, content: str) -> PostResponse:
        """
        Insert a post with only `content` and return the stored row.

        The generated id comes back through RETURNING; the row is then read
        back so server-assigned columns (likes, created) are included.
        """
        with _database_errors("create the post"):
            result = await db.execute(
                insert(Post).values(content=content).returning(Post.id)
            )
            post_id = result.scalar_one()
            row = await self._fetch(db, post_id, visible_only=False)

        logger.info("Post %s created (%d chars)", post_id, len(content))
        return _to_response(row)

    async def edit_post(self, db: AsyncSession, post_id: int, content: str) -> PostResponse:
        """
        Replace the content of a visible post and return the refreshed row.

        Raises:
            NotFoundError: zero rows affected (absent or soft-deleted)
        """
        with _database_errors("edit the post", post_id=post_id):
            affected = await self._update(
                db,
                post_id,
                Post.removed == false(),
                content=content,
            )
            if affected == 0:
                raise NotFoundError(resource="post", resource_id=str(post_id))
            row = await self._fetch(db, post_id)

        if row is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        logger.info("Post %s edited", post_id)
        return _to_response(row)

    async def delete_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """
        Soft-delete a post and return its snapshot from before the update.

        The row is read without the visibility filter. The update only
        matches a post that is not yet removed, so deleting twice is a 404.
        """
        return await self._set_removed(db, post_id, removed=True)

    async def restore_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """Clear the soft-delete flag; restoring a visible post is a 404."""
        return await self._set_removed(db, post_id, removed=False)

    async def like_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """Increment the like counter of a visible post."""
        return await self._adjust_likes(db, post_id, delta=1)

    async def dislike_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """Decrement the like counter of a visible post."""
        return await self._adjust_likes(db, post_id, delta=-1)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _fetch(
        self,
        db: AsyncSession,
        post_id: int,
        visible_only: bool = True,
    ) -> Optional[Row]:
        result = await db.execute(
            _select_posts(visible_only).where(Post.id == post_id)
        )
        return result.first()

    async def _update(
        self,
        db: AsyncSession,
        post_id: int,
        *criteria: Any,
        **values: Any,
    ) -> int:
        """Run a targeted UPDATE by id and return the number of affected rows."""
        stmt = update(Post).where(Post.id == post_id, *criteria)
        result = await db.execute(
            stmt.values(**values).execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def _set_removed(
        self,
        db: AsyncSession,
        post_id: int,
        removed: bool,
    ) -> PostResponse:
        action = "delete" if removed else "restore"
        # Only rows whose flag actually changes count as affected
        current = false() if removed else true()
        with _database_errors(f"{action} the post", post_id=post_id):
            snapshot = await self._fetch(db, post_id, visible_only=False)
            affected = await self._update(
                db,
                post_id,
                Post.removed == current,
                removed=removed,
            )

        if affected == 0 or snapshot is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        logger.info("Post %s %sd", post_id, action)
        return _to_response(snapshot)

    async def _adjust_likes(
        self,
        db: AsyncSession,
        post_id: int,
        delta: int,
    ) -> PostResponse:
        with _database_errors("update likes", post_id=post_id):
            affected = await self._update(
                db,
                post_id,
                Post.removed == false(),
                likes=Post.likes + delta,
            )
            if affected == 0:
                raise NotFoundError(resource="post", resource_id=str(post_id))
            row = await self._fetch(db, post_id)

        if row is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        logger.info("Post %s likes %+d -> %d", post_id, delta, row.likes)
        return _to_response(row)


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
