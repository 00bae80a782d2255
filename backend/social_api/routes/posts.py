"""
Social API: Post Route Handlers
===============================

What:  The request dispatcher: literal paths mapped to post handlers.
How:   Each handler reads its query parameters, validates them, and
       delegates to PostService with the request's database session.
Who:   Any HTTP client; every method is accepted on these paths.

Parameters are declared as optional strings and checked here so a missing
or malformed value produces 400 (FastAPI's own validation would answer 422).

Endpoints:
    /posts.get                  list visible posts, newest first
    /posts.getById   ?id        fetch one post
    /posts.post      ?content   create a post
    /posts.edit      ?id&content
    /posts.delete    ?id        soft-delete, returns pre-delete snapshot
    /posts.restore   ?id        clear the soft-delete flag
    /posts.like      ?id        likes + 1
    /posts.dislike   ?id        likes - 1
"""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from social_api.database import get_db_session
from social_api.exceptions import NotFoundError, ValidationError
from social_api.models.post import POST_ID_MAX, POST_ID_MIN
from social_api.schemas.post import PostResponse
from social_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])

# The dispatcher keys on the path only
METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

_responses = {
    400: {"description": "Missing or malformed query parameter"},
    404: {"description": "Post not found or removed"},
    500: {"description": "Server error"},
}


# ── Parameter Validation ──────────────────────────────────────────────────

def require_param(value: Optional[str], name: str) -> str:
    """Return the parameter or raise ValidationError when it is absent."""
    if value is None:
        raise ValidationError(message=f"Missing required parameter '{name}'", field=name)
    return value


def parse_id(value: Optional[str]) -> int:
    """
    Parse the `id` query parameter.

    Raises:
        ValidationError: parameter missing or not an integer (→ 400)
        NotFoundError: integer outside the id column range (→ 404)
    """
    raw = require_param(value, "id")
    try:
        post_id = int(raw)
    except ValueError:
        raise ValidationError(message=f"Parameter 'id' must be a number, got '{raw}'", field="id")
    if not POST_ID_MIN <= post_id <= POST_ID_MAX:
        raise NotFoundError(resource="post", resource_id=raw)
    return post_id


IdParam = Annotated[Optional[str], Query(alias="id", description="Post identifier")]
ContentParam = Annotated[Optional[str], Query(description="Post text")]


# ── Handlers ──────────────────────────────────────────────────────────────

@router.api_route(
    "/posts.get",
    methods=METHODS,
    response_model=List[PostResponse],
    responses={500: _responses[500]},
    summary="List visible posts, newest first",
)
async def list_posts(db: AsyncSession = Depends(get_db_session, scope="function")) -> List[PostResponse]:
    return await post_service.list_posts(db)


@router.api_route(
    "/posts.getById",
    methods=METHODS,
    response_model=PostResponse,
    responses=_responses,
    summary="Get a single post by id",
)
async def get_post(
    post_id: IdParam = None,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> PostResponse:
    return await post_service.get_post(db, parse_id(post_id))


@router.api_route(
    "/posts.post",
    methods=METHODS,
    response_model=PostResponse,
    responses={400: _responses[400], 500: _responses[500]},
    summary="Create a post",
)
async def create_post(
    content: ContentParam = None,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> PostResponse:
    return await post_service.create_post(db, require_param(content, "content"))


@router.api_route(
    "/posts.edit",
    methods=METHODS,
    response_model=PostResponse,
    responses=_responses,
    summary="Replace the content of a post",
)
async def edit_post(
    post_id: IdParam = None,
    content: ContentParam = None,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> PostResponse:
    pid = parse_id(post_id)
    return await post_service.edit_post(db, pid, require_param(content, "content"))


@router.api_route(
    "/posts.delete",
    methods=METHODS,
    response_model=PostResponse,
    responses=_responses,
    summary="Soft-delete a post",
    description="Marks the post as removed and returns it as it was before the update.",
)
async def delete_post(
    post_id: IdParam = None,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> PostResponse:
    return await post_service.delete_post(db, parse_id(post_id))


@router.api_route(
    "/posts.restore",
    methods=METHODS,
    response_model=PostResponse,
    responses=_responses,
    summary="Restore a soft-deleted post",
)
async def restore_post(
    post_id: IdParam = None,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> PostResponse:
    return await post_service.restore_post(db, parse_id(post_id))


@router.api_route(
    "/posts.like",
    methods=METHODS,
    response_model=PostResponse,
    responses=_responses,
    summary="Increment the like counter",
)
async def like_post(
    post_id: IdParam = None,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> PostResponse:
    return await post_service.like_post(db, parse_id(post_id))


@router.api_route(
    "/posts.dislike",
    methods=METHODS,
    response_model=PostResponse,
    responses=_responses,
    summary="Decrement the like counter",
)
async def dislike_post(
    post_id: IdParam = None,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> PostResponse:
    return await post_service.dislike_post(db, parse_id(post_id))
