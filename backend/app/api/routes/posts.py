"""Post Routes — create, cache-aside read, partial update and search endpoints.

Invariants:
    - Routes contain no consistency logic: every call goes through PostService
    - Static paths (/search, /search-by-tag) are registered before /{post_id}
    - Post ids are positive integers within the INTEGER column range; anything
      else is a 400 via RequestValidationError
    - Missing or empty query parameters are rejected by PostService (400), never 422

Design Decisions:
    - Domain errors propagate to the global handlers (api/error_handlers.py):
      no per-route try/except, one error shape for the whole API
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.dependencies import get_post_service
from app.core.post_types import MAX_POST_ID
from app.schemas.post import (
    PostCreate, PostUpdate, PostResponse, PostReadResponse,
)
from app.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])

PostIdPath = Annotated[
    int, Path(gt=0, le=MAX_POST_ID, description="Positive integer post id"),
]


@router.post(
    "", response_model=PostResponse, status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostCreate, service: PostService = Depends(get_post_service),
):
    """Create a post and its activity log entry in one transaction."""
    post = await service.create_post(body.title, body.content, body.tags)
    return PostResponse.from_post(post)


@router.get("/search-by-tag", response_model=list[PostResponse])
async def search_by_tag(
    tag: str | None = Query(None),
    service: PostService = Depends(get_post_service),
):
    """Exact tag containment, most recent first."""
    posts = await service.search_by_tag(tag or "")
    return [PostResponse.from_post(p) for p in posts]


@router.get("/search")
async def search_full_text(
    q: str | None = Query(None),
    service: PostService = Depends(get_post_service),
):
    """Full-text search over title and content (index-backed)."""
    return await service.search_full_text(q or "")


@router.get("/{post_id}", response_model=PostReadResponse)
async def read_post(
    post_id: PostIdPath,
    service: PostService = Depends(get_post_service),
):
    """Cache-aside read."""
    read = await service.read_post(post_id)
    return PostReadResponse.from_read(read)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    body: PostUpdate,
    post_id: PostIdPath,
    service: PostService = Depends(get_post_service),
):
    """Partial update, then cache invalidation and re-index."""
    post = await service.update_post(post_id, body.to_patch())
    return PostResponse.from_post(post)


@router.get("/{post_id}/related")
async def related_posts(
    post_id: PostIdPath,
    service: PostService = Depends(get_post_service),
):
    """Posts sharing a tag with post_id, excluding post_id itself."""
    return await service.search_related(post_id)
