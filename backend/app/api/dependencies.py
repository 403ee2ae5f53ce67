"""API Dependencies — hand process-wide clients to route handlers via FastAPI Depends.

Invariants:
    - Store, cache and index singletons live on app.state, set once by the lifespan
    - Routes never reach app.state directly; they receive a PostService or PostStore
    - A missing collaborator is a startup bug, reported as RuntimeError

Design Decisions:
    - Depends() over module globals: tests swap in fakes with app.dependency_overrides
    - PostService is cheap to build per request: it only holds references
"""

from fastapi import Request

from app.config import get_settings
from app.core.repository_protocols import PostStore
from app.services.post_service import PostService


def _state_attr(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized")
    return value


def get_post_store(request: Request) -> PostStore:
    return _state_attr(request, "post_store")


def get_post_service(request: Request) -> PostService:
    """FastAPI dependency for the consistency coordinator."""
    return PostService(
        store=_state_attr(request, "post_store"),
        cache=_state_attr(request, "post_cache"),
        index=_state_attr(request, "post_index"),
        related_size=get_settings().related_posts_size,
    )
