"""Boundary Protocols — contracts between the consistency coordinator and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store, Cache and Index are accessed only through these Protocol types
    - Implementations provided by shell via dependency injection (app.state → Depends)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance (ADR: ExMA anti-pattern)
    - Async in Protocol: every method is an I/O boundary where the request task suspends
    - Cache speaks raw strings: encoding/decoding is the coordinator's concern, so a
      corrupt entry is observable as a decode failure rather than a client error
"""

from collections.abc import Sequence
from typing import Any, Protocol

from app.core.post_types import Post, PostPatch


class PostStore(Protocol):
    """Authoritative post persistence — implemented by infrastructure/post_store.py."""
    async def create_post(
        self, title: str, content: str, tags: Sequence[str],
    ) -> Post: ...
    async def get_post(self, post_id: int) -> Post: ...
    async def search_by_tag(self, tag: str) -> list[Post]: ...
    async def update_post(self, post_id: int, patch: PostPatch) -> Post: ...
    async def count_posts(self) -> int: ...


class PostCache(Protocol):
    """TTL-bounded look-aside cache — implemented by infrastructure/post_cache.py."""
    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...
    async def delete(self, key: str) -> None: ...


class PostIndex(Protocol):
    """Eventually-consistent search index — implemented by infrastructure/search_index.py."""
    async def ensure_index(self) -> None: ...
    async def upsert(self, post: Post) -> None: ...
    async def search_text(self, query: str) -> dict[str, Any]: ...
    async def search_related(
        self, tags: Sequence[str], exclude_id: int, size: int,
    ) -> dict[str, Any]: ...
