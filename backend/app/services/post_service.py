"""Post Service — consistency coordinator across store, cache and search index.

Invariants:
    - Store is authoritative: its errors always surface and abort the write path
      before any cache or index side effect happens
    - Write order within one request: store commit → cache delete → index upsert
    - A successful update always attempts the cache delete (stale-read guard)
    - Cache and index failures never fail a request that succeeded against the store;
      they are logged with post_id/operation so operators still see them
    - A corrupt cache entry is a miss, never an error to the caller
    - NotFoundError on read is propagated and never cached
    - Cancellation is never swallowed by best-effort steps

Design Decisions:
    - Collaborators injected at construction (no module globals): tests pass fakes
    - Best-effort steps awaited inline, not spawned: a response is only sent after
      the projection attempt finished, so a following read observes it (ADR: read-your-writes)
    - `except Exception` in best-effort steps: asyncio.CancelledError is a
      BaseException and passes through untouched
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from app.core.errors import ErrorContext, ValidationError
from app.core.post_codec import PostDecodeError, decode_post, encode_post
from app.core.post_types import Post, PostPatch, PostRead, post_cache_key
from app.core.repository_protocols import PostCache, PostIndex, PostStore

logger = logging.getLogger(__name__)


class PostService:
    """Sequences store writes, cache invalidation and index propagation."""

    def __init__(
        self,
        store: PostStore,
        cache: PostCache,
        index: PostIndex,
        related_size: int = 5,
    ):
        self.store = store
        self.cache = cache
        self.index = index
        self.related_size = related_size

    # ─── Writes ─────────────────────────────────────────────────

    async def create_post(
        self, title: str, content: str, tags: Sequence[str] = (),
    ) -> Post:
        post = await self.store.create_post(title, content, tags)
        await self._best_effort(
            "index_upsert", post.id, lambda: self.index.upsert(post),
        )
        return post

    async def update_post(self, post_id: int, patch: PostPatch) -> Post:
        if patch.is_empty:
            raise ValidationError(
                "nothing to update",
                context=ErrorContext(post_id=post_id, operation="update_post"),
            )
        post = await self.store.update_post(post_id, patch)
        key = post_cache_key(post_id)
        await self._best_effort(
            "cache_delete", post_id, lambda: self.cache.delete(key),
        )
        await self._best_effort(
            "index_upsert", post_id, lambda: self.index.upsert(post),
        )
        return post

    # ─── Reads ──────────────────────────────────────────────────

    async def read_post(self, post_id: int) -> PostRead:
        """Cache-aside read: cache hit, else store read + cache populate."""
        key = post_cache_key(post_id)
        cached = await self._cached_post(key, post_id)
        if cached is not None:
            return PostRead(post=cached, cached=True)

        post = await self.store.get_post(post_id)
        snapshot = encode_post(post)
        await self._best_effort(
            "cache_set", post_id, lambda: self.cache.set(key, snapshot),
        )
        return PostRead(post=post, cached=False)

    async def _cached_post(self, key: str, post_id: int) -> Post | None:
        try:
            raw = await self.cache.get(key)
        except Exception as e:
            logger.warning(
                f"Cache read failed, falling back to store: {e}",
                extra={"post_id": post_id, "cache_key": key, "operation": "cache_get"},
            )
            return None
        if not raw:
            return None
        try:
            return decode_post(raw)
        except PostDecodeError as e:
            logger.warning(
                f"Discarding corrupt cache entry: {e}",
                extra={"post_id": post_id, "cache_key": key, "operation": "cache_decode"},
            )
            return None

    async def search_by_tag(self, tag: str) -> list[Post]:
        if not tag:
            raise ValidationError("tag is required", field="tag")
        return await self.store.search_by_tag(tag)

    async def search_full_text(self, query: str) -> dict[str, Any]:
        if not query:
            raise ValidationError("q is required", field="q")
        return await self.index.search_text(query)

    async def search_related(
        self, post_id: int, size: int | None = None,
    ) -> dict[str, Any]:
        """Posts sharing at least one tag with `post_id`, excluding itself."""
        size = self.related_size if size is None else size
        if size <= 0:
            raise ValidationError("size must be positive", field="size")
        post = (await self.read_post(post_id)).post
        if not post.tags:
            return {"hits": {"total": {"value": 0, "relation": "eq"}, "hits": []}}
        return await self.index.search_related(post.tags, post.id, size)

    # ─── Helpers ────────────────────────────────────────────────

    async def _best_effort(
        self, operation: str, post_id: int, call: Callable[[], Awaitable[None]],
    ) -> None:
        try:
            await call()
        except Exception as e:
            logger.warning(
                f"Best-effort {operation} failed: {e}",
                extra={"post_id": post_id, "operation": operation},
            )
