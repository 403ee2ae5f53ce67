"""Elasticsearch Post Index — eventually-consistent full-text and tag search over posts.

Invariants:
    - Document identity is str(post.id): upsert() is a full replace, never a merge
    - ensure_index() is idempotent — an index that already exists is not an error
    - search_related() never returns the post it was asked about (ids must_not clause)
    - All client failures mapped to SearchIndexError (core/errors.py)

Design Decisions:
    - Raw response body returned from searches: ranking and hit shape are the
      engine's concern, the API passes them through unchanged
    - Mapping: title/content analyzed text, tags keyword (exact term matching)
"""

import logging
from collections.abc import Sequence
from typing import Any

from elasticsearch import AsyncElasticsearch, ApiError, BadRequestError, TransportError

from app.core.errors import ErrorContext, SearchIndexError
from app.core.post_types import Post

logger = logging.getLogger(__name__)

POST_MAPPINGS: dict[str, Any] = {
    "properties": {
        "title": {"type": "text"},
        "content": {"type": "text"},
        "tags": {"type": "keyword"},
    },
}

_ALREADY_EXISTS = "resource_already_exists_exception"


def _is_already_exists(e: ApiError) -> bool:
    if e.error == _ALREADY_EXISTS:
        return True
    body = e.body if isinstance(e.body, dict) else {}
    error = body.get("error")
    return isinstance(error, dict) and error.get("type") == _ALREADY_EXISTS


def build_text_query(query: str) -> dict[str, Any]:
    return {
        "multi_match": {
            "query": query,
            "fields": ["title", "content"],
        },
    }


def build_related_query(tags: Sequence[str], exclude_id: int) -> dict[str, Any]:
    return {
        "bool": {
            "must_not": [{"ids": {"values": [str(exclude_id)]}}],
            "should": [{"terms": {"tags": list(tags)}}],
            "minimum_should_match": 1,
        },
    }


class ElasticsearchPostIndex:
    """PostIndex over an AsyncElasticsearch client."""

    def __init__(self, client: AsyncElasticsearch, index_name: str = "posts"):
        self.client = client
        self.index_name = index_name

    async def ensure_index(self) -> None:
        try:
            await self.client.indices.create(
                index=self.index_name, mappings=POST_MAPPINGS,
            )
            logger.info(f"Search index '{self.index_name}' created")
        except BadRequestError as e:
            if _is_already_exists(e):
                logger.debug(f"Search index '{self.index_name}' already exists")
                return
            raise SearchIndexError(str(e), "create_index") from e
        except (ApiError, TransportError) as e:
            raise SearchIndexError(str(e), "create_index") from e

    async def upsert(self, post: Post) -> None:
        try:
            await self.client.index(
                index=self.index_name,
                id=str(post.id),
                document=post.index_document(),
            )
        except (ApiError, TransportError) as e:
            raise SearchIndexError(
                str(e), "upsert", ErrorContext(post_id=post.id, operation="index_upsert"),
            ) from e

    async def search_text(self, query: str) -> dict[str, Any]:
        try:
            response = await self.client.search(
                index=self.index_name, query=build_text_query(query),
            )
        except (ApiError, TransportError) as e:
            raise SearchIndexError(str(e), "search") from e
        return dict(response.body)

    async def search_related(
        self, tags: Sequence[str], exclude_id: int, size: int,
    ) -> dict[str, Any]:
        try:
            response = await self.client.search(
                index=self.index_name,
                size=size,
                query=build_related_query(tags, exclude_id),
            )
        except (ApiError, TransportError) as e:
            raise SearchIndexError(
                str(e), "search_related",
                ErrorContext(post_id=exclude_id, operation="search_related"),
            ) from e
        return dict(response.body)

    async def close(self) -> None:
        await self.client.close()
