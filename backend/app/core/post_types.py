"""Post Types — the shared data model every store, cache and index adapter speaks.

Invariants:
    - Post is immutable once built; Cache and Index only ever hold copies
    - PostPatch distinguishes "not provided" (UNSET) from any provided value, including []
    - Cache keys are always "post:<id>" — built only by post_cache_key()
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - Frozen dataclass over ORM row in the core: adapters convert at the boundary,
      core never sees SQLAlchemy state (ADR: functional core, imperative shell)
    - UNSET sentinel over Optional: None is a value a caller may send, absence is not
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", int)

# posts.id is a 32-bit INTEGER column
MAX_POST_ID = 2**31 - 1

CACHE_KEY_PREFIX = "post:"


def post_cache_key(post_id: int) -> str:
    """Cache key for a post snapshot."""
    return f"{CACHE_KEY_PREFIX}{post_id}"


# ─── Enums ───────────────────────────────────────────────────────

class ActivityAction(str, Enum):
    """Activity log actions — maps to DB `activity_logs.action` column."""
    NEW_POST = "new_post"


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Post:
    """Snapshot of a persisted post."""
    id: int
    title: str
    content: str
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    def index_document(self) -> dict[str, Any]:
        """Body mirrored into the search index."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class PostRead:
    """Result of a cache-aside read: the post plus where it came from."""
    post: Post
    cached: bool


class _Unset:
    """Marker type for a field the caller did not provide."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class PostPatch:
    """Partial update — each field is either UNSET or the new value."""
    title: Any = UNSET
    content: Any = UNSET
    tags: Any = UNSET

    @property
    def is_empty(self) -> bool:
        return not self.values()

    def values(self) -> dict[str, Any]:
        """Only the supplied fields, in column order."""
        supplied = {
            "title": self.title,
            "content": self.content,
            "tags": self.tags,
        }
        return {
            name: value for name, value in supplied.items()
            if value is not UNSET
        }
