"""Post Store — transactional persistence of posts and their activity log.

Invariants:
    - A post never exists without its "new_post" activity entry, and vice versa:
      both inserts share one transaction that commits or rolls back as a unit
    - Returned posts are re-read after commit (server-assigned id and created_at
      are exactly what is durable, never assembled client-side)
    - update_post never silently updates zero rows: affected-row count is checked
    - An empty patch is rejected before any database round-trip
    - Database failures surface as DatabaseError, unmodified in meaning

Design Decisions:
    - `async with db.begin()` as the transaction scope: rollback on every exit path
      except a successful commit, including cancellation (ADR: scoped acquisition)
    - Tag containment is dialect-aware: `tags @> ARRAY[:tag]` on PostgreSQL (GIN index),
      json_each membership on SQLite so tests exercise the same contract
"""

import logging
from collections.abc import Sequence

from sqlalchemy import ColumnElement, Text, func, select, type_coerce, update
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ErrorContext, NotFoundError, ValidationError
from app.core.post_types import ActivityAction, Post, PostPatch
from app.infrastructure.database import DatabaseSessionManager
from app.models.activity_log import ActivityLog
from app.models.post import PostRow

logger = logging.getLogger(__name__)


def _require_text(value: object, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string", field=field)
    return value


def _require_tags(value: object) -> list[str]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ValidationError("tags must be a list of strings", field="tags")
    if not all(isinstance(tag, str) for tag in value):
        raise ValidationError("tags must be a list of strings", field="tags")
    return list(value)


class SqlAlchemyPostStore:
    """PostStore backed by SQLAlchemy async sessions."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create_post(
        self, title: str, content: str, tags: Sequence[str] = (),
    ) -> Post:
        """Insert post + activity entry atomically, then return the durable row."""
        row = PostRow(
            title=_require_text(title, "title"),
            content=_require_text(content, "content"),
            tags=_require_tags(tags),
        )
        async with self._db.session() as db:
            async with db.begin():
                db.add(row)
                await db.flush()
                post_id = row.id
                await self._append_activity(db, ActivityAction.NEW_POST, post_id)
        logger.info("Post created", extra={"post_id": post_id})
        return await self.get_post(post_id)

    async def _append_activity(
        self, db: AsyncSession, action: ActivityAction, post_id: int,
    ) -> None:
        db.add(ActivityLog(action=action.value, post_id=post_id))
        await db.flush()

    async def get_post(self, post_id: int) -> Post:
        async with self._db.session() as db:
            result = await db.execute(
                select(PostRow).where(PostRow.id == post_id),
            )
            row = result.scalar_one_or_none()
            if row is None:
                raise NotFoundError(
                    "Post", post_id, ErrorContext(post_id=post_id, operation="get_post"),
                )
            return row.to_post()

    async def search_by_tag(self, tag: str) -> list[Post]:
        """Posts whose tags contain `tag`, most recent first."""
        async with self._db.session() as db:
            result = await db.execute(
                select(PostRow)
                .where(self._has_tag(tag))
                .order_by(PostRow.id.desc()),
            )
            return [row.to_post() for row in result.scalars().all()]

    def _has_tag(self, tag: str) -> ColumnElement[bool]:
        if self._db.dialect_name == "postgresql":
            return type_coerce(PostRow.tags, ARRAY(Text)).contains([tag])
        elements = func.json_each(PostRow.tags).table_valued("value")
        return select(elements.c.value).where(elements.c.value == tag).exists()

    async def update_post(self, post_id: int, patch: PostPatch) -> Post:
        """Apply only the supplied fields; fail on an empty patch or a missing post."""
        values = patch.values()
        if not values:
            raise ValidationError("nothing to update")
        if "title" in values:
            _require_text(values["title"], "title")
        if "content" in values:
            _require_text(values["content"], "content")
        if "tags" in values:
            values["tags"] = _require_tags(values["tags"])

        async with self._db.session() as db:
            async with db.begin():
                result = await db.execute(
                    update(PostRow)
                    .where(PostRow.id == post_id)
                    .values(**values)
                    .execution_options(synchronize_session=False),
                )
                if result.rowcount == 0:
                    raise NotFoundError(
                        "Post", post_id,
                        ErrorContext(post_id=post_id, operation="update_post"),
                    )
        logger.info(
            f"Post updated: {', '.join(values)}", extra={"post_id": post_id},
        )
        return await self.get_post(post_id)

    async def count_posts(self) -> int:
        async with self._db.session() as db:
            result = await db.execute(select(func.count()).select_from(PostRow))
            return result.scalar_one()
