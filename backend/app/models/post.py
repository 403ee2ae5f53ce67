"""Post ORM — persists the authoritative post row.

Invariants:
    - id is an integer identity assigned by the database, never by the client
    - title and content are non-nullable text
    - created_at is set by the database at insert time and never updated
    - tags keep insertion order and may repeat

Design Decisions:
    - TEXT[] on PostgreSQL (GIN-indexed containment), JSON elsewhere: SQLite test
      databases have no array type (ADR: tests run without a PostgreSQL server)
    - server_default=now(): the timestamp returned to callers is what the DB stored
"""

from datetime import datetime

from sqlalchemy import Integer, Text, DateTime, JSON, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from app.core.post_types import Post
from app.db.base import Base

TagsType = JSON().with_variant(ARRAY(Text), "postgresql")


class PostRow(Base):
    """Post entity — the source of truth cache and index are derived from."""
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(
        TagsType, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def to_post(self) -> Post:
        return Post(
            id=self.id,
            title=self.title,
            content=self.content,
            tags=list(self.tags or []),
            created_at=self.created_at,
        )
