"""ActivityLog ORM — append-only audit trail written in the same transaction as its post.

Invariants:
    - Every post has exactly one "new_post" entry, committed atomically with it
    - post_id links to the owning post
    - Rows are never updated or deleted by the application

Design Decisions:
    - Logging table, not enforcement: no read path depends on it
    - action as String over DB enum: new actions need no migration
"""

from datetime import datetime

from sqlalchemy import Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ActivityLog(Base):
    """ActivityLog entry — what happened to which post."""
    __tablename__ = "activity_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
