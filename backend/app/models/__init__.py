"""ORM Models — SQLAlchemy declarative models for posts and their activity log.

Invariants:
    - All models inherit from Base (db/base.py)
    - PostRow is the aggregate root; activity entries reference it by post_id

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from app.models.post import PostRow  # noqa: F401
from app.models.activity_log import ActivityLog  # noqa: F401
