"""Health & Readiness Probes — liveness and database readiness endpoints.

Invariants:
    - GET /healthz always returns 200 if process is up (liveness)
    - GET /db/health returns 500 with db_ok=false if the posts table is unreachable

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load
      balancer (ADR: production readiness)
    - Readiness counts posts instead of SELECT 1: proves the schema is migrated too
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_post_store
from app.core.repository_protocols import PostStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}


@router.get("/db/health")
async def db_health_check(store: PostStore = Depends(get_post_store)):
    """Readiness probe — includes database connectivity."""
    try:
        count = await store.count_posts()
    except Exception as e:
        logger.error(f"DB health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"db_ok": False, "error": str(e)},
        )
    return {"db_ok": True, "posts_count": count}
