"""Blog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map BlogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store, cache and index clients built once in the lifespan, stored on app.state,
      and closed on shutdown
    - Startup fails if the database is unreachable; a missing search index is
      created best-effort and never blocks startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - app.state over module globals: dependencies read from the running app,
      tests override the dependencies instead of patching modules
"""

import logging
from contextlib import asynccontextmanager

from elasticsearch import AsyncElasticsearch
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import health, posts
from app.config import get_settings
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.observability import setup_logging
from app.infrastructure.post_cache import RedisPostCache, create_redis_client
from app.infrastructure.post_store import SqlAlchemyPostStore
from app.infrastructure.search_index import ElasticsearchPostIndex

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db = DatabaseSessionManager.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not await db.health_check():
        await db.dispose()
        raise RuntimeError("Database unreachable on startup")
    logger.info("DB connected")

    cache = RedisPostCache(
        create_redis_client(settings.redis_url), settings.cache_ttl_seconds,
    )
    if not await cache.ping():
        logger.warning("Redis unreachable on startup; reads will fall back to the store")

    index = ElasticsearchPostIndex(
        AsyncElasticsearch(settings.elasticsearch_url),
        settings.elasticsearch_index,
    )
    try:
        await index.ensure_index()
    except Exception as e:
        logger.warning(f"Search index not ensured on startup: {e}")

    app.state.db = db
    app.state.post_store = SqlAlchemyPostStore(db)
    app.state.post_cache = cache
    app.state.post_index = index
    logger.info("Blog API started")
    try:
        yield
    finally:
        logger.info("Blog API shutting down")
        await index.close()
        await cache.close()
        await db.dispose()


app = FastAPI(
    title="Blog API", version="1.0.0", lifespan=lifespan,
)

# CORS origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes registered explicitly
app.include_router(health.router)
app.include_router(posts.router)

register_error_handlers(app)
