"""Settings — verifies URL normalization and TTL bounds."""

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_cache_ttl_defaults_to_five_minutes(monkeypatch):
    monkeypatch.delenv("CACHE_TTL_SECONDS", raising=False)
    assert Settings().cache_ttl_seconds == 300


def test_cache_ttl_read_from_environment(monkeypatch):
    monkeypatch.setenv("CACHE_TTL_SECONDS", "60")
    assert Settings().cache_ttl_seconds == 60


def test_non_positive_ttl_rejected():
    with pytest.raises(ValidationError):
        Settings(cache_ttl_seconds=0)
