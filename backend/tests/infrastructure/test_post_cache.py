"""Redis Post Cache — verifies TTL on every write and error mapping.

Design Decisions:
    - _FakeRedis mimics redis.asyncio's get/set/delete signatures; no server needed
"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.errors import CacheError
from app.infrastructure.post_cache import RedisPostCache


class _FakeRedis:
    def __init__(self, fail: bool = False):
        self.data: dict[str, str] = {}
        self.expiries: dict[str, int] = {}
        self.fail = fail
        self.closed = False

    def _check(self):
        if self.fail:
            raise RedisConnectionError("Connection refused")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self._check()
        self.data[key] = value
        self.expiries[key] = ex
        return True

    async def delete(self, key):
        self._check()
        return 1 if self.data.pop(key, None) is not None else 0

    async def ping(self):
        self._check()
        return True

    async def aclose(self):
        self.closed = True


@pytest.mark.asyncio
async def test_set_applies_configured_ttl():
    client = _FakeRedis()
    cache = RedisPostCache(client, ttl_seconds=300)

    await cache.set("post:1", "{}")

    assert client.expiries["post:1"] == 300
    assert await cache.get("post:1") == "{}"


@pytest.mark.asyncio
async def test_get_miss_returns_none():
    assert await RedisPostCache(_FakeRedis()).get("post:1") is None


@pytest.mark.asyncio
async def test_get_decodes_bytes():
    client = _FakeRedis()
    client.data["post:1"] = b'{"id": 1}'
    assert await RedisPostCache(client).get("post:1") == '{"id": 1}'


@pytest.mark.asyncio
async def test_delete_removes_entry():
    client = _FakeRedis()
    cache = RedisPostCache(client)
    await cache.set("post:1", "{}")

    await cache.delete("post:1")

    assert await cache.get("post:1") is None


@pytest.mark.parametrize("call", [
    lambda c: c.get("post:1"),
    lambda c: c.set("post:1", "{}"),
    lambda c: c.delete("post:1"),
])
@pytest.mark.asyncio
async def test_client_failures_map_to_cache_error(call):
    cache = RedisPostCache(_FakeRedis(fail=True))
    with pytest.raises(CacheError):
        await call(cache)


@pytest.mark.asyncio
async def test_ping_reports_unreachable_server():
    assert await RedisPostCache(_FakeRedis()).ping() is True
    assert await RedisPostCache(_FakeRedis(fail=True)).ping() is False


def test_non_positive_ttl_rejected():
    with pytest.raises(ValueError):
        RedisPostCache(_FakeRedis(), ttl_seconds=0)
