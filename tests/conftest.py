"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from src.config import Settings
from src.core.books.memory import MemoryBookStore
from src.core.books.redis_store import RedisBookStore
from src.core.books.store import get_book_store
from src.main import app


class FakeRedis:
    """In-process stand-in for the handful of Redis commands the book store uses."""

    def __init__(self) -> None:
        self.strings: dict[str, str] = {}
        self.zsets: dict[str, dict[str, float]] = {}
        self.down = False
        self.failing: set[str] = set()
        self.closed = False

    def _check(self, command: str) -> None:
        if self.down:
            raise RedisConnectionError("Connection refused")
        if command in self.failing:
            raise ResponseError(f"{command} failed")

    async def ping(self) -> bool:
        self._check("ping")
        return True

    async def aclose(self) -> None:
        self.closed = True

    async def set(self, key, value, nx=False, xx=False):
        self._check("set")
        if nx and key in self.strings:
            return None
        if xx and key not in self.strings:
            return None
        self.strings[key] = value
        return True

    async def get(self, key):
        self._check("get")
        return self.strings.get(key)

    async def getdel(self, key):
        self._check("getdel")
        return self.strings.pop(key, None)

    async def delete(self, *keys):
        self._check("delete")
        return sum(1 for k in keys if self.strings.pop(k, None) is not None)

    async def mget(self, keys):
        self._check("mget")
        return [self.strings.get(k) for k in keys]

    async def incr(self, key):
        self._check("incr")
        value = int(self.strings.get(key, "0")) + 1
        self.strings[key] = str(value)
        return value

    async def zadd(self, key, mapping):
        self._check("zadd")
        self.zsets.setdefault(key, {}).update(mapping)
        return len(mapping)

    async def zrem(self, key, *members):
        self._check("zrem")
        zset = self.zsets.get(key, {})
        return sum(1 for m in members if zset.pop(m, None) is not None)

    async def zrange(self, key, start, end):
        self._check("zrange")
        members = sorted(self.zsets.get(key, {}).items(), key=lambda item: item[1])
        names = [m for m, _ in members]
        return names[start:] if end == -1 else names[start : end + 1]


@pytest.fixture
def memory_store():
    """A fresh in-memory book store."""
    return MemoryBookStore()


@pytest.fixture
def fake_redis():
    """A fake Redis client."""
    return FakeRedis()


@pytest.fixture
def redis_store(fake_redis):
    """A Redis book store backed by the fake client."""
    settings = Settings(redis_key_prefix="test-books", store_reconnect_interval=0)
    return RedisBookStore(settings=settings, client=fake_redis)


def _client_for(store):
    app.dependency_overrides[get_book_store] = lambda: store
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(memory_store):
    """Create a test client backed by an in-memory store."""
    yield from _client_for(memory_store)


@pytest.fixture
def redis_client(redis_store):
    """Create a test client backed by the Redis store."""
    yield from _client_for(redis_store)


@pytest.fixture
def sample_book():
    """Sample book payload."""
    return {
        "title": "El Principito",
        "author": "Antoine de Saint-Exupéry",
        "isbn": "123456789",
        "price": 19.99,
        "url": "https://example.com/principito",
    }
