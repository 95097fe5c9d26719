"""Redis-backed persistent book storage.

Each book is stored as a JSON document under ``{prefix}:book:{isbn}``. Insertion
order is kept in the sorted set ``{prefix}:index``, scored by the counter
``{prefix}:seq``.
"""

import time
from typing import Awaitable, Optional

import redis.asyncio as redis
import structlog
from pydantic import ValidationError
from redis.exceptions import RedisError

from src.api.schemas.books import Book, BookUpdate
from src.config import Settings, get_settings
from src.core.books.base import BookStore, StoreInfo
from src.core.books.exceptions import (
    BookNotFoundError,
    DuplicateBookError,
    StoreUnavailableError,
)

logger = structlog.get_logger(__name__)


class RedisBookStore(BookStore):
    """Book store persisting documents in Redis."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._prefix = self._settings.redis_key_prefix
        self._client: Optional[redis.Redis] = client
        self._connected: bool = False
        self._last_attempt: float | None = None

    @property
    def info(self) -> StoreInfo:
        return StoreInfo(backend="redis", connected=self.is_available, persistent=True)

    @property
    def is_available(self) -> bool:
        """Check if Redis is connected."""
        return self._connected and self._client is not None

    def _key(self, isbn: str) -> str:
        return f"{self._prefix}:book:{isbn}"

    @property
    def _index_key(self) -> str:
        return f"{self._prefix}:index"

    @property
    def _seq_key(self) -> str:
        return f"{self._prefix}:seq"

    async def connect(self) -> bool:
        """
        Initialize the Redis connection.

        A failure is logged and leaves the store disconnected; the process
        keeps running and data operations retry the connection later.
        """
        self._last_attempt = time.monotonic()
        try:
            if self._client is None:
                self._client = redis.from_url(
                    self._settings.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                )
            await self._client.ping()
            self._connected = True
            logger.info("Redis book store connected", url=self._settings.redis_url)
            return True
        except Exception as e:
            logger.warning(
                "Redis connection failed, book store unavailable",
                url=self._settings.redis_url,
                error=str(e),
            )
            self._connected = False
            return False

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        if self._client:
            await self._client.aclose()
            self._connected = False
            logger.info("Redis book store disconnected")

    async def check(self) -> bool:
        """Ping Redis, reconnecting at most once per interval."""
        try:
            client = await self._ensure_connected()
            await client.ping()
        except StoreUnavailableError:
            return False
        except RedisError as e:
            self._fail("ping", e)
            return False
        return True

    async def _ensure_connected(self) -> redis.Redis:
        """Return a live client, reconnecting at most once per interval."""
        if self.is_available:
            return self._client

        interval = self._settings.store_reconnect_interval
        if self._last_attempt is None or time.monotonic() - self._last_attempt >= interval:
            logger.info("Reconnecting to Redis book store")
            if await self.connect():
                return self._client

        raise StoreUnavailableError("Redis book store is not connected")

    def _fail(self, operation: str, error: Exception) -> StoreUnavailableError:
        """Mark the store disconnected after a backend error."""
        logger.error("Redis book store operation failed", operation=operation, error=str(error))
        self._connected = False
        return StoreUnavailableError(f"Redis {operation} failed: {error}")

    async def _rollback(self, operation: str, isbn: str, undo: Awaitable) -> None:
        """Undo the document write of a half-applied operation."""
        try:
            await undo
            logger.warning("Rolled back Redis book write", operation=operation, isbn=isbn)
        except RedisError as e:
            logger.error("Redis rollback failed", operation=operation, isbn=isbn, error=str(e))

    def _load(self, raw: str) -> Book:
        try:
            return Book.model_validate_json(raw)
        except ValidationError as e:
            raise StoreUnavailableError(f"Corrupt book document: {e}")

    async def add_book(self, book: Book) -> Book:
        client = await self._ensure_connected()
        created = False
        try:
            created = await client.set(self._key(book.isbn), book.model_dump_json(), nx=True)
            if not created:
                raise DuplicateBookError(book.isbn)
            seq = await client.incr(self._seq_key)
            await client.zadd(self._index_key, {book.isbn: seq})
        except RedisError as e:
            if created:
                await self._rollback("create", isbn=book.isbn, undo=client.delete(self._key(book.isbn)))
            raise self._fail("create", e)

        logger.info("Book created", isbn=book.isbn, backend="redis")
        return book

    async def list_books(self) -> list[Book]:
        client = await self._ensure_connected()
        try:
            isbns = await client.zrange(self._index_key, 0, -1)
            if not isbns:
                return []
            documents = await client.mget([self._key(isbn) for isbn in isbns])
        except RedisError as e:
            raise self._fail("list", e)

        # Documents deleted between the two reads are skipped
        return [self._load(doc) for doc in documents if doc is not None]

    async def get_book(self, isbn: str) -> Book:
        client = await self._ensure_connected()
        try:
            raw = await client.get(self._key(isbn))
        except RedisError as e:
            raise self._fail("get", e)

        if raw is None:
            raise BookNotFoundError(isbn)
        return self._load(raw)

    async def update_book(self, isbn: str, changes: BookUpdate) -> Book:
        client = await self._ensure_connected()
        try:
            raw = await client.get(self._key(isbn))
            if raw is None:
                raise BookNotFoundError(isbn)
            updated = self._load(raw).apply(changes)
            if not await client.set(self._key(isbn), updated.model_dump_json(), xx=True):
                raise BookNotFoundError(isbn)
        except RedisError as e:
            raise self._fail("update", e)

        logger.info("Book updated", isbn=isbn, backend="redis")
        return updated

    async def delete_book(self, isbn: str) -> Book:
        client = await self._ensure_connected()
        raw = None
        try:
            raw = await client.getdel(self._key(isbn))
            if raw is None:
                raise BookNotFoundError(isbn)
            await client.zrem(self._index_key, isbn)
        except RedisError as e:
            if raw is not None:
                await self._rollback("delete", isbn=isbn, undo=client.set(self._key(isbn), raw, nx=True))
            raise self._fail("delete", e)

        logger.info("Book deleted", isbn=isbn, backend="redis")
        return self._load(raw)
