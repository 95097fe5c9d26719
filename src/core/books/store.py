"""Book store selection."""

from src.config import get_settings
from src.core.books.base import BookStore
from src.core.books.memory import MemoryBookStore
from src.core.books.redis_store import RedisBookStore


def create_book_store(backend: str) -> BookStore:
    """Build a store for the given backend name."""
    if backend == "memory":
        return MemoryBookStore()
    if backend == "redis":
        return RedisBookStore()
    raise ValueError(f"Unknown book store backend '{backend}'. Available: memory, redis")


# Singleton instance
_store: BookStore | None = None


def get_book_store() -> BookStore:
    """Get or create the book store singleton."""
    global _store
    if _store is None:
        _store = create_book_store(get_settings().store_backend)
    return _store
