"""Book storage module."""

from src.core.books.base import BookStore, StoreInfo
from src.core.books.exceptions import (
    BookNotFoundError,
    BookStoreError,
    DuplicateBookError,
    StoreUnavailableError,
)
from src.core.books.memory import MemoryBookStore
from src.core.books.redis_store import RedisBookStore
from src.core.books.store import create_book_store, get_book_store

__all__ = [
    "BookStore",
    "StoreInfo",
    "BookStoreError",
    "BookNotFoundError",
    "DuplicateBookError",
    "StoreUnavailableError",
    "MemoryBookStore",
    "RedisBookStore",
    "create_book_store",
    "get_book_store",
]
