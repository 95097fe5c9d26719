"""In-memory book storage."""

import asyncio

import structlog

from src.api.schemas.books import Book, BookUpdate
from src.core.books.base import BookStore, StoreInfo
from src.core.books.exceptions import BookNotFoundError, DuplicateBookError

logger = structlog.get_logger(__name__)


class MemoryBookStore(BookStore):
    """Simple in-memory store for books.

    Writes are serialized through a lock; reads work on a snapshot.
    """

    def __init__(self) -> None:
        self._books: dict[str, Book] = {}  # isbn -> book, insertion ordered
        self._lock = asyncio.Lock()

    @property
    def info(self) -> StoreInfo:
        return StoreInfo(backend="memory", connected=True, persistent=False)

    async def add_book(self, book: Book) -> Book:
        async with self._lock:
            if book.isbn in self._books:
                raise DuplicateBookError(book.isbn)
            self._books[book.isbn] = book.model_copy()
        logger.info("Book created", isbn=book.isbn, backend="memory")
        return book.model_copy()

    async def list_books(self) -> list[Book]:
        return [b.model_copy() for b in list(self._books.values())]

    async def get_book(self, isbn: str) -> Book:
        book = self._books.get(isbn)
        if book is None:
            raise BookNotFoundError(isbn)
        return book.model_copy()

    async def update_book(self, isbn: str, changes: BookUpdate) -> Book:
        async with self._lock:
            book = self._books.get(isbn)
            if book is None:
                raise BookNotFoundError(isbn)
            updated = book.apply(changes)
            self._books[isbn] = updated
        logger.info("Book updated", isbn=isbn, backend="memory")
        return updated.model_copy()

    async def delete_book(self, isbn: str) -> Book:
        async with self._lock:
            book = self._books.pop(isbn, None)
        if book is None:
            raise BookNotFoundError(isbn)
        logger.info("Book deleted", isbn=isbn, backend="memory")
        return book
