"""Tests for the in-memory book store."""

import asyncio

import pytest

from src.api.schemas.books import Book, BookUpdate, canonical_isbn
from src.core.books.exceptions import BookNotFoundError, DuplicateBookError
from src.core.books.store import create_book_store


def test_concurrent_creates_keep_one_book_per_isbn(memory_store):
    """Test racing creates of the same ISBN store a single book."""
    book = Book(title="A", author="B", isbn="1")

    async def scenario():
        return await asyncio.gather(
            *(memory_store.add_book(book) for _ in range(10)),
            return_exceptions=True,
        )

    results = asyncio.run(scenario())
    assert sum(isinstance(r, Book) for r in results) == 1
    assert sum(isinstance(r, DuplicateBookError) for r in results) == 9
    assert len(asyncio.run(memory_store.list_books())) == 1


def test_returned_books_are_copies(memory_store):
    """Test callers cannot mutate stored books."""
    asyncio.run(memory_store.add_book(Book(title="A", author="B", isbn="1")))

    fetched = asyncio.run(memory_store.get_book("1"))
    fetched.title = "changed"

    assert asyncio.run(memory_store.get_book("1")).title == "A"


def test_missing_book_errors(memory_store):
    """Test lookups on unknown ISBNs raise BookNotFoundError."""
    with pytest.raises(BookNotFoundError):
        asyncio.run(memory_store.get_book("x"))
    with pytest.raises(BookNotFoundError):
        asyncio.run(memory_store.update_book("x", BookUpdate(title="t", author="a")))
    with pytest.raises(BookNotFoundError):
        asyncio.run(memory_store.delete_book("x"))


@pytest.mark.parametrize(
    "value,expected",
    [
        ("123", "123"),
        (" 978-3 ", "978-3"),
        (123456789, "123456789"),
        (123.0, "123"),
        (1e20, "100000000000000000000"),
        (12.5, "12.5"),
    ],
)
def test_canonical_isbn(value, expected):
    """Test ISBNs normalize to stripped text."""
    assert canonical_isbn(value) == expected


@pytest.mark.parametrize("value", ["", "   ", None, True, ["1"], float("inf"), float("nan")])
def test_canonical_isbn_rejects_invalid(value):
    """Test unusable ISBN values are rejected."""
    with pytest.raises(ValueError):
        canonical_isbn(value)


def test_create_book_store_unknown_backend():
    """Test unknown backends are refused."""
    with pytest.raises(ValueError):
        create_book_store("mongo")
    assert create_book_store("memory").info.backend == "memory"
