"""Errors raised by book stores."""


class BookStoreError(Exception):
    """Base class for book store failures."""


class BookNotFoundError(BookStoreError):
    """No book exists with the requested ISBN."""

    def __init__(self, isbn: str) -> None:
        super().__init__(f"No book with ISBN '{isbn}'")
        self.isbn = isbn


class DuplicateBookError(BookStoreError):
    """A book with the same ISBN is already stored."""

    def __init__(self, isbn: str) -> None:
        super().__init__(f"A book with ISBN '{isbn}' already exists")
        self.isbn = isbn


class StoreUnavailableError(BookStoreError):
    """The backing store cannot be reached or failed mid-operation."""
