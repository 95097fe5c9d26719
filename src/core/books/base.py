"""Base book store interface."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from src.api.schemas.books import Book, BookUpdate


class StoreInfo(BaseModel):
    """Information about the active book store."""

    backend: str = Field(description="Store backend identifier")
    connected: bool = Field(description="Whether the store can serve requests")
    persistent: bool = Field(default=False, description="Whether data survives restarts")


class BookStore(ABC):
    """Abstract base class for book stores.

    Stores own the collection for the lifetime of the process. Keys passed in
    are already in canonical text form.
    """

    @property
    @abstractmethod
    def info(self) -> StoreInfo:
        """Return store information."""
        pass

    @property
    def is_available(self) -> bool:
        """Check if the store can serve requests."""
        return self.info.connected

    async def connect(self) -> None:
        """Open any backend connection. Called once at startup."""

    async def disconnect(self) -> None:
        """Release backend resources. Called once at shutdown."""

    async def check(self) -> bool:
        """Verify the store can serve requests, reconnecting if needed."""
        return self.is_available

    @abstractmethod
    async def add_book(self, book: Book) -> Book:
        """
        Add a new book.

        Raises:
            DuplicateBookError: A book with the same ISBN exists.
        """
        pass

    @abstractmethod
    async def list_books(self) -> list[Book]:
        """Return all books in insertion order."""
        pass

    @abstractmethod
    async def get_book(self, isbn: str) -> Book:
        """
        Get a book by ISBN.

        Raises:
            BookNotFoundError: No book has this ISBN.
        """
        pass

    @abstractmethod
    async def update_book(self, isbn: str, changes: BookUpdate) -> Book:
        """
        Overwrite the mutable fields of a book.

        Raises:
            BookNotFoundError: No book has this ISBN.
        """
        pass

    @abstractmethod
    async def delete_book(self, isbn: str) -> Book:
        """
        Remove a book and return it as it was before deletion.

        Raises:
            BookNotFoundError: No book has this ISBN.
        """
        pass
