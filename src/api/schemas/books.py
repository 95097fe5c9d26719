"""Book schemas."""

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def canonical_isbn(value: Any) -> str:
    """Return the text form used to store and match book keys."""
    if isinstance(value, bool) or value is None:
        raise ValueError("isbn must be text or a number")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("isbn must be a finite number")
        value = str(int(value)) if value.is_integer() else str(value)
    elif isinstance(value, int):
        value = str(value)
    if not isinstance(value, str):
        raise ValueError("isbn must be text or a number")
    value = value.strip()
    if not value:
        raise ValueError("isbn must not be empty")
    return value


class BookBase(BaseModel):
    """Fields shared by every book representation."""
    title: str = Field(description="Book title")
    author: str = Field(description="Book author")
    price: Optional[float] = Field(default=None, description="Book price")
    url: Optional[str] = Field(default=None, description="Link to the book")


class BookCreate(BookBase):
    """Request to add a book to the collection."""
    isbn: str = Field(description="Unique ISBN identifying the book")

    @field_validator("isbn", mode="before")
    @classmethod
    def normalize_isbn(cls, value: Any) -> str:
        return canonical_isbn(value)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "El Principito",
                    "author": "Antoine de Saint-Exupéry",
                    "isbn": "123456789",
                    "price": 19.99,
                    "url": "https://example.com/principito",
                }
            ]
        }
    }


class BookUpdate(BookBase):
    """
    Full replacement of a book's mutable fields.

    Every field is overwritten. Optional fields left out of the body are
    cleared. The ISBN is taken from the path and never changes.
    """


class Book(BookCreate):
    """A book as stored and returned by the API."""

    def apply(self, changes: BookUpdate) -> "Book":
        """Return a copy of this book with the mutable fields replaced."""
        return Book(isbn=self.isbn, **changes.model_dump())


class ErrorResponse(BaseModel):
    """JSON body returned for rejected writes and store failures."""
    message: str
    error: Any = None
