"""API schemas."""

from src.api.schemas.books import Book, BookCreate, BookUpdate, ErrorResponse

__all__ = ["Book", "BookCreate", "BookUpdate", "ErrorResponse"]
