"""Book collection API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from fastapi.exceptions import RequestValidationError

from src.api.schemas.books import Book, BookCreate, BookUpdate, ErrorResponse, canonical_isbn
from src.core.books.base import BookStore
from src.core.books.store import get_book_store

router = APIRouter(prefix="/books", tags=["Books"])

NOT_FOUND_RESPONSE = {
    404: {
        "description": "No book has this ISBN",
        "content": {"text/plain": {"example": "book not found"}},
    }
}

STORE_ERROR_RESPONSE = {
    500: {"model": ErrorResponse, "description": "The backing store failed"},
}


def isbn_path(
    isbn: Annotated[str, Path(description="ISBN of the book")],
) -> str:
    """Normalize a path-supplied ISBN to its canonical text form."""
    try:
        return canonical_isbn(isbn)
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "value_error", "loc": ("path", "isbn"), "msg": str(e), "input": isbn}]
        )


IsbnParam = Annotated[str, Depends(isbn_path)]
StoreParam = Annotated[BookStore, Depends(get_book_store)]


@router.post(
    "",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
    responses={
        400: {"model": ErrorResponse, "description": "Duplicate ISBN or malformed body"},
        **STORE_ERROR_RESPONSE,
    },
)
async def create_book(request: BookCreate, store: StoreParam) -> Book:
    """
    Add a book to the collection.

    Fields are stored exactly as submitted. The ISBN must not already exist.
    """
    return await store.add_book(Book(**request.model_dump()))


@router.get(
    "",
    response_model=list[Book],
    summary="List all books",
    responses=STORE_ERROR_RESPONSE,
)
async def list_books(store: StoreParam) -> list[Book]:
    """List every book in the collection."""
    return await store.list_books()


@router.get(
    "/{isbn}",
    response_model=Book,
    summary="Get a book by ISBN",
    responses={**NOT_FOUND_RESPONSE, **STORE_ERROR_RESPONSE},
)
async def get_book(isbn: IsbnParam, store: StoreParam) -> Book:
    """Get a single book."""
    return await store.get_book(isbn)


@router.put(
    "/{isbn}",
    response_model=Book,
    summary="Replace a book's details",
    responses={
        400: {"model": ErrorResponse, "description": "Malformed body"},
        **NOT_FOUND_RESPONSE,
        **STORE_ERROR_RESPONSE,
    },
)
async def update_book(isbn: IsbnParam, request: BookUpdate, store: StoreParam) -> Book:
    """
    Overwrite title, author, price and url of a book.

    This is a full replacement: optional fields missing from the body are
    cleared. The ISBN never changes.
    """
    return await store.update_book(isbn, request)


@router.delete(
    "/{isbn}",
    response_model=Book,
    summary="Delete a book",
    responses={**NOT_FOUND_RESPONSE, **STORE_ERROR_RESPONSE},
)
async def delete_book(isbn: IsbnParam, store: StoreParam) -> Book:
    """Delete a book and return it as it was."""
    return await store.delete_book(isbn)
