"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_fastapi_instrumentator import Instrumentator

from src.api.routes import books_router, health_router
from src.api.schemas.books import ErrorResponse
from src.config import get_settings
from src.core.books.exceptions import (
    BookNotFoundError,
    DuplicateBookError,
    StoreUnavailableError,
)
from src.core.books.store import get_book_store
from src.utils.logging import setup_logging

logger = structlog.get_logger(__name__)

settings = get_settings()

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    setup_logging(debug=settings.debug)
    store = app.dependency_overrides.get(get_book_store, get_book_store)()
    await store.connect()
    logger.info("Book store ready", **store.info.model_dump())
    yield
    await store.disconnect()


app = FastAPI(
    title=settings.app_name,
    description="CRUD API for a book collection keyed by ISBN",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/api-docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Prometheus metrics
Instrumentator().instrument(app).expose(app, endpoint="/metrics")

# Include routers
app.include_router(health_router)
app.include_router(books_router)


# --- Error handlers ---


def _error_response(status_code: int, message: str, error: Any) -> JSONResponse:
    body = ErrorResponse(message=message, error=jsonable_encoder(error))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(BookNotFoundError)
async def book_not_found_handler(request: Request, exc: BookNotFoundError) -> PlainTextResponse:
    return PlainTextResponse("book not found", status_code=404)


@app.exception_handler(DuplicateBookError)
async def duplicate_book_handler(request: Request, exc: DuplicateBookError) -> JSONResponse:
    logger.info("Rejected duplicate book", isbn=exc.isbn)
    return _error_response(400, "Could not create book", str(exc))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(400, "Invalid book data", exc.errors())


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error("Book store unavailable", path=request.url.path, error=str(exc))
    return _error_response(500, "Book store unavailable", str(exc))


@app.get("/")
@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "service": settings.app_name,
        "version": VERSION,
        "docs": "/api-docs",
        "openapi": "/openapi.json",
        "health": "/health",
        "books": "/books",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
