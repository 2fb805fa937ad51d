"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.books_api.api.http.app_data import ApplicationDependencies
from src.books_api.core.services import BookService, DbSessionService


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_book_service(request: Request) -> BookService:
    """Get the book service instance."""
    return get_app_dependencies(request).book_service


def get_database_service(request: Request) -> DbSessionService:
    """Get the database session service instance."""
    return get_app_dependencies(request).database_service


async def get_raw_body(request: Request) -> bytes:
    """Read the request body so synchronous handlers can decode it themselves."""
    return await request.body()
