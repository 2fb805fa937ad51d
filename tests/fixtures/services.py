from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.books_api.api.http.app import create_app
from src.books_api.core.services import BookService, DbManageService, DbSessionService
from src.books_api.runtime.config.config_data import ConfigData

__all__ = [
    "book_payload",
    "book_service",
    "client",
    "database_service",
    "seeded_client",
]


@pytest.fixture
def database_service(test_config: ConfigData) -> Generator[DbSessionService]:
    """In-memory database with the books table created."""
    service = DbSessionService(test_config.database)
    DbManageService(service).create_all()
    try:
        yield service
    finally:
        service.dispose()


@pytest.fixture
def book_service(database_service: DbSessionService) -> BookService:
    return BookService(database_service)


@pytest.fixture
def client(test_config: ConfigData) -> Generator[TestClient]:
    """Test client over a fresh application and an empty database."""
    with TestClient(create_app(test_config)) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(test_config: ConfigData) -> Generator[TestClient]:
    """Test client whose startup seeds the sample books."""
    config = test_config.model_copy(
        update={"database": test_config.database.model_copy(update={"seed": True})}
    )
    with TestClient(create_app(config)) as test_client:
        yield test_client


@pytest.fixture
def book_payload() -> Callable[..., dict[str, Any]]:
    """Factory for create request bodies with a unique ISBN per call."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": "Test Book",
            "author": "Test Author",
            "isbn": f"978{next(counter):010d}",
            "year": 2023,
        }
        payload.update(overrides)
        return payload

    return _make
