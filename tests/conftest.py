"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Callable, Generator
from typing import Any
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
import strawberry

from projecthub.repository import InMemoryProjectRepository

SQLITE_MEMORY_URL = "sqlite:///:memory:"
JWT_SECRET = "test-secret"


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def jwt_auth(monkeypatch: pytest.MonkeyPatch) -> str:
    """Switch the auth factory to the JWT provider and return its secret."""
    monkeypatch.setenv("PROJECTHUB_AUTH_PROVIDER", "jwt")
    monkeypatch.setenv("PROJECTHUB_JWT_SECRET", JWT_SECRET)
    monkeypatch.delenv("PROJECTHUB_AUTH_CONFIG", raising=False)
    return JWT_SECRET


@pytest.fixture
def memory_repository() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest_asyncio.fixture
async def sqlite_database() -> AsyncGenerator[None, None]:
    """Point the shared engine at a fresh in-memory SQLite database with tables created."""
    from projecthub.database.connection import create_tables, dispose_database, init_database

    init_database(SQLITE_MEMORY_URL, force_reinit=True)
    await create_tables()
    yield
    await dispose_database()


@pytest.fixture
def make_info() -> Callable[..., MagicMock]:
    """Factory for mock GraphQL info objects whose request carries the given headers."""

    def _make(headers: dict[str, str] | None = None, **context: Any) -> MagicMock:
        info = MagicMock(spec=strawberry.Info)
        info.context = {"request": MagicMock(headers=headers or {}), **context}
        return info

    return _make


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
