# tests/conftest.py

"""
Shared fixtures for the Inventory Service tests.

The relational backend runs against an in-process SQLite database, so the
suite needs no PostgreSQL server. Every test gets fresh storage.
"""

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from inventory_service.backends import MemoryBackend, SQLBackend
from inventory_service.main import create_app

# Suppress noisy logs from SQLAlchemy/FastAPI during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("fastapi").setLevel(logging.WARNING)


@pytest.fixture
def sqlite_engine():
    """A private in-memory SQLite database shared by all sessions of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def unreachable_engine(tmp_path):
    # SQLite cannot create a database file inside a directory that does not exist.
    return create_engine(f"sqlite:///{tmp_path / 'missing' / 'inventory.db'}")


@pytest.fixture
def memory_backend():
    return MemoryBackend()


@pytest.fixture
def sql_backend(sqlite_engine):
    backend = SQLBackend(sqlite_engine)
    backend.initialize_schema()
    return backend


@pytest.fixture(params=["memory", "sql"])
def backend(request):
    """Runs a test once per backend implementation."""
    return request.getfixturevalue(f"{request.param}_backend")


@pytest.fixture
def client(memory_backend):
    """TestClient for an app serving the seeded in-memory backend."""
    return TestClient(create_app(memory_backend))
