"""
Student Records API - Test Configuration (conftest.py)
========================================================

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_store: AsyncMock standing in for StudentStore
    ├── session_factory: sessions on a fresh SQLite file with the table created
    ├── store: real StudentStore on that SQLite database
    ├── test_app: FastAPI app whose sessions come from session_factory
    └── test_client: HTTPX AsyncClient talking to test_app through ASGITransport
"""

import os
import tempfile

# Settings are read at import time; point them at SQLite before importing the app
_test_dir = tempfile.mkdtemp(prefix="student_api_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/health.db"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from student_api.database import Base, get_db_session
from student_api.main import create_app
from student_api.models.student import Student
from student_api.services.student_store import StudentStore


@pytest.fixture
def mock_store():
    """
    A StudentStore double for service unit tests.

    Usage:
        mock_store.select_one.return_value = make_student()
        await service.authenticate(mock_store, "a@b.c", "pw")
    """
    store = AsyncMock(spec=StudentStore)
    store.select_one = AsyncMock(return_value=None)
    store.insert = AsyncMock()
    store.update = AsyncMock()
    store.delete = AsyncMock(return_value=1)
    return store


@pytest.fixture
def make_student():
    """Builds detached Student rows for assertions and mock return values."""
    def _make(id=1, sname="Ada Lovelace", semail="ada@example.com", spassword="engine"):
        return Student(id=id, sname=sname, semail=semail, spassword=spassword)
    return _make


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """A fresh SQLite database file per test with the student table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/students.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def store(session_factory) -> AsyncGenerator[StudentStore, None]:
    async with session_factory() as session:
        yield StudentStore(session)
        await session.rollback()


@pytest.fixture
def test_app(session_factory):
    """The real application with get_db_session bound to the test database."""
    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


@pytest_asyncio.fixture
async def test_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into the app.

    raise_app_exceptions=False lets the catch-all 500 handler's response
    reach the test instead of the re-raised exception.

    Usage:
        async def test_lookup(test_client):
            response = await test_client.get("/students/search/1")
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
