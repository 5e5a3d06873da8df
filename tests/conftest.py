"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncIterator

import httpx
import logfire
import pytest

from src.core.db_client import Database
from src.core.schema import init_db
from src.interface.dependencies import get_database
from src.main import app
from src.services.task_service import TaskService


@pytest.fixture(scope="session", autouse=True)
def _configure_logfire() -> None:
    """Keep spans local so tests never try to reach Logfire."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
async def database() -> AsyncIterator[Database]:
    """Provides a fresh in-memory store with the schema applied."""
    db = await Database.connect(":memory:")
    await init_db(db)
    yield db
    await db.close()


@pytest.fixture
def task_service(database: Database) -> TaskService:
    """Provides a TaskService bound to the in-memory store."""
    return TaskService(database)


@pytest.fixture
async def api_client(database: Database) -> AsyncIterator[httpx.AsyncClient]:
    """Provides an HTTP client talking to the app with the in-memory store injected."""
    app.dependency_overrides[get_database] = lambda: database
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    app.dependency_overrides.clear()

