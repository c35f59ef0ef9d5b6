"""
Pytest configuration and shared fixtures for the Users API tests.

Every test gets its own SQLite file under ``tmp_path`` seeded with the
demo users Mimi (1) and Mickey (2).
"""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from users_api.app.core.config import Settings
from users_api.app.core.db import Database, init_db
from users_api.app.main import create_app
from users_api.app.schemas.user import User
from users_api.app.services.user_store import UserStore


@pytest.fixture
def mimi():
    return User(id=1, name="Mimi")


@pytest.fixture
def mickey():
    return User(id=2, name="Mickey")


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a fresh database file."""
    return Settings(
        database_url=str(tmp_path / "users.db"),
        reset_database=False,
        seed_demo_data=True,
        log_level="DEBUG",
    )


@pytest.fixture
def database(settings):
    return Database.from_settings(settings)


@pytest_asyncio.fixture
async def store(database, settings):
    """A ``UserStore`` over a migrated and seeded database."""
    await init_db(database, settings)
    return UserStore(database)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
