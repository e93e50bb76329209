"""
Pytest fixtures for LinkedIn API tests
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from linkedin_api.config import Settings
from linkedin_api.db import Database
from linkedin_api.main import create_app
from linkedin_api.utils.dependencies import get_current_user

# Configure pytest-asyncio mode for version 1.x
pytest_plugins = ('pytest_asyncio',)

CLIENT_ORIGIN = "https://linkedin-clone.example.com"


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


def make_settings(**overrides) -> Settings:
    """Settings isolated from the developer's .env file"""
    values = {
        "node_env": "development",
        "client_url": CLIENT_ORIGIN,
        "jwt_secret": "test-jwt-secret",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def settings_factory():
    """Build Settings with per-test overrides"""
    return make_settings


@pytest.fixture
def mock_db():
    """Database double; pool stays None so nothing touches PostgreSQL"""
    db = MagicMock(spec=Database)
    db.pool = None
    db.connect = AsyncMock()
    db.close = AsyncMock()
    db.fetch = AsyncMock(return_value=[])
    db.fetchrow = AsyncMock(return_value=None)
    db.fetchval = AsyncMock(return_value=None)
    db.execute = AsyncMock(return_value="OK")
    return db


@pytest.fixture
def mock_conn():
    """Connection handed out by mock_db.transaction()"""
    conn = AsyncMock()
    conn.fetchval = AsyncMock(return_value=None)
    conn.fetchrow = AsyncMock(return_value=None)
    conn.execute = AsyncMock(return_value="OK")
    return conn


@pytest.fixture
def transactional_db(mock_db, mock_conn):
    """mock_db whose transaction() yields mock_conn"""

    @asynccontextmanager
    async def transaction():
        yield mock_conn

    mock_db.transaction = transaction
    return mock_db


@pytest.fixture
def sample_user() -> Dict[str, Any]:
    """Sample user row as returned by UserService"""
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return {
        "id": uuid4(),
        "name": "Ada Lovelace",
        "username": "ada",
        "email": "ada@example.com",
        "profile_picture": "",
        "banner_img": "",
        "headline": "Linkedin User",
        "location": "Earth",
        "about": "",
        "skills": [],
        "experience": [],
        "education": [],
        "created_at": now,
        "updated_at": now,
        "connections": [],
    }


@pytest.fixture
def app(settings, mock_db):
    return create_app(settings, database=mock_db)


@pytest.fixture
def client(app):
    """Client without lifespan; the database is never connected"""
    return TestClient(app)


@pytest.fixture
def auth_client(app, sample_user):
    """Client whose requests are authenticated as sample_user"""
    app.dependency_overrides[get_current_user] = lambda: sample_user
    yield TestClient(app)
    app.dependency_overrides.clear()
