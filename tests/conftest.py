"""
Pytest configuration and shared fixtures.

Points the application at a throwaway SQLite file before any app import,
so settings and the engine are built against the test database.
"""

import os
import tempfile

import pytest

_TEST_DB_DIR = tempfile.mkdtemp(prefix="message-service-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'test_messages.db')}"
os.environ["SCHEMA_INIT_ALWAYS"] = "true"
os.environ["LOG_LEVEL"] = "DEBUG"

# Clear settings cache before any app imports to ensure test env vars are used
from message_service.config import get_settings
get_settings.cache_clear()

from fastapi.testclient import TestClient

from message_service.main import app
from message_service.models import Message
from message_service.storage import Base, SessionLocal, engine, init_db


@pytest.fixture(scope="function")
def client():
    """Create test client with fresh database for each test."""
    # Lifespan applies schema.sql on enter
    with TestClient(app) as test_client:
        yield test_client

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db():
    """Database session against a freshly initialized schema."""
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def row_count():
    """Return a callable counting rows in the messages table."""
    def count() -> int:
        with SessionLocal() as session:
            return session.query(Message).count()

    return count
