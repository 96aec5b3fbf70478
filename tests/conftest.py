"""
Pytest configuration and shared fixtures.

Points the application at an in-memory SQLite database before anything
imports the settings, ensures the project root is in sys.path, and gives
every test a fresh schema.
"""

import os
import sys
from pathlib import Path

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["NETWORK_MONITOR_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from domain.models import Base, engine, SessionLocal


@pytest.fixture(autouse=True)
def database_schema():
    """Create all tables before each test and drop them afterwards."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """A database session bound to the in-memory test database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Undo app.dependency_overrides set by endpoint tests."""
    yield
    from main import app

    app.dependency_overrides.clear()
