"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest
from pathlib import Path

from config import Config, get_migrations_dir
from services.base import Services
from tests.helpers import FakeLLMProvider, run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary database."""
    return Config(
        base_dir=tmp_path / "finbuddy",
        db_data_dir=tmp_path / "finbuddy" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "finbuddy" / "logs",
        llm_enabled=False,
        llm_provider="openai",
        llm_openai_api_key="",
        llm_openai_model="gpt-4o-mini",
        jwt_secret="test-secret",
        token_ttl_days=7,
        categorization_workers=1,
        assistant_transaction_window=100,
        assistant_insights_days=30,
    )


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a DatabaseManager backed by the in-memory database, schema applied."""
    run_migrations(test_db, get_migrations_dir())

    class TestDatabaseManager:
        """Test database manager that uses in-memory connection."""

        def __init__(self, conn):
            self.conn = conn

        def connect(self):
            return _TestConnectionContext(self.conn)

        def get_db_path(self):
            return Path(":memory:")

        def get_migrations_dir(self):
            return get_migrations_dir()

    class _TestConnectionContext:
        def __init__(self, conn):
            self.conn = conn

        def __enter__(self):
            return self.conn

        def __exit__(self, exc_type, exc_val, exc_tb):
            # Don't close the connection - let the fixture handle it
            pass

    return TestDatabaseManager(test_db)


@pytest.fixture
def fake_llm():
    """Scripted LLM provider with no replies configured."""
    return FakeLLMProvider()


@pytest.fixture
def services(test_config, db_manager_with_schema, fake_llm):
    """Create a Services container with test database and fake LLM."""
    return Services(test_config, db_manager=db_manager_with_schema, llm_provider=fake_llm)


@pytest.fixture
def user(services):
    """A registered user (password hash is not a real bcrypt hash)."""
    return services.users.create(
        full_name="Asha Rao", email="asha@example.com", age=30, password_hash="x"
    )
