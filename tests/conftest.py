"""
Pytest fixtures for DevConnector tests.

Each test gets its own in-memory SQLite database with foreign keys enforced.
"""

import os

# Settings are read on first use; point them at throwaway values before any import
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("ENV", "test")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from devconnector.db import Base, enable_sqlite_foreign_keys  # noqa: E402
from devconnector.models import User  # noqa: E402
from devconnector.security import get_password_hash, gravatar_url  # noqa: E402

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh test database for each test using ORM."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow on purpose; hash the shared test password once."""
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def make_user(test_db, password_hash):
    """Factory that inserts a user and returns its id."""
    _, TestingSessionLocal, _ = test_db

    def _make_user(name: str = "Jane Doe", email: str = "jane@example.com") -> int:
        session = TestingSessionLocal()
        try:
            user = User(
                name=name,
                email=email,
                password=password_hash,
                avatar=gravatar_url(email),
            )
            session.add(user)
            session.commit()
            return user.id
        finally:
            session.close()

    return _make_user


@pytest.fixture
def test_password():
    """Plain-text password of users created by make_user."""
    return TEST_PASSWORD
