from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.auth.jwt import create_user_token
from backend.app.main import create_app
from devconnector.db import get_db


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    db_url, TestingSessionLocal, engine = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, TestingSessionLocal


@pytest.fixture
def auth_headers() -> Callable[[int], dict[str, str]]:
    def _auth_headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user_id)}"}

    return _auth_headers


@pytest.fixture
def authorized_client(
    test_app_client, make_user, auth_headers
) -> Iterator[tuple[TestClient, dict[str, str], int, sessionmaker]]:
    """Client plus headers for a freshly registered user."""
    client, TestingSessionLocal = test_app_client
    user_id = make_user()
    yield client, auth_headers(user_id), user_id, TestingSessionLocal
