import os
import sys
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from backend.app.auth.jwt import create_access_token  # noqa: E402
from backend.app.database import get_db  # noqa: E402
from backend.app.main import create_app  # noqa: E402

DEFAULT_IDENTITY = {
    "sub": "auth0|student-1",
    "name": "Ada Student",
    "email": "ada@example.com",
}


def session_headers(**claims) -> dict[str, str]:
    """Authorization header carrying a signed session for the given identity."""
    token = create_access_token({**DEFAULT_IDENTITY, **claims})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_app_client(test_db, init_test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
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
def authorized_client(
    test_app_client,
) -> Iterator[tuple[TestClient, dict[str, str], sessionmaker]]:
    """Client plus headers for the default student; the user row is created on first use."""
    client, TestingSessionLocal = test_app_client
    yield client, session_headers(), TestingSessionLocal


@pytest.fixture
def other_headers() -> dict[str, str]:
    """Session headers for a second, unrelated student."""
    return session_headers(sub="auth0|student-2", name="Grace Other", email="grace@example.com")


@pytest.fixture
def create_profile(authorized_client, sample_profile_form) -> Callable[..., dict]:
    """Create a profile through the API and return its JSON."""
    client, headers, _ = authorized_client

    def _create(request_headers: dict[str, str] | None = None, **overrides) -> dict:
        resp = client.post(
            "/api/v1/profile",
            data={**sample_profile_form, **overrides},
            headers=request_headers or headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def make_headers() -> Callable[..., dict[str, str]]:
    """Factory for session headers with custom identity claims."""
    return session_headers
