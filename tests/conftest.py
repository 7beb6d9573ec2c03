"""
Pytest fixtures for Student Profiles tests.

Each test gets a fresh SQLite database file; Redis is disabled so cache
calls are no-ops unless a test swaps in a fake.
"""

import os

# Settings are cached on first use, so the environment is fixed before any
# project module is imported.
os.environ["ENV"] = "test"
os.environ["REDIS_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-only-signing-key-0123456789abcdefghijkl"
os.environ["AUTH0_DOMAIN"] = "tenant.example.auth0.com"
os.environ["AUTH0_CLIENT_ID"] = "client-id"
os.environ["AUTH0_CLIENT_SECRET"] = "client-secret"
os.environ["AUTH0_REDIRECT_URI"] = "http://testserver/api/v1/auth/callback"
os.environ["FRONTEND_URL"] = "http://localhost:3000"

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

import core.models  # noqa: E402,F401
from core.db import Base, db, enable_sqlite_foreign_keys  # noqa: E402
from core.models import Profile, User  # noqa: E402


@pytest.fixture(scope="function")
def test_db(tmp_path):
    """Create a fresh test database for each test using ORM."""
    db_url = f"sqlite:///{tmp_path / 'student_profiles_test.db'}"

    engine = create_engine(db_url, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield db_url, TestingSessionLocal, engine

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


@pytest.fixture
def init_test_db(test_db):
    """Point the global db manager at the test database."""
    db_url, _, _ = test_db
    db.reset()
    db.initialize(db_url)
    yield db_url
    db.reset()


@pytest.fixture
def sample_profile_form():
    """Profile form fields as the frontend posts them."""
    return {
        "name": "Ada Student",
        "profession": "Software Engineer",
        "batch": "2024",
        "about": "Enjoys compilers and long walks through stack traces.",
        "profileImage": "https://res.cloudinary.com/demo/image/upload/v1/ada.png",
        "phone": "+1 555 0100",
        "linkedin": "https://www.linkedin.com/in/ada-student",
        "skills": "Python, SQL",
    }


def _create_user_with_profile(session, auth_subject="auth0|seed", **profile_fields):
    """Helper to create a user and its profile directly through the ORM."""
    user = User(auth_subject=auth_subject, name="Seed User", email="seed@example.com")
    session.add(user)
    session.flush()

    profile = Profile(user_id=user.id, name=profile_fields.pop("name", "Seed User"), **profile_fields)
    session.add(profile)
    session.flush()
    return user, profile


@pytest.fixture
def user_with_profile(test_session):
    """A committed user with an empty profile; returns (user_id, profile_id)."""
    user, profile = _create_user_with_profile(test_session, about="original")
    test_session.commit()
    return user.id, profile.id
