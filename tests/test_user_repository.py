from core.models import User
from core.repositories import UserRepository


def test_upsert_creates_user_on_first_sight(test_session):
    repo = UserRepository(test_session)

    user = repo.upsert_from_identity("auth0|new", name="New Student", email="new@example.com")

    assert user.id is not None
    assert repo.get_by_subject("auth0|new").email == "new@example.com"


def test_upsert_overwrites_name_and_email(test_session):
    repo = UserRepository(test_session)
    created = repo.upsert_from_identity("auth0|same", name="Before", email="before@example.com")

    updated = repo.upsert_from_identity("auth0|same", name="After", email=None)

    assert updated.id == created.id
    assert updated.name == "After"
    # Blank values from the provider win too
    assert updated.email is None
    assert test_session.query(User).count() == 1


def test_upsert_survives_concurrent_first_insert(test_session, monkeypatch):
    # Another request inserted the subject after this one's lookup missed
    first = UserRepository(test_session).upsert_from_identity("auth0|race", name="First")
    test_session.commit()

    repo = UserRepository(test_session)
    monkeypatch.setattr(repo, "get_by_subject", lambda auth_subject: None)

    user = repo.upsert_from_identity("auth0|race", name="Second", email="second@example.com")

    assert user.id == first.id
    assert user.name == "Second"
    assert user.email == "second@example.com"
    assert test_session.query(User).count() == 1
