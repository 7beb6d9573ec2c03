from backend.app.models import User
from backend.app.routers import auth as auth_router


class FakeStateCache:
    """Stands in for Redis in the login flow."""

    def __init__(self):
        self.is_available = True
        self.store = {}

    def set_json(self, key, value, ttl=3600):  # noqa: ARG002
        self.store[key] = value
        return True

    def pop_json(self, key):
        return self.store.pop(key, None)

    def delete_pattern(self, pattern):  # noqa: ARG002
        return 0


def _mock_provider(monkeypatch, identity):
    monkeypatch.setattr(auth_router, "exchange_code_for_token", lambda code: "provider-token")  # noqa: ARG005
    monkeypatch.setattr(auth_router, "get_userinfo", lambda token: identity)  # noqa: ARG005


def test_login_redirects_to_identity_provider(test_app_client, monkeypatch):
    client, _ = test_app_client
    fake_cache = FakeStateCache()
    monkeypatch.setattr(auth_router, "cache", fake_cache)

    resp = client.get("/api/v1/auth/login", follow_redirects=False)

    assert resp.status_code in (302, 307)
    location = resp.headers["location"]
    assert location.startswith("https://tenant.example.auth0.com/authorize?")
    assert "response_type=code" in location
    assert "state=" in location
    assert len(fake_cache.store) == 1
    assert next(iter(fake_cache.store)).startswith("oauth:state:")


def test_login_without_redis_is_unavailable(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/v1/auth/login", follow_redirects=False)

    assert resp.status_code == 503


def test_callback_rejects_unknown_state(test_app_client, monkeypatch):
    client, _ = test_app_client
    monkeypatch.setattr(auth_router, "cache", FakeStateCache())

    resp = client.get(
        "/api/v1/auth/callback",
        params={"code": "dummy", "state": "forged"},
        follow_redirects=False,
    )

    assert resp.status_code in (302, 307)
    assert resp.headers["location"].endswith("?error=authentication_failed")


def test_callback_creates_user_and_sets_session_cookie(test_app_client, monkeypatch):
    client, session_factory = test_app_client
    fake_cache = FakeStateCache()
    monkeypatch.setattr(auth_router, "cache", fake_cache)
    _mock_provider(monkeypatch, {"sub": "auth0|abc", "name": "Ada", "email": "ada@example.com"})

    login = client.get("/api/v1/auth/login", follow_redirects=False)
    state = next(iter(fake_cache.store)).split(":")[-1]
    assert f"state={state}" in login.headers["location"]

    resp = client.get(
        "/api/v1/auth/callback",
        params={"code": "dummy", "state": state},
        follow_redirects=False,
    )

    assert resp.status_code in (302, 307)
    assert resp.headers["location"] == "http://localhost:3000/profile"
    cookie = resp.headers["set-cookie"]
    assert cookie.startswith("access_token=")
    assert "HttpOnly" in cookie
    # No token in the redirect URL
    assert "token" not in resp.headers["location"]

    session = session_factory()
    user = session.query(User).filter(User.auth_subject == "auth0|abc").one()
    assert user.email == "ada@example.com"
    session.close()

    # The cookie alone authenticates later requests
    me = client.get("/api/v1/auth/me")
    assert me.status_code == 200
    assert me.json()["auth_subject"] == "auth0|abc"

    # State is single-use
    replay = client.get(
        "/api/v1/auth/callback",
        params={"code": "dummy", "state": state},
        follow_redirects=False,
    )
    assert replay.headers["location"].endswith("?error=authentication_failed")


def test_callback_provider_failure_redirects_with_error(test_app_client, monkeypatch):
    client, session_factory = test_app_client
    monkeypatch.setattr(auth_router, "_validate_and_consume_oauth_state", lambda state: True)  # noqa: ARG005

    def failing_exchange(code):  # noqa: ARG001
        raise ValueError("Identity provider token exchange failed")

    monkeypatch.setattr(auth_router, "exchange_code_for_token", failing_exchange)

    resp = client.get(
        "/api/v1/auth/callback",
        params={"code": "dummy", "state": "valid"},
        follow_redirects=False,
    )

    assert resp.headers["location"].endswith("?error=authentication_failed")
    session = session_factory()
    assert session.query(User).count() == 0
    session.close()


def test_me_requires_authentication(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/v1/auth/me")

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Not authenticated"
    assert resp.headers["www-authenticate"] == "Bearer"


def test_identity_is_refreshed_on_every_request(test_app_client, make_headers):
    client, session_factory = test_app_client

    first = client.get("/api/v1/auth/me", headers=make_headers(name="Ada", email="old@example.com"))
    second = client.get("/api/v1/auth/me", headers=make_headers(name="Ada L.", email="new@example.com"))

    assert first.json()["id"] == second.json()["id"]
    assert second.json()["email"] == "new@example.com"
    session = session_factory()
    user = session.query(User).one()
    assert user.name == "Ada L."
    assert user.email == "new@example.com"
    session.close()


def test_logout_clears_cookie(authorized_client):
    client, headers, _ = authorized_client

    resp = client.post("/api/v1/auth/logout", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {"status": "logged_out"}
    assert 'access_token=""' in resp.headers["set-cookie"] or "access_token=;" in resp.headers["set-cookie"]
