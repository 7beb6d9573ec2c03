"""
Authentication router for the OpenID Connect login flow.

- CSRF protection via a one-time OAuth state stored in Redis
- Session token delivered as an HttpOnly cookie, never in the URL
- Cache invalidation on logout
"""

import secrets

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from core.cache import CacheKeys, cache
from core.logging import get_logger
from core.repositories import UserRepository

from ..auth.dependencies import get_current_user
from ..auth.jwt import create_access_token
from ..auth.oidc import exchange_code_for_token, get_oauth_authorize_url, get_userinfo
from ..config import get_settings
from ..database import get_db
from ..models import User
from ..schemas import UserResponse

logger = get_logger("auth")

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# OAuth State Management (CSRF Protection)
# =============================================================================


class OAuthStateError(Exception):
    """Raised when Redis is unavailable for OAuth state management."""

    pass


def _store_oauth_state(state: str) -> None:
    """
    Store OAuth state for CSRF validation.

    Requires Redis; there is no in-memory fallback because state must be
    shared across instances.

    Raises:
        OAuthStateError: If Redis is unavailable
    """
    if not cache.is_available:
        logger.error("oauth_state_store_failed", reason="Redis unavailable")
        raise OAuthStateError("Redis is required for OAuth state management")

    settings = get_settings()
    if not cache.set_json(CacheKeys.oauth_state(state), {"valid": True}, ttl=settings.oauth_state_ttl):
        raise OAuthStateError("Failed to store OAuth state")


def _validate_and_consume_oauth_state(state: str | None) -> bool:
    """Validate OAuth state and consume it (one-time use)."""
    if not state:
        return False

    if not cache.is_available:
        logger.error("oauth_state_validate_failed", reason="Redis unavailable")
        return False

    data = cache.pop_json(CacheKeys.oauth_state(state))
    return bool(data and data.get("valid"))


def _set_session_cookie(response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
        path="/",
    )


@router.get("/login")
def login():
    """
    Redirect to the identity provider's authorize page.

    Flow:
    1. Generate and store a CSRF state token in Redis
    2. Redirect to the provider with the state
    3. The provider redirects back to /auth/callback with code and state

    Raises:
        HTTPException: 503 if Redis is unavailable
    """
    state = secrets.token_urlsafe(32)

    try:
        _store_oauth_state(state)
    except OAuthStateError as e:
        logger.error("login_redis_unavailable", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service temporarily unavailable. Please try again later.",
        ) from None

    return RedirectResponse(url=get_oauth_authorize_url(state))


@router.get("/callback")
def oauth_callback(
    code: str = Query(...),
    state: str = Query(None),
    db: Session = Depends(get_db),
):
    """
    Handle the provider callback.

    Validates the state, exchanges the code, upserts the user and sets the
    session cookie before redirecting to the frontend. Every failure
    redirects with ``?error=authentication_failed``.
    """
    settings = get_settings()
    frontend_url = settings.frontend_url.rstrip("/")
    failure_url = f"{frontend_url}/?error=authentication_failed"

    if not _validate_and_consume_oauth_state(state):
        logger.warning("oauth_state_invalid", has_state=bool(state))
        return RedirectResponse(url=failure_url)

    try:
        provider_token = exchange_code_for_token(code)
        identity = get_userinfo(provider_token)

        if not identity.get("sub"):
            logger.warning("oauth_missing_subject")
            return RedirectResponse(url=failure_url)

        user = UserRepository(db).upsert_from_identity(
            auth_subject=identity["sub"],
            name=identity.get("name"),
            email=identity.get("email"),
        )
        session_token = create_access_token(identity)
    except Exception as e:
        logger.error("oauth_callback_error", error=str(e), error_type=type(e).__name__)
        return RedirectResponse(url=failure_url)

    logger.info("oauth_login_success", user_id=user.id)
    response = RedirectResponse(url=f"{frontend_url}/profile")
    _set_session_cookie(response, session_token)
    return response


@router.get("/me", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    """Get current authenticated user."""
    return user


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user)):
    """Clear the session cookie and the user's cached views."""
    settings = get_settings()

    cache.delete_pattern(CacheKeys.user_pattern(current_user.id))
    logger.info("logout", user_id=current_user.id)

    response = JSONResponse(content={"status": "logged_out"})
    response.delete_cookie(key="access_token", path="/", secure=settings.is_production, samesite="lax")
    return response
