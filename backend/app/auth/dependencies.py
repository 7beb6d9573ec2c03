"""
Authentication dependencies for FastAPI routes.

Supports both:
- Bearer token in Authorization header (for API clients)
- HttpOnly cookie (for browser-based frontends)

Resolving the caller also upserts the matching user row, so the first
authenticated request creates it and every later one refreshes name/email.
"""

from typing import Any, Dict, Optional

from fastapi import Cookie, Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.errors import NotAuthenticatedError
from core.logging import bind_context
from core.repositories import UserRepository

from ..database import get_db
from ..models import User
from .jwt import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def _resolve_user(db: Session, claims: Dict[str, Any]) -> User:
    user = UserRepository(db).upsert_from_identity(
        auth_subject=str(claims["sub"]),
        name=claims.get("name"),
        email=claims.get("email"),
    )
    bind_context(user_id=user.id)
    return user


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
) -> str:
    """
    Extract the session token from the request.

    Checks the Authorization header first, then the ``access_token`` cookie.
    """
    if token_header:
        return token_header
    if access_token_cookie:
        return access_token_cookie
    raise NotAuthenticatedError()


def get_session_claims(token: str = Depends(get_token_from_request)) -> Dict[str, Any]:
    """Decode the session token into its identity claims or raise 401."""
    try:
        return decode_access_token(token)
    except ValueError:
        raise NotAuthenticatedError("Invalid authentication credentials") from None


def get_current_user(
    claims: Dict[str, Any] = Depends(get_session_claims),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the internal user for the session, creating it if absent.

    Name and email are overwritten from the session on every call.
    """
    return _resolve_user(db, claims)


def get_optional_user(
    token_header: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like ``get_current_user`` but returns None instead of raising 401."""
    token = token_header or access_token_cookie
    if not token:
        return None
    try:
        claims = decode_access_token(token)
    except ValueError:
        return None
    return _resolve_user(db, claims)
