"""
Session token helpers.

The session token is a signed JWT carrying the identity claims the
provider returned at login (``sub``, ``name``, ``email``). It is the only
thing the API trusts about the caller; the user row is derived from it.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from ..config import get_settings

IDENTITY_CLAIMS = ("sub", "name", "email")


def create_access_token(data: Dict[str, Any], expires_minutes: int | None = None) -> str:
    """
    Create a signed session token with expiration and JTI.

    Args:
        data: Identity claims, at least {"sub": <provider subject>}.
        expires_minutes: Optional override for expiration window in minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = {key: data.get(key) for key in IDENTITY_CLAIMS if key in data}
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes
    )
    to_encode.update({
        "exp": expire,
        "jti": str(uuid.uuid4()),
    })
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a session token.

    Raises:
        ValueError: If the signature or expiry check fails, or the token has
            no subject.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc

    if not payload.get("sub"):
        raise ValueError("Token has no subject")
    return payload
