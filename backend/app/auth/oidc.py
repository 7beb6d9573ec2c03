"""
Utility functions for the OpenID Connect authorization-code flow.

The provider is addressed by domain (Auth0-style endpoints):
``/authorize``, ``/oauth/token`` and ``/userinfo``.
"""

from typing import Dict, Optional
from urllib.parse import urlencode

import httpx

from ..config import get_settings


def _provider_url(path: str) -> str:
    domain = get_settings().auth0_domain.strip().rstrip("/")
    if not domain.startswith(("http://", "https://")):
        domain = f"https://{domain}"
    return f"{domain}{path}"


def get_oauth_authorize_url(state: str) -> str:
    """Build the provider's authorize URL with client settings and state."""
    settings = get_settings()
    params = {
        "response_type": "code",
        "client_id": settings.auth0_client_id,
        "redirect_uri": settings.auth0_redirect_uri or "",
        "scope": settings.auth0_scope,
        "state": state,
    }
    query = urlencode({key: value for key, value in params.items() if value})
    return f"{_provider_url('/authorize')}?{query}"


def exchange_code_for_token(code: str) -> str:
    """
    Exchange an authorization code for a provider access token.

    Raises:
        ValueError when the token is missing in the response.
    """
    settings = get_settings()
    payload = {
        "grant_type": "authorization_code",
        "client_id": settings.auth0_client_id,
        "client_secret": settings.auth0_client_secret,
        "code": code,
    }
    if settings.auth0_redirect_uri:
        payload["redirect_uri"] = settings.auth0_redirect_uri

    response = httpx.post(
        _provider_url("/oauth/token"),
        data=payload,
        headers={"Accept": "application/json"},
        timeout=30,
    )
    response.raise_for_status()
    access_token = response.json().get("access_token")
    if not access_token:
        raise ValueError("Identity provider token exchange failed")
    return access_token


def get_userinfo(access_token: str) -> Dict[str, Optional[str]]:
    """Fetch the subject, name and email of the signed-in user."""
    response = httpx.get(
        _provider_url("/userinfo"),
        headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
        timeout=30,
    )
    response.raise_for_status()
    data = response.json()

    return {
        "sub": data.get("sub"),
        "name": data.get("name") or data.get("nickname"),
        "email": data.get("email"),
    }
