"""OpenID Connect sign-in helpers.

The identity provider owns the login page; this module only builds the
authorization redirect, swaps the returned code for tokens, and turns the
userinfo claims into a user profile.
"""

import logging
import secrets
from typing import Any
from urllib.parse import urlencode

import httpx

from recruiter.core.config import Settings
from recruiter.core.exceptions import IdentityProviderError
from recruiter.schemas.user import UserUpsert

logger = logging.getLogger(__name__)

OIDC_SCOPE = "openid email profile"


def new_state() -> str:
    return secrets.token_urlsafe(32)


def build_authorization_url(settings: Settings, state: str) -> str:
    query = urlencode(
        {
            "response_type": "code",
            "client_id": settings.oidc_client_id,
            "redirect_uri": settings.oidc_redirect_uri,
            "scope": OIDC_SCOPE,
            "state": state,
        }
    )
    return f"{settings.oidc_authorization_url}?{query}"


async def fetch_claims(http: httpx.AsyncClient, settings: Settings, code: str) -> dict[str, Any]:
    """Exchange an authorization code and return the provider's userinfo claims."""
    try:
        token_resp = await http.post(
            settings.oidc_token_url,
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": settings.oidc_redirect_uri,
                "client_id": settings.oidc_client_id,
                "client_secret": settings.oidc_client_secret,
            },
            headers={"Accept": "application/json"},
        )
        token_resp.raise_for_status()
        access_token = token_resp.json().get("access_token")
        if not access_token:
            raise IdentityProviderError("Token response did not include an access token")

        userinfo_resp = await http.get(
            settings.oidc_userinfo_url,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        userinfo_resp.raise_for_status()
        claims = userinfo_resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise IdentityProviderError(f"Identity provider request failed: {e}") from e

    if not claims.get("sub"):
        raise IdentityProviderError("Userinfo response did not include a subject")
    return claims


def claims_to_user(claims: dict[str, Any]) -> UserUpsert:
    """Map standard or provider-specific claim names onto a user profile."""
    return UserUpsert(
        id=str(claims["sub"]),
        email=claims.get("email"),
        first_name=claims.get("first_name") or claims.get("given_name"),
        last_name=claims.get("last_name") or claims.get("family_name"),
        profile_image_url=claims.get("profile_image_url") or claims.get("picture"),
    )
