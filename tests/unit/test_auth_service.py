"""Unit tests for the OpenID Connect helpers."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from recruiter.core.config import Settings
from recruiter.core.exceptions import IdentityProviderError
from recruiter.services import auth_service

pytestmark = pytest.mark.unit

TOKEN_URL = "https://id.example.com/token"
USERINFO_URL = "https://id.example.com/userinfo"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        oidc_client_id="client-123",
        oidc_client_secret="s3cret",
        oidc_authorization_url="https://id.example.com/authorize",
        oidc_token_url=TOKEN_URL,
        oidc_userinfo_url=USERINFO_URL,
        oidc_redirect_uri="http://localhost:8000/api/callback",
    )


def _provider(claims: dict | None = None, token_status: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url == TOKEN_URL:
            assert b"grant_type=authorization_code" in request.content
            return httpx.Response(token_status, json={"access_token": "tok"})
        if request.url == USERINFO_URL:
            assert request.headers["Authorization"] == "Bearer tok"
            return httpx.Response(200, json=claims or {})
        return httpx.Response(404)

    return httpx.MockTransport(handler)


def test_build_authorization_url(settings):
    url = auth_service.build_authorization_url(settings, "state-xyz")

    parsed = urlparse(url)
    query = parse_qs(parsed.query)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://id.example.com/authorize"
    assert query["client_id"] == ["client-123"]
    assert query["redirect_uri"] == ["http://localhost:8000/api/callback"]
    assert query["state"] == ["state-xyz"]
    assert query["response_type"] == ["code"]
    assert "openid" in query["scope"][0]


def test_new_state_is_random():
    assert auth_service.new_state() != auth_service.new_state()


async def test_fetch_claims_exchanges_code(settings):
    claims = {"sub": "abc", "email": "a@example.com"}
    async with httpx.AsyncClient(transport=_provider(claims)) as http:
        result = await auth_service.fetch_claims(http, settings, "code-1")

    assert result == claims


async def test_fetch_claims_token_error(settings):
    async with httpx.AsyncClient(transport=_provider(token_status=400)) as http:
        with pytest.raises(IdentityProviderError):
            await auth_service.fetch_claims(http, settings, "bad-code")


async def test_fetch_claims_requires_subject(settings):
    async with httpx.AsyncClient(transport=_provider({"email": "a@example.com"})) as http:
        with pytest.raises(IdentityProviderError, match="subject"):
            await auth_service.fetch_claims(http, settings, "code-1")


def test_claims_to_user_standard_claims():
    user = auth_service.claims_to_user(
        {
            "sub": 123,
            "email": "a@example.com",
            "given_name": "Ada",
            "family_name": "Lovelace",
            "picture": "https://img.example.com/ada.png",
        }
    )

    assert user.id == "123"
    assert user.first_name == "Ada"
    assert user.last_name == "Lovelace"
    assert user.profile_image_url == "https://img.example.com/ada.png"


def test_claims_to_user_provider_specific_claims():
    user = auth_service.claims_to_user(
        {"sub": "u1", "first_name": "Grace", "last_name": "Hopper", "profile_image_url": "x.png"}
    )

    assert user.email is None
    assert user.first_name == "Grace"
    assert user.last_name == "Hopper"
    assert user.profile_image_url == "x.png"


async def test_fetch_claims_non_json_token_response(settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    async with httpx.AsyncClient(transport=transport) as http:
        with pytest.raises(IdentityProviderError):
            await auth_service.fetch_claims(http, settings, "code-1")
