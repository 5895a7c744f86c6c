import logging
import secrets

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from recruiter.api.deps import SESSION_USER_KEY, get_http_client, get_store, require_user
from recruiter.core.config import get_settings
from recruiter.core.exceptions import (
    ConflictError,
    IdentityProviderError,
    NotAuthenticatedError,
    RecordConflictError,
)
from recruiter.schemas.user import UserRead
from recruiter.services import auth_service
from recruiter.storage.base import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

SESSION_STATE_KEY = "oidc_state"


@router.get("/login")
async def login(request: Request) -> RedirectResponse:
    settings = get_settings()
    state = auth_service.new_state()
    request.session[SESSION_STATE_KEY] = state
    return RedirectResponse(auth_service.build_authorization_url(settings, state), status_code=302)


@router.get("/callback")
async def callback(
    request: Request,
    code: str = Query(...),
    state: str = Query(...),
    store: RecordStore = Depends(get_store),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> RedirectResponse:
    expected_state = request.session.pop(SESSION_STATE_KEY, None)
    if not expected_state or not secrets.compare_digest(expected_state, state):
        raise NotAuthenticatedError("Invalid login state")

    settings = get_settings()
    try:
        claims = await auth_service.fetch_claims(http, settings, code)
    except IdentityProviderError as e:
        logger.warning("Login failed: %s", e)
        raise NotAuthenticatedError() from e

    try:
        user = await store.upsert_user(auth_service.claims_to_user(claims))
    except RecordConflictError as e:
        logger.warning("Login refused: %s", e)
        raise ConflictError("Another account already uses this email") from e
    request.session[SESSION_USER_KEY] = user.id
    logger.info("User %s signed in", user.id)
    return RedirectResponse("/", status_code=302)


@router.get("/logout")
async def logout(request: Request) -> RedirectResponse:
    settings = get_settings()
    request.session.clear()
    return RedirectResponse(settings.oidc_logout_url or "/", status_code=302)


@router.get("/auth/user", response_model=UserRead)
async def current_user(user: UserRead = Depends(require_user)) -> UserRead:
    return user
