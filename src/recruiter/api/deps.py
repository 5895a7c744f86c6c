from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, Request

from recruiter.core.exceptions import NotAuthenticatedError
from recruiter.schemas.user import UserRead
from recruiter.storage.base import RecordStore

__all__ = ["get_http_client", "get_store", "require_user"]

SESSION_USER_KEY = "user_id"


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=10.0) as client:
        yield client


async def require_user(request: Request, store: RecordStore = Depends(get_store)) -> UserRead:
    """Return the signed-in user or reject the request with 401."""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        raise NotAuthenticatedError()
    user = await store.get_user(user_id)
    if user is None:
        raise NotAuthenticatedError()
    return user
