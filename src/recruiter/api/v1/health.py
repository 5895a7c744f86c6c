from fastapi import APIRouter, Depends

from recruiter.api.deps import get_store
from recruiter.core.config import get_settings
from recruiter.schemas.health import HealthResponse, StatusResponse
from recruiter.storage.base import RecordStore

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(store: RecordStore = Depends(get_store)) -> HealthResponse:
    settings = get_settings()
    healthy = await store.ping()
    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        storage=store.name,
        version=settings.app_version,
    )


@router.get("/status", response_model=StatusResponse)
async def liveness() -> StatusResponse:
    return StatusResponse(status="ok")
