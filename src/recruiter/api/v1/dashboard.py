from fastapi import APIRouter, Depends

from recruiter.api.deps import get_store, require_user
from recruiter.schemas.dashboard import DashboardStats
from recruiter.storage.base import RecordStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"], dependencies=[Depends(require_user)])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(store: RecordStore = Depends(get_store)) -> DashboardStats:
    return await store.get_dashboard_stats()
