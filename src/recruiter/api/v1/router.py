from fastapi import APIRouter

from recruiter.api.v1 import auth, candidates, dashboard, health, positions

api_v1_router = APIRouter()
api_v1_router.include_router(health.router)
api_v1_router.include_router(auth.router)
api_v1_router.include_router(dashboard.router)
api_v1_router.include_router(positions.router)
api_v1_router.include_router(candidates.router)
