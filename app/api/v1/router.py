"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual store/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import fragments, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(fragments.router, prefix="/fragments", tags=["fragments"])
