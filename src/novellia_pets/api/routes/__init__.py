"""Module: api routers."""

from fastapi import APIRouter

from .dashboard import router as dashboard_router
from .health import router as health_router
from .pets import router as pets_router
from .records import router as records_router

api_router = APIRouter()

# Operational endpoints
api_router.include_router(health_router, prefix="/health", tags=["health"])

# Domain endpoints consumed by the browser client
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
api_router.include_router(records_router, prefix="/records", tags=["records"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])

__all__ = ["api_router"]
