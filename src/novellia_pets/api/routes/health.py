"""Module: health."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...utils.datetime_utils import get_current_utc
from ..deps import Store

router = APIRouter()


# Endpoint: liveness plus a round trip to the database.
@router.get("")
async def health(store: Store):
    result = await store.health_check(force=True)
    healthy = result["status"] == "healthy"

    body = {
        "status": "healthy" if healthy else "unhealthy",
        "database": "connected" if healthy else "disconnected",
        "timestamp": get_current_utc().isoformat(),
    }
    return JSONResponse(status_code=200 if healthy else 503, content=body)
