"""Dashboard endpoints."""

from fastapi import APIRouter

from ...queries.dashboard import DashboardQueries
from ...schemas.dashboard import DashboardStats
from ..deps import Store

router = APIRouter()


@router.get("/stats", response_model=DashboardStats, summary="Dashboard statistics")
async def dashboard_stats(store: Store):
    async with store.get_transaction() as session:
        stats = await DashboardQueries(session, store.statement_timeout).get_stats()
    return DashboardStats.model_validate(stats)
