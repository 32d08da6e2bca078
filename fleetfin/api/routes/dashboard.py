"""Dashboard summary route."""

from datetime import datetime

from fastapi import APIRouter, Depends

from fleetfin.api.auth import get_current_user_id
from fleetfin.api.deps import get_as_of, get_repository
from fleetfin.api.schemas import DashboardStatsResponse
from fleetfin.data.repository import FleetRepository
from fleetfin.engine.schedules import dashboard_stats

router = APIRouter(prefix="/api/v1/stats", tags=["stats"])


@router.get("/dashboard", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    user_id: str = Depends(get_current_user_id),
    repo: FleetRepository = Depends(get_repository),
    as_of: datetime = Depends(get_as_of),
):
    companies = await repo.list_companies(user_id)
    vehicles = await repo.list_vehicles(user_id)
    loans = await repo.list_loans(user_id)
    stats = dashboard_stats(companies, vehicles, loans, as_of)
    return DashboardStatsResponse.model_validate(stats, from_attributes=True)
