# storerate/routers/admin_stats.py
from fastapi import APIRouter, Depends
from supabase import Client

from storerate.core.auth import get_client, require_admin
from storerate.repositories.stats_repo import StatsRepository
from storerate.schemas.stats import DashboardStats
from storerate.services.stats_service import StatsService

router = APIRouter(prefix="/admin/stats", tags=["Admin Stats"])

service = StatsService(StatsRepository())


@router.get(
    "",
    response_model=DashboardStats,
    dependencies=[Depends(require_admin)],
)
def get_dashboard_stats(client: Client = Depends(get_client)):
    """
    User, store and rating counters for the admin dashboard.

    Only accessible to users with role='admin'.
    """
    return service.get_dashboard_stats(client)
