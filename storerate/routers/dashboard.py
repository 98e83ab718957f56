# storerate/routers/dashboard.py
from fastapi import APIRouter, Depends
from supabase import Client

from storerate.core.auth import get_client, require_auth
from storerate.models.user import User
from storerate.repositories.rating_repo import RatingRepository
from storerate.repositories.stats_repo import StatsRepository
from storerate.repositories.store_repo import StoreRepository
from storerate.repositories.user_repo import UserRepository
from storerate.schemas.dashboard import AdminScreen, StoreOwnerScreen, UserScreen
from storerate.services.dashboard_service import DashboardService
from storerate.services.stats_service import StatsService
from storerate.services.store_service import StoreService
from storerate.services.user_service import UserService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

stats = StatsService(StatsRepository())
service = DashboardService(
    StoreService(
        StoreRepository(),
        RatingRepository(),
        UserService(UserRepository(), stats),
        stats,
    ),
    stats,
)


@router.get("", response_model=AdminScreen | StoreOwnerScreen | UserScreen)
def get_dashboard(
    client: Client = Depends(get_client),
    user: User = Depends(require_auth),
):
    """
    Landing screen for the signed-in user, picked by role:
      - admin       -> platform stats
      - store_owner -> own store, its reviews and rating aggregates
      - anyone else -> store directory with own ratings
    """
    return service.build(client, user)
