# storerate/services/dashboard_service.py
import logging
from collections import Counter
from typing import Literal

from supabase import Client

from storerate.models.user import Role, User
from storerate.schemas.dashboard import (
    AdminScreen,
    StoreOwnerScreen,
    UserScreen,
)
from storerate.schemas.store import StoreRead
from storerate.schemas.user import UserRead
from storerate.services.stats_service import StatsService
from storerate.services.store_service import StoreService

logger = logging.getLogger(__name__)

Screen = Literal["admin", "store_owner", "user"]


def screen_for_role(role: Role) -> Screen:
    """Which screen a role lands on after sign-in."""
    match role:
        case Role.ADMIN:
            return "admin"
        case Role.STORE_OWNER:
            return "store_owner"
        case _:
            return "user"


class DashboardService:
    """
    Role router: builds the landing screen for the signed-in user.

    Screens absorb backend failures (logged) and render empty data.
    """

    def __init__(self, stores: StoreService, stats: StatsService):
        self.stores = stores
        self.stats = stats

    def build(self, client: Client, user: User) -> AdminScreen | StoreOwnerScreen | UserScreen:
        screen = screen_for_role(user.role)
        if screen == "admin":
            return self.admin_screen(client, user)
        if screen == "store_owner":
            return self.store_owner_screen(client, user)
        return self.user_screen(client, user)

    def admin_screen(self, client: Client, user: User) -> AdminScreen:
        return AdminScreen(user=_read(user), stats=self.stats.refresh(client))

    def store_owner_screen(self, client: Client, user: User) -> StoreOwnerScreen:
        try:
            store = self.stores.store_owned_by(client, user)
            ratings = self.stores.read_ratings(client, store.id) if store else []
        except Exception:
            logger.exception("Error fetching store data")
            store, ratings = None, []

        if store is None:
            return StoreOwnerScreen(user=_read(user))

        counts = Counter(r.rating for r in ratings)
        return StoreOwnerScreen(
            user=_read(user),
            store=StoreRead.model_validate(store.model_dump()),
            ratings=ratings,
            average_rating=store.average_rating or 0.0,
            total_ratings=store.total_ratings or 0,
            rating_distribution={star: counts.get(star, 0) for star in range(1, 6)},
        )

    def user_screen(self, client: Client, user: User) -> UserScreen:
        return UserScreen(
            user=_read(user),
            stores=self.stores.stores_with_user_ratings(client, user),
        )


def _read(user: User) -> UserRead:
    return UserRead.model_validate(user.model_dump())
