# storerate/repositories/stats_repo.py
from concurrent.futures import ThreadPoolExecutor

from supabase import Client

from storerate.models.user import Role
from storerate.schemas.stats import DashboardStats


class StatsRepository:
    """
    Read-only aggregated queries for admin dashboard.
    """

    def get_dashboard_stats(self, client: Client) -> DashboardStats:
        """
        Count users (per role), stores and ratings.

        The three selects run in parallel; if any of them fails the whole
        call fails.

        Raises:
            RuntimeError: "Failed to fetch dashboard statistics".
        """
        with ThreadPoolExecutor(max_workers=3) as pool:
            users_f = pool.submit(
                lambda: client.table("users").select("role").execute()
            )
            stores_f = pool.submit(
                lambda: client.table("stores").select("id").execute()
            )
            ratings_f = pool.submit(
                lambda: client.table("ratings").select("id").execute()
            )
            try:
                users = users_f.result().data or []
                stores = stores_f.result().data or []
                ratings = ratings_f.result().data or []
            except Exception as e:
                raise RuntimeError("Failed to fetch dashboard statistics") from e

        roles = [row.get("role") for row in users]
        return DashboardStats(
            total_users=len(users),
            total_stores=len(stores),
            total_ratings=len(ratings),
            admin_count=roles.count(Role.ADMIN.value),
            user_count=roles.count(Role.USER.value),
            store_owner_count=roles.count(Role.STORE_OWNER.value),
        )
