# storerate/services/stats_service.py
import logging

from fastapi import HTTPException, status
from supabase import Client

from storerate.repositories.stats_repo import StatsRepository
from storerate.schemas.stats import DashboardStats

logger = logging.getLogger(__name__)


class StatsService:
    """
    Orchestrates aggregated admin dashboard statistics.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_dashboard_stats(self, client: Client) -> DashboardStats:
        """
        Raises:
            HTTPException(502): if any of the counting queries failed.
        """
        try:
            return self.repo.get_dashboard_stats(client)
        except RuntimeError as e:
            logger.error("%s: %s", e, e.__cause__)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(e),
            )

    def refresh(self, client: Client) -> DashboardStats | None:
        """
        Stats for a screen or after a successful form: a failure is logged
        and yields None instead of an error.
        """
        try:
            return self.repo.get_dashboard_stats(client)
        except RuntimeError:
            logger.exception("Error fetching stats")
            return None
