# storerate/schemas/stats.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class DashboardStats(SQLModel):
    """
    Platform counters for the admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    total_users: int
    total_stores: int
    total_ratings: int
    admin_count: int
    user_count: int
    store_owner_count: int
