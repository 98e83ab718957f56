# storerate/schemas/dashboard.py
from typing import Literal

from sqlmodel import SQLModel

from storerate.schemas.stats import DashboardStats
from storerate.schemas.store import StoreRatingRead, StoreRead, StoreWithRating
from storerate.schemas.user import UserRead


class AdminScreen(SQLModel):
    """Admin landing screen. `stats` is null when the counters failed to load."""

    screen: Literal["admin"] = "admin"
    user: UserRead
    stats: DashboardStats | None = None


class StoreOwnerScreen(SQLModel):
    """
    Store owner landing screen.

    `store` is null when no store is associated with the account.
    `rating_distribution` counts reviews per star (1-5).
    """

    screen: Literal["store_owner"] = "store_owner"
    user: UserRead
    store: StoreRead | None = None
    ratings: list[StoreRatingRead] = []
    average_rating: float = 0.0
    total_ratings: int = 0
    rating_distribution: dict[int, int] = {}


class UserScreen(SQLModel):
    """Store directory for regular users."""

    screen: Literal["user"] = "user"
    user: UserRead
    stores: list[StoreWithRating]
