# storerate/models/store.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class Store(SQLModel):
    """
    Store row, usually read from the `store_ratings_summary` view.

    `average_rating` and `total_ratings` are computed by the database;
    they are absent on rows read from the plain `stores` table.
    """

    model_config = ConfigDict(extra="ignore")

    id: uuid.UUID
    name: str
    email: str
    address: str | None = None
    owner_id: uuid.UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    average_rating: float | None = Field(
        default=None,
        description="Mean of all ratings for this store (server-side)",
    )
    total_ratings: int | None = Field(
        default=None,
        description="Number of rating rows for this store (server-side)",
    )
