# storerate/models/rating.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class Rating(SQLModel):
    """
    One user's rating of one store.

    (user_id, store_id) is unique: re-rating overwrites the row.
    """

    model_config = ConfigDict(extra="ignore")

    id: uuid.UUID | None = None
    user_id: uuid.UUID
    store_id: uuid.UUID
    rating: int = Field(ge=1, le=5)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Rater(SQLModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    email: str


class StoreRating(Rating):
    """Rating joined with the rater's profile (`users(name, email)`)."""

    users: Rater | None = None
