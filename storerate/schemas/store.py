# storerate/schemas/store.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from storerate.schemas.listing import SortConfig
from storerate.schemas.stats import DashboardStats
from storerate.schemas.user import check_address, check_email, check_name


class StoreRead(SQLModel):
    """Store as shown in lists, with server-computed aggregates."""

    id: uuid.UUID
    name: str
    email: str
    address: str | None = None
    owner_id: uuid.UUID | None = None
    created_at: datetime | None = None
    average_rating: float | None = None
    total_ratings: int | None = None


class StoreWithRating(StoreRead):
    """Store card in the directory: adds the caller's own rating (if any)."""

    user_rating: int | None = None


class StoreListPage(SQLModel):
    items: list[StoreRead]
    total: int
    sort: SortConfig | None = None
    next_sort: dict[str, SortConfig]


class StoreDirectoryPage(SQLModel):
    """Store directory for regular users ("Showing X of Y stores")."""

    items: list[StoreWithRating]
    shown: int
    total: int


class StoreCreate(SQLModel):
    """
    Admin "add store" form.

    Validation rules:
      - name: 20 to 60 characters
      - email: must match the email pattern
      - address: required, at most 400 characters
      - owner_id: required (must be a store owner, checked in the service)
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    email: str
    address: str
    owner_id: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_name(v, label="Store name")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return check_address(v)

    @field_validator("owner_id")
    @classmethod
    def validate_owner(cls, v: str) -> str:
        v = v.strip()
        try:
            uuid.UUID(v)
        except ValueError:
            raise ValueError("Please select a store owner")
        return v


class StoreCreated(SQLModel):
    store: StoreRead
    stats: DashboardStats | None = None


# ----- Ratings -----


class RatingSubmit(SQLModel):
    model_config = ConfigDict(extra="forbid")

    rating: int

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError("Rating must be between 1 and 5")
        return v


class UserRatingRead(SQLModel):
    """The caller's rating for one store; `rating` is null when not rated yet."""

    store_id: uuid.UUID
    rating: int | None = None


class StoreRatingRead(SQLModel):
    """A review as seen by the store owner."""

    id: uuid.UUID | None = None
    user_id: uuid.UUID
    rating: int
    created_at: datetime | None = None
    rater_name: str | None = None
    rater_email: str | None = None
