# storerate/routers/stores.py
import uuid
from typing import Literal

from fastapi import APIRouter, Depends, status
from supabase import Client

from storerate.core.auth import get_client, require_admin, require_auth
from storerate.core.listing import StoreSortKey
from storerate.models.user import User
from storerate.repositories.rating_repo import RatingRepository
from storerate.repositories.stats_repo import StatsRepository
from storerate.repositories.store_repo import StoreRepository
from storerate.repositories.user_repo import UserRepository
from storerate.schemas.listing import SortConfig, SortDirection
from storerate.schemas.store import (
    RatingSubmit,
    StoreCreate,
    StoreCreated,
    StoreDirectoryPage,
    StoreListPage,
    StoreRatingRead,
    StoreRead,
    UserRatingRead,
)
from storerate.services.stats_service import StatsService
from storerate.services.store_service import StoreService
from storerate.services.user_service import UserService

router = APIRouter(prefix="/stores", tags=["Stores"])

stats = StatsService(StatsRepository())
service = StoreService(
    StoreRepository(),
    RatingRepository(),
    UserService(UserRepository(), stats),
    stats,
)


# -------- Regular users --------


@router.get("/browse", response_model=StoreDirectoryPage)
def browse_stores(
    client: Client = Depends(get_client),
    user: User = Depends(require_auth),
    search: str = "",
    search_by: Literal["name", "address"] = "name",
):
    """
    Store directory with the caller's own rating on every store.

    `search` matches the field chosen by `search_by`.
    """
    return service.browse(client, user, search=search, search_by=search_by)


@router.get("/rated", response_model=list[StoreRead])
def rated_stores(
    client: Client = Depends(get_client),
    user: User = Depends(require_auth),
):
    """Stores the caller has rated."""
    return service.rated_stores(client, user)


@router.get("/{store_id}/rating", response_model=UserRatingRead)
def get_my_rating(
    store_id: uuid.UUID,
    client: Client = Depends(get_client),
    user: User = Depends(require_auth),
):
    """The caller's rating for a store (`rating` is null if not rated)."""
    return service.get_user_rating(client, user, store_id)


@router.put("/{store_id}/rating", response_model=UserRatingRead)
def submit_rating(
    store_id: uuid.UUID,
    payload: RatingSubmit,
    client: Client = Depends(get_client),
    user: User = Depends(require_auth),
):
    """
    Rate a store 1-5. Rating again replaces the previous value.
    """
    return service.submit_rating(client, user, store_id, payload.rating)


@router.get("/{store_id}/ratings", response_model=list[StoreRatingRead])
def get_store_ratings(
    store_id: uuid.UUID,
    client: Client = Depends(get_client),
    user: User = Depends(require_auth),
):
    """
    Reviews of a store with rater name and email.

    Auth:
      - admin, or the store owner of this store.
    """
    return service.get_store_ratings(client, user, store_id)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=StoreListPage,
    dependencies=[Depends(require_admin)],
)
def list_stores(
    client: Client = Depends(get_client),
    search: str = "",
    sort_by: StoreSortKey | None = None,
    direction: SortDirection = "asc",
):
    """
    Store management list (admin only).

    - `search`: case-insensitive match on name, email or address
    - `sort_by` / `direction`: column sort
    """
    sort = SortConfig(key=sort_by, direction=direction) if sort_by else None
    return service.list_stores(client, search=search, sort=sort)


@router.post(
    "",
    response_model=StoreCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_store(payload: StoreCreate, client: Client = Depends(get_client)):
    """
    Add a store owned by an existing store owner (admin only).

    Returns the store and refreshed dashboard stats.
    """
    return service.create_store(client, payload)
