# storerate/routers/users.py
import uuid
from typing import Literal

from fastapi import APIRouter, Depends, status
from supabase import Client

from storerate.core.auth import get_client, require_admin
from storerate.core.listing import UserSortKey
from storerate.repositories.stats_repo import StatsRepository
from storerate.repositories.user_repo import UserRepository
from storerate.schemas.listing import SortConfig, SortDirection
from storerate.schemas.user import (
    UserCreate,
    UserCreated,
    UserDetails,
    UserListPage,
    UserRead,
)
from storerate.services.stats_service import StatsService
from storerate.services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_admin)],
)

service = UserService(UserRepository(), StatsService(StatsRepository()))


@router.get("", response_model=UserListPage)
def list_users(
    client: Client = Depends(get_client),
    search: str = "",
    role: Literal["all", "admin", "user", "store_owner"] = "all",
    sort_by: UserSortKey | None = None,
    direction: SortDirection = "asc",
):
    """
    User management list (admin only).

    - `search`: case-insensitive match on name, email or address
    - `role`: exact role, or "all"
    - `sort_by` / `direction`: column sort
    """
    sort = SortConfig(key=sort_by, direction=direction) if sort_by else None
    return service.list_users(client, search=search, role=role, sort=sort)


@router.get("/store-owners", response_model=list[UserRead])
def list_store_owners(client: Client = Depends(get_client)):
    """Users with role store_owner, for the add-store form."""
    return [UserRead.model_validate(u.model_dump()) for u in service.list_store_owners(client)]


@router.get("/{user_id}", response_model=UserDetails)
def get_user(user_id: uuid.UUID, client: Client = Depends(get_client)):
    """User details with role badge (admin only)."""
    return service.get_user(client, user_id)


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, client: Client = Depends(get_client)):
    """
    Add a user of any role (admin only).

    Returns the new account and refreshed dashboard stats.
    """
    return service.create_user(client, payload)
