# storerate/services/user_service.py
import logging
import uuid

from fastapi import HTTPException, status
from postgrest.exceptions import APIError
from supabase import AuthError, Client

from storerate.core.config import get_settings
from storerate.core.errors import FormError, is_no_rows
from storerate.core.listing import (
    ALL,
    USER_SORT_KEYS,
    filter_users,
    next_sorts,
    sort_records,
)
from storerate.core.supabase_client import new_supabase_client, supabase_admin
from storerate.models.user import Role, User, role_color, role_label
from storerate.repositories.user_repo import UserRepository
from storerate.schemas.listing import SortConfig
from storerate.schemas.user import (
    UserCreate,
    UserCreated,
    UserDetails,
    UserListPage,
    UserRead,
)
from storerate.services.stats_service import StatsService

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - user management list (search, role filter, sort)
      - user details
      - admin user creation
    """

    def __init__(self, repo: UserRepository, stats: StatsService):
        self.repo = repo
        self.stats = stats

    def fetch_users(self, client: Client) -> list[User]:
        """Whole user list; a failed fetch is logged and shows as empty."""
        try:
            return self.repo.get_all_users(client)
        except Exception:
            logger.exception("Error fetching users")
            return []

    def list_users(
        self,
        client: Client,
        search: str = "",
        role: str = ALL,
        sort: SortConfig | None = None,
    ) -> UserListPage:
        users = filter_users(self.fetch_users(client), search, role)
        users = sort_records(users, sort, USER_SORT_KEYS)
        return UserListPage(
            items=[UserRead.model_validate(u.model_dump()) for u in users],
            total=len(users),
            sort=sort,
            next_sort=next_sorts(sort, USER_SORT_KEYS),
        )

    def list_store_owners(self, client: Client) -> list[User]:
        """Candidates for a store's owner."""
        return [u for u in self.fetch_users(client) if u.role == Role.STORE_OWNER]

    def get_user(self, client: Client, user_id: uuid.UUID) -> UserDetails:
        """
        Raises:
            HTTPException(404): if not found.
        """
        try:
            user = self.repo.get_user(client, user_id)
        except APIError as e:
            if is_no_rows(e):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="User not found",
                )
            raise
        return UserDetails(
            **user.model_dump(
                include={"id", "name", "email", "address", "role", "created_at", "updated_at"}
            ),
            role_label=role_label(user.role),
            role_color=role_color(user.role),
        )

    def create_user(self, client: Client, payload: UserCreate) -> UserCreated:
        """
        Create an account for someone else, then refresh the dashboard stats.

        With a service-role key the account is created pre-confirmed;
        otherwise it goes through a sign-up on a throwaway client so the
        admin's own session is left alone.

        Raises:
            FormError(400): the backend rejected the account.
        """
        try:
            if get_settings().SUPABASE_SERVICE_ROLE_KEY:
                created = self.repo.create_user_as_admin(supabase_admin(), payload)
            else:
                created = self.repo.create_user(new_supabase_client(), payload)
        except (AuthError, APIError, RuntimeError) as e:
            raise FormError.submit(e, "Failed to create user")

        logger.info("Created %s account %s", created.role.value, created.id)
        return UserCreated(user=created, stats=self.stats.refresh(client))
