# storerate/services/store_service.py
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Literal

from fastapi import HTTPException, status
from postgrest.exceptions import APIError
from supabase import Client

from storerate.core.config import get_settings
from storerate.core.errors import FormError
from storerate.core.listing import (
    STORE_SORT_KEYS,
    filter_stores,
    next_sorts,
    search_stores_by,
    sort_records,
)
from storerate.models.store import Store
from storerate.models.user import Role, User
from storerate.repositories.rating_repo import RatingRepository
from storerate.repositories.store_repo import StoreRepository
from storerate.schemas.listing import SortConfig
from storerate.schemas.store import (
    StoreCreate,
    StoreCreated,
    StoreDirectoryPage,
    StoreListPage,
    StoreRatingRead,
    StoreRead,
    StoreWithRating,
    UserRatingRead,
)
from storerate.services.stats_service import StatsService
from storerate.services.user_service import UserService

logger = logging.getLogger(__name__)


class StoreService:
    """
    Business logic for stores and ratings.

    Responsibilities:
      - admin store list (search, sort) and store creation
      - store directory with the caller's own ratings
      - rating submission (upsert) and store owner review lists
    """

    def __init__(
        self,
        repo: StoreRepository,
        ratings: RatingRepository,
        users: UserService,
        stats: StatsService,
    ):
        self.repo = repo
        self.ratings = ratings
        self.users = users
        self.stats = stats

    # ----- Lists -----

    def fetch_stores(self, client: Client) -> list[Store]:
        """Whole store list; a failed fetch is logged and shows as empty."""
        try:
            return self.repo.get_all_stores(client)
        except Exception:
            logger.exception("Error fetching stores")
            return []

    def list_stores(
        self,
        client: Client,
        search: str = "",
        sort: SortConfig | None = None,
    ) -> StoreListPage:
        stores = filter_stores(self.fetch_stores(client), search)
        stores = sort_records(stores, sort, STORE_SORT_KEYS)
        return StoreListPage(
            items=[StoreRead.model_validate(s.model_dump()) for s in stores],
            total=len(stores),
            sort=sort,
            next_sort=next_sorts(sort, STORE_SORT_KEYS),
        )

    def stores_with_user_ratings(self, client: Client, user: User) -> list[StoreWithRating]:
        """
        Every store plus `user`'s rating of it.

        One rating lookup per store, at most RATING_LOOKUP_CONCURRENCY in
        flight. Any failure empties the list (logged).
        """
        try:
            stores = self.repo.get_all_stores(client)
            workers = max(1, get_settings().RATING_LOOKUP_CONCURRENCY)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                user_ratings = list(
                    pool.map(
                        lambda s: self.ratings.get_user_rating(client, user.id, s.id),
                        stores,
                    )
                )
        except Exception:
            logger.exception("Error fetching stores")
            return []

        return [
            StoreWithRating(**s.model_dump(), user_rating=r)
            for s, r in zip(stores, user_ratings)
        ]

    def browse(
        self,
        client: Client,
        user: User,
        search: str = "",
        search_by: Literal["name", "address"] = "name",
    ) -> StoreDirectoryPage:
        stores = self.stores_with_user_ratings(client, user)
        shown = search_stores_by(stores, search, search_by)
        return StoreDirectoryPage(items=shown, shown=len(shown), total=len(stores))

    def rated_stores(self, client: Client, user: User) -> list[StoreRead]:
        try:
            stores = self.repo.get_stores_by_user(client, user.id)
        except Exception:
            logger.exception("Error fetching rated stores")
            return []
        return [StoreRead.model_validate(s.model_dump()) for s in stores]

    def store_owned_by(self, client: Client, user: User) -> Store | None:
        """The store whose owner is `user`, if any."""
        return next(
            (s for s in self.repo.get_all_stores(client) if s.owner_id == user.id),
            None,
        )

    # ----- Forms -----

    def create_store(self, client: Client, payload: StoreCreate) -> StoreCreated:
        """
        Create a store, then refresh the dashboard stats.

        Raises:
            FormError(422): owner is not one of the store owners.
            FormError(400): the owner lookup or the insert failed.
        """
        try:
            users = self.users.repo.get_all_users(client)
        except APIError as e:
            raise FormError.submit(e, "Failed to create store")
        owner_ids = {str(u.id) for u in users if u.role == Role.STORE_OWNER}
        if payload.owner_id not in owner_ids:
            raise FormError({"owner_id": "Please select a store owner"})

        try:
            store = self.repo.create_store(client, payload)
        except (APIError, RuntimeError) as e:
            raise FormError.submit(e, "Failed to create store")

        logger.info("Created store %s owned by %s", store.id, payload.owner_id)
        return StoreCreated(
            store=StoreRead.model_validate(store.model_dump()),
            stats=self.stats.refresh(client),
        )

    # ----- Ratings -----

    def get_user_rating(self, client: Client, user: User, store_id: uuid.UUID) -> UserRatingRead:
        return UserRatingRead(
            store_id=store_id,
            rating=self.ratings.get_user_rating(client, user.id, store_id),
        )

    def submit_rating(
        self,
        client: Client,
        user: User,
        store_id: uuid.UUID,
        rating: int,
    ) -> UserRatingRead:
        """
        Raises:
            FormError(400): the backend rejected the upsert.
        """
        try:
            self.ratings.submit_rating(client, user.id, store_id, rating)
        except APIError as e:
            raise FormError.submit(e, "Failed to submit rating")
        return UserRatingRead(store_id=store_id, rating=rating)

    def get_store_ratings(
        self, client: Client, user: User, store_id: uuid.UUID
    ) -> list[StoreRatingRead]:
        """
        Reviews of a store, for an admin or the store's owner.

        Raises:
            HTTPException(403): caller is neither.
        """
        if user.role != Role.ADMIN:
            owned = self.store_owned_by(client, user) if user.role == Role.STORE_OWNER else None
            if owned is None or owned.id != store_id:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Only the store owner can view its ratings",
                )
        return self.read_ratings(client, store_id)

    def read_ratings(self, client: Client, store_id: uuid.UUID) -> list[StoreRatingRead]:
        return [
            StoreRatingRead(
                id=r.id,
                user_id=r.user_id,
                rating=r.rating,
                created_at=r.created_at,
                rater_name=r.users.name if r.users else None,
                rater_email=r.users.email if r.users else None,
            )
            for r in self.ratings.get_ratings_for_store(client, store_id)
        ]
