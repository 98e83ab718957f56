# storerate/repositories/rating_repo.py
import uuid

from postgrest.exceptions import APIError
from supabase import Client

from storerate.core.errors import is_no_rows
from storerate.models.rating import Rating, StoreRating


class RatingRepository:
    """
    Data access layer for Rating.

    One row per (user_id, store_id); writing again replaces the value.
    """

    TABLE = "ratings"
    CONFLICT_KEY = "user_id,store_id"

    def get_user_rating(
        self,
        client: Client,
        user_id: uuid.UUID | str,
        store_id: uuid.UUID | str,
    ) -> int | None:
        """
        Return the rating `user_id` gave `store_id`, or None if not rated.

        Only the "no row" error is absorbed; anything else propagates.
        """
        try:
            res = (
                client.table(self.TABLE)
                .select("rating")
                .eq("user_id", str(user_id))
                .eq("store_id", str(store_id))
                .single()
                .execute()
            )
        except APIError as e:
            if is_no_rows(e):
                return None
            raise
        data = res.data or {}
        return data.get("rating") or None

    def submit_rating(
        self,
        client: Client,
        user_id: uuid.UUID | str,
        store_id: uuid.UUID | str,
        rating: int,
    ) -> Rating | None:
        """Insert or overwrite the (user, store) rating."""
        res = (
            client.table(self.TABLE)
            .upsert(
                {
                    "user_id": str(user_id),
                    "store_id": str(store_id),
                    "rating": rating,
                },
                on_conflict=self.CONFLICT_KEY,
            )
            .execute()
        )
        if not res.data:
            return None
        return Rating.model_validate(res.data[0])

    def get_ratings_for_store(
        self, client: Client, store_id: uuid.UUID | str
    ) -> list[StoreRating]:
        """Ratings for a store with rater name/email, newest first."""
        res = (
            client.table(self.TABLE)
            .select("*, users(name, email)")
            .eq("store_id", str(store_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [StoreRating.model_validate(row) for row in res.data or []]
