# storerate/repositories/store_repo.py
import uuid

from supabase import Client

from storerate.models.store import Store
from storerate.schemas.store import StoreCreate


class StoreRepository:
    """
    Data access layer for Store.

    Reads go through the `store_ratings_summary` view so every row carries
    `average_rating` / `total_ratings`; writes go to `stores`.
    """

    TABLE = "stores"
    SUMMARY_VIEW = "store_ratings_summary"

    def get_all_stores(self, client: Client) -> list[Store]:
        """All stores with rating aggregates, newest first."""
        res = (
            client.table(self.SUMMARY_VIEW)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [Store.model_validate(row) for row in res.data or []]

    def get_stores_by_user(self, client: Client, user_id: uuid.UUID | str) -> list[Store]:
        """Stores that `user_id` has rated (inner join on ratings)."""
        res = (
            client.table(self.SUMMARY_VIEW)
            .select("*, ratings!inner(rating)")
            .eq("ratings.user_id", str(user_id))
            .execute()
        )
        return [Store.model_validate(row) for row in res.data or []]

    def create_store(self, client: Client, payload: StoreCreate) -> Store:
        """Insert a new store and return the persisted row."""
        res = (
            client.table(self.TABLE)
            .insert(
                [
                    {
                        "name": payload.name,
                        "email": payload.email,
                        "address": payload.address,
                        "owner_id": payload.owner_id,
                    }
                ]
            )
            .execute()
        )
        if not res.data:
            raise RuntimeError("Supabase did not return the created store")
        return Store.model_validate(res.data[0])
