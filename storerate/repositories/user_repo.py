# storerate/repositories/user_repo.py
import uuid

from supabase import Client

from storerate.models.user import Role, User
from storerate.schemas.user import CreatedUser, UserCreate


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure Supabase calls (queries + auth account creation)
      - No FastAPI, no HTTP, no business logic
    """

    TABLE = "users"

    def get_user(self, client: Client, user_id: uuid.UUID | str) -> User:
        """
        Return the profile row for `user_id`.

        Raises:
            APIError: code PGRST116 if there is no such row.
        """
        res = (
            client.table(self.TABLE)
            .select("*")
            .eq("id", str(user_id))
            .single()
            .execute()
        )
        return User.model_validate(res.data)

    def get_all_users(self, client: Client) -> list[User]:
        """All users, newest first."""
        res = (
            client.table(self.TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [User.model_validate(row) for row in res.data or []]

    def create_user(self, client: Client, payload: UserCreate) -> CreatedUser:
        """
        Create an auth account through a regular sign-up.

        `client` must be a throwaway anon client: signing up may open a
        session on it. The profile row is written by the backend from the
        user metadata.
        """
        res = client.auth.sign_up(
            {
                "email": payload.email,
                "password": payload.password,
                "options": {"data": self._metadata(payload)},
            }
        )
        return self._created(res.user, payload)

    def create_user_as_admin(self, client: Client, payload: UserCreate) -> CreatedUser:
        """
        Create a pre-confirmed auth account with the service-role client.
        """
        res = client.auth.admin.create_user(
            {
                "email": payload.email,
                "password": payload.password,
                "email_confirm": True,
                "user_metadata": self._metadata(payload),
            }
        )
        return self._created(res.user, payload)

    # ----- Helpers -----

    @staticmethod
    def _metadata(payload: UserCreate) -> dict[str, str]:
        return {
            "name": payload.name,
            "address": payload.address,
            "role": Role(payload.role).value,
        }

    @staticmethod
    def _created(auth_user, payload: UserCreate) -> CreatedUser:
        if auth_user is None:
            raise RuntimeError("Supabase did not return the created user")
        return CreatedUser(
            id=auth_user.id,
            email=auth_user.email or payload.email,
            name=payload.name,
            address=payload.address,
            role=payload.role,
        )
