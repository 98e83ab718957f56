# storerate/repositories/auth_repo.py
import uuid

from supabase import Client

from storerate.models.user import Role
from storerate.schemas.user import SignupRequest


class AuthRepository:
    """
    Thin wrapper around `client.auth` (Supabase Auth).

    Every method raises the Supabase `AuthError` subclasses unchanged.
    """

    def sign_up(self, client: Client, payload: SignupRequest):
        """Self sign-up. The role is always "user"."""
        return client.auth.sign_up(
            {
                "email": payload.email,
                "password": payload.password,
                "options": {
                    "data": {
                        "name": payload.name,
                        "address": payload.address,
                        "role": Role.USER.value,
                    }
                },
            }
        )

    def sign_in(self, client: Client, email: str, password: str):
        return client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )

    def sign_out(self, client: Client) -> None:
        client.auth.sign_out()

    def get_session(self, client: Client):
        """Session held by this client, or None."""
        return client.auth.get_session()

    def restore_session(self, client: Client, access_token: str, refresh_token: str):
        """Install the caller's tokens on this client (refreshing if expired)."""
        return client.auth.set_session(access_token, refresh_token)

    def get_user_for_token(self, client: Client, access_token: str):
        """Auth user owning `access_token`, or None."""
        res = client.auth.get_user(access_token)
        return res.user if res else None

    def update_password(
        self, client: Client, user_id: uuid.UUID | str, new_password: str
    ):
        """
        Change the password of the session held by `client`.

        `user_id` is informational: Supabase updates whoever the session
        belongs to.
        """
        res = client.auth.update_user({"password": new_password})
        return res.user if res else None
