# storerate/core/session.py
import logging
from enum import Enum

from supabase import Client

from storerate.models.user import User
from storerate.repositories.auth_repo import AuthRepository
from storerate.repositories.user_repo import UserRepository
from storerate.schemas.user import SignupRequest

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    LOADING = "loading"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class AuthSession:
    """
    Identity holder for one Supabase client.

    Lifecycle:
      - `start()` subscribes to auth events and resolves any existing
        session to a profile (authenticated) or nothing (anonymous).
      - `login()` / `signup()` / `logout()` go through `loading` and settle.
      - `close()` unsubscribes. Always call it (see `get_auth_session`).

    Auth events:
      - SIGNED_IN  -> re-fetch the profile
      - SIGNED_OUT -> clear the identity

    Only this object mutates `user`; callers read it.
    """

    def __init__(
        self,
        client: Client,
        users: UserRepository | None = None,
        auth: AuthRepository | None = None,
    ):
        self.client = client
        self.users = users or UserRepository()
        self.auth = auth or AuthRepository()
        self.user: User | None = None
        self.state = SessionState.LOADING
        self._subscription = None

    # ----- State -----

    @property
    def loading(self) -> bool:
        return self.state is SessionState.LOADING

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def _settle(self) -> None:
        self.state = (
            SessionState.AUTHENTICATED if self.user is not None else SessionState.ANONYMOUS
        )

    def _load_profile(self, user_id) -> None:
        """Fetch the profile row; a failure leaves the identity unchanged."""
        try:
            self.user = self.users.get_user(self.client, user_id)
        except Exception:
            logger.exception("Error fetching user data for %s", user_id)

    # ----- Lifecycle -----

    def start(
        self,
        access_token: str | None = None,
        refresh_token: str | None = None,
    ) -> "AuthSession":
        """
        Subscribe to auth events and resolve the existing session.

        - access + refresh token: restore the full session on the client
        - access token only: look up the token's user, authorize queries
        - nothing: whatever session the client already holds

        Raises:
            AuthError: if Supabase rejects the tokens.
        """
        self.state = SessionState.LOADING
        self._subscription = self.client.auth.on_auth_state_change(
            self._on_auth_state_change
        )

        auth_user = None
        if access_token and refresh_token:
            res = self.auth.restore_session(self.client, access_token, refresh_token)
            auth_user = res.user if res else None
        elif access_token:
            auth_user = self.auth.get_user_for_token(self.client, access_token)
            # Queries carry the caller's JWT so row-level security applies.
            self.client.postgrest.auth(access_token)
        else:
            session = self.auth.get_session(self.client)
            auth_user = session.user if session else None

        if auth_user is not None and self.user is None:
            self._load_profile(auth_user.id)
        self._settle()
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_state_change(self, event, session) -> None:
        if event == "SIGNED_IN" and session is not None and session.user is not None:
            self._load_profile(session.user.id)
        elif event == "SIGNED_OUT":
            self.user = None
        self._settle()

    # ----- Operations -----

    def login(self, email: str, password: str):
        """
        Sign in and load the profile.

        Raises:
            AuthError: bad credentials or backend failure.
            APIError: profile lookup failed.
        """
        self.state = SessionState.LOADING
        try:
            res = self.auth.sign_in(self.client, email, password)
            if res.user is not None:
                self.user = self.users.get_user(self.client, res.user.id)
            return res
        finally:
            self._settle()

    def signup(self, payload: SignupRequest):
        """
        Create the account. When Supabase opens a session right away, the
        SIGNED_IN event loads the profile.

        Raises:
            AuthError: e.g. email already registered.
        """
        self.state = SessionState.LOADING
        try:
            return self.auth.sign_up(self.client, payload)
        finally:
            self._settle()

    def logout(self) -> None:
        """Sign out. Errors are logged; the identity is cleared regardless."""
        self.state = SessionState.LOADING
        try:
            self.auth.sign_out(self.client)
        except Exception:
            logger.exception("Error signing out")
        finally:
            self.user = None
            self._settle()
