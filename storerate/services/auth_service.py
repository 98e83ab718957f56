# storerate/services/auth_service.py
import logging

from fastapi import HTTPException, status
from postgrest.exceptions import APIError
from supabase import AuthError

from storerate.core.errors import FormError
from storerate.core.session import AuthSession
from storerate.models.user import User
from storerate.repositories.auth_repo import AuthRepository
from storerate.schemas.user import (
    AuthSessionRead,
    LoginRequest,
    PasswordChange,
    SignupRequest,
    SignupResult,
    UserRead,
)

logger = logging.getLogger(__name__)


def _read(user: User | None) -> UserRead | None:
    return UserRead.model_validate(user.model_dump()) if user else None


class AuthService:
    """
    Login, sign-up, logout and password change on the request's AuthSession.

    Form failures come back as FormError so the caller can show them
    next to the form.
    """

    def __init__(self, repo: AuthRepository):
        self.repo = repo

    def login(self, holder: AuthSession, payload: LoginRequest) -> AuthSessionRead:
        """
        Raises:
            FormError(400): wrong credentials or missing profile.
        """
        try:
            res = holder.login(payload.email, payload.password)
        except (AuthError, APIError) as e:
            raise FormError.submit(e, "Failed to sign in")

        session = res.session
        return AuthSessionRead(
            access_token=session.access_token if session else None,
            refresh_token=session.refresh_token if session else None,
            user=_read(holder.user),
        )

    def signup(self, holder: AuthSession, payload: SignupRequest) -> SignupResult:
        """
        Raises:
            FormError(400): the backend refused the account.
        """
        try:
            res = holder.signup(payload)
        except AuthError as e:
            raise FormError.submit(e, "Failed to create account")

        return SignupResult(
            user_id=res.user.id if res.user else None,
            email=payload.email,
            confirmation_required=res.session is None,
            user=_read(holder.user),
        )

    def logout(self, holder: AuthSession) -> None:
        holder.logout()

    def change_password(self, holder: AuthSession, payload: PasswordChange) -> None:
        """
        Raises:
            HTTPException(401): not signed in.
            FormError(400): Supabase refused the update (e.g. no refresh token
                was sent, so there is no session to update).
        """
        if holder.user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required",
            )
        try:
            self.repo.update_password(holder.client, holder.user.id, payload.new_password)
        except AuthError as e:
            raise FormError.submit(e, "Failed to update password")
        logger.info("Password updated for %s", holder.user.id)
