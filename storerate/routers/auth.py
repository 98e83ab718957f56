# storerate/routers/auth.py
from fastapi import APIRouter, Depends, Response, status

from storerate.core.auth import get_auth_session, require_auth
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
from storerate.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

service = AuthService(AuthRepository())


@router.post("/signup", response_model=SignupResult, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, holder: AuthSession = Depends(get_auth_session)):
    """
    Create an account with role "user".

    When email confirmation is enabled no session is opened and
    `confirmation_required` is true.
    """
    return service.signup(holder, payload)


@router.post("/login", response_model=AuthSessionRead)
def login(payload: LoginRequest, holder: AuthSession = Depends(get_auth_session)):
    """
    Sign in with email and password.

    Returns access/refresh tokens and the profile. Send the access token as
    `Authorization: Bearer ...` and the refresh token as `X-Refresh-Token`.
    """
    return service.login(holder, payload)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(holder: AuthSession = Depends(get_auth_session)):
    """Sign out. Always succeeds; backend errors are only logged."""
    service.logout(holder)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """Return the authenticated user's profile."""
    return UserRead.model_validate(current_user.model_dump())


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    payload: PasswordChange,
    holder: AuthSession = Depends(get_auth_session),
):
    """
    Change the signed-in user's password.

    Needs both the bearer token and `X-Refresh-Token` so a full session
    can be restored on the backend client.
    """
    service.change_password(holder, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
