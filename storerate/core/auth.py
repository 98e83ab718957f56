# storerate/core/auth.py
import logging
from typing import Any, Iterator

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from supabase import AuthError, Client

from storerate.core.config import get_settings
from storerate.core.session import AuthSession
from storerate.core.supabase_client import new_supabase_client
from storerate.models.user import Role, User

logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so login/signup can run on an anonymous session.
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT) locally.

    Verification:
      - signature (using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_auth_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    x_refresh_token: str | None = Header(default=None),
) -> Iterator[AuthSession]:
    """
    Per-request identity holder.

    Flow:
      1. Fresh Supabase client for this request.
      2. If SUPABASE_JWT_SECRET is set, reject bad tokens before any network call.
      3. Resolve the session from the bearer token (+ optional X-Refresh-Token).
      4. Unsubscribe from auth events when the request ends.

    Raises:
        HTTPException(401): token rejected locally or by Supabase.
    """
    settings = get_settings()
    access_token = credentials.credentials if credentials else None

    if access_token and settings.SUPABASE_JWT_SECRET:
        decode_access_token(
            access_token, settings.SUPABASE_JWT_SECRET, settings.SUPABASE_JWT_ALG
        )

    holder = AuthSession(new_supabase_client())
    try:
        try:
            holder.start(access_token=access_token, refresh_token=x_refresh_token)
        except AuthError as e:
            logger.info("Rejected session: %s", e)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
            )
        yield holder
    finally:
        holder.close()


def get_client(holder: AuthSession = Depends(get_auth_session)) -> Client:
    """Supabase client carrying the caller's session (RLS applies)."""
    return holder.client


def get_current_user(holder: AuthSession = Depends(get_auth_session)) -> User | None:
    return holder.user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Raises:
        HTTPException(401): if there is no resolved profile.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Raises:
        HTTPException(403): if role is not admin.
    """
    if user.role != Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
