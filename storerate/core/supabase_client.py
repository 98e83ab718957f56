# storerate/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from storerate.core.config import get_settings


def new_supabase_client() -> Client:
    """
    Create a fresh client with the anon key.

    Every request gets its own instance so the session it signs in with
    (or restores from the caller's tokens) stays private to that request.

    Note: This client still respects RLS.
    """
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


@lru_cache
def supabase_admin() -> Client:
    """
    Shared client with the service role key, for `auth.admin` calls
    (pre-confirmed users created by an admin). Backend only.

    Raises:
        RuntimeError: if SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    settings = get_settings()
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("Missing SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
