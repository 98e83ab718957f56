# storerate/models/user.py
import uuid
from datetime import datetime
from enum import Enum

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class Role(str, Enum):
    """Application role stored on `public.users.role`."""

    ADMIN = "admin"
    USER = "user"
    STORE_OWNER = "store_owner"


def role_label(role: Role) -> str:
    """Human readable role name, e.g. "store owner"."""
    match role:
        case Role.ADMIN:
            return "admin"
        case Role.USER:
            return "user"
        case Role.STORE_OWNER:
            return "store owner"
    raise ValueError(f"Unknown role: {role!r}")


def role_color(role: Role) -> str:
    """Badge colour used for a role in user details."""
    match role:
        case Role.ADMIN:
            return "red"
        case Role.USER:
            return "blue"
        case Role.STORE_OWNER:
            return "green"
    raise ValueError(f"Unknown role: {role!r}")


class User(SQLModel):
    """
    User profile row as returned by Supabase (`public.users`).

    Identity:
      - id: matches Supabase auth.users.id

    The row is written by the backend when an auth account is created
    (sign-up metadata is mirrored into it). Passwords never live here.
    """

    model_config = ConfigDict(extra="ignore")

    id: uuid.UUID = Field(description="Matches Supabase auth.users.id")
    name: str
    email: str
    address: str | None = None
    role: Role = Field(
        default=Role.USER,
        description="Application role: admin | user | store_owner",
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None
