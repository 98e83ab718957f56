# storerate/schemas/user.py
import re
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, ValidationInfo, field_validator
from sqlmodel import SQLModel, Field

from storerate.models.user import Role
from storerate.schemas.listing import SortConfig
from storerate.schemas.stats import DashboardStats

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
SPECIAL_CHAR_PATTERN = re.compile(r"[^A-Za-z0-9]")

NAME_MIN, NAME_MAX = 20, 60
ADDRESS_MAX = 400
PASSWORD_MIN, PASSWORD_MAX = 8, 16


# ----- Shared form rules -----


def check_name(value: str, label: str = "Name") -> str:
    if not value or len(value) < NAME_MIN or len(value) > NAME_MAX:
        raise ValueError(f"{label} must be between {NAME_MIN} and {NAME_MAX} characters")
    return value


def check_email(value: str) -> str:
    if not value or not EMAIL_PATTERN.match(value):
        raise ValueError("Please enter a valid email address")
    return value


def check_address(value: str) -> str:
    if not value or len(value) > ADDRESS_MAX:
        raise ValueError(
            f"Address is required and must be less than {ADDRESS_MAX} characters"
        )
    return value


def check_password(value: str) -> str:
    """
    Password rule shared by sign-up, admin user creation and password change:
      - 8 to 16 characters
      - at least one uppercase letter
      - at least one special character
    """
    if (
        not value
        or not PASSWORD_MIN <= len(value) <= PASSWORD_MAX
        or not any(c.isupper() for c in value)
        or not SPECIAL_CHAR_PATTERN.search(value)
    ):
        raise ValueError(
            "Password must be 8-16 characters and include an uppercase letter "
            "and a special character"
        )
    return value


# ----- Read models -----


class UserRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    name: str
    email: str
    address: str | None = None
    role: Role
    created_at: datetime | None = None


class UserDetails(UserRead):
    """User details view: adds the last update time and the role badge."""

    updated_at: datetime | None = None
    role_label: str
    role_color: str


class UserListPage(SQLModel):
    """
    Filtered and sorted user list.

    `next_sort` maps each sortable column to the sort a click on its
    header would apply next.
    """

    items: list[UserRead]
    total: int
    sort: SortConfig | None = None
    next_sort: dict[str, SortConfig]


# ----- Forms -----


class SignupRequest(SQLModel):
    """
    Self sign-up form. Role is always "user" and cannot be chosen.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    email: str
    password: str
    address: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return check_address(v)


class UserCreate(SignupRequest):
    """
    Admin "add user" form. Same rules as sign-up plus an explicit role.
    """

    role: Role = Role.USER


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class PasswordChange(SQLModel):
    """Change-password form for the signed-in user."""

    model_config = ConfigDict(extra="forbid")

    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info: ValidationInfo) -> str:
        if "new_password" not in info.data:
            return v
        if v != info.data["new_password"]:
            raise ValueError("Passwords do not match")
        return v


# ----- Results -----


class CreatedUser(SQLModel):
    """Auth account created by an admin; the profile row follows on the backend."""

    id: uuid.UUID
    email: str
    name: str
    address: str
    role: Role


class UserCreated(SQLModel):
    user: CreatedUser
    stats: DashboardStats | None = None


class AuthSessionRead(SQLModel):
    """Tokens and profile returned after login."""

    access_token: str | None = None
    refresh_token: str | None = None
    user: UserRead | None = None


class SignupResult(SQLModel):
    """
    Result of self sign-up.

    `confirmation_required` is true when Supabase did not open a session
    (email confirmation enabled); `user` is filled once a session exists.
    """

    user_id: uuid.UUID | None = None
    email: str
    confirmation_required: bool
    user: UserRead | None = None
