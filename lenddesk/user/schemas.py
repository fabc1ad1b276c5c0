"""User domain schemas.

Request and response schemas for user operations.

Security notes:
- external_id (Firebase UID) is internal-only, never exposed in responses
- UserUpdateMe is restricted to profile fields to prevent privilege escalation
"""

import uuid

from pydantic import BaseModel, EmailStr
from sqlmodel import Field, SQLModel

from lenddesk.core.pagination import PageMeta
from lenddesk.core.schemas import TimestampRead
from lenddesk.user.models import ApprovalStatus, UserRole


class UserSummary(SQLModel):
    """Minimal user view embedded in other resources."""

    id: uuid.UUID
    username: str
    first_name: str
    last_name: str
    email: EmailStr


class UserRead(TimestampRead):
    """Full user view. Never includes external_id."""

    id: uuid.UUID
    email: EmailStr
    username: str
    first_name: str
    last_name: str
    age: str
    gender: str
    contact_number: str
    address: str
    role: UserRole
    approval_status: ApprovalStatus
    is_active: bool


class UserUpdateMe(SQLModel):
    """Schema for users updating their own profile.

    Users cannot modify email, username, role, approval_status or is_active.
    """

    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    age: str | None = Field(default=None, max_length=10)
    gender: str | None = Field(default=None, max_length=20)
    contact_number: str | None = Field(default=None, max_length=30)
    address: str | None = Field(default=None, max_length=255)


class UserUpdate(UserUpdateMe):
    """Schema for an admin updating a user.

    approval_status is intentionally excluded: it only changes through
    the approve/reject review actions.
    """

    email: EmailStr | None = None
    username: str | None = Field(default=None, min_length=3, max_length=50)
    role: UserRole | None = None
    is_active: bool | None = None


class UserResponse(BaseModel):
    message: str
    user: UserRead


class UserListResponse(PageMeta):
    message: str
    users: list[UserRead]
