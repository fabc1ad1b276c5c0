"""User domain models.

SQLModel table definitions for User and the wishlist link table.
"""

import uuid
from enum import Enum

from pydantic import EmailStr
from sqlmodel import Field, SQLModel

from lenddesk.core.mixins import TimestampMixin


class UserRole(str, Enum):
    """Account role.

    - admin: full staff access, including user administration
    - editor: staff access to catalog and inquiries
    - viewer: regular user (browse, wishlist, inquiries)
    """

    admin = "admin"
    editor = "editor"
    viewer = "viewer"


STAFF_ROLES = frozenset({UserRole.admin, UserRole.editor})


class ApprovalStatus(str, Enum):
    """Staff-gated account activation state.

    Independent from `is_active`: an approved account can still be
    deactivated, and a pending one is blocked even when active.
    """

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


def initial_approval_status(role: UserRole) -> ApprovalStatus:
    """Staff signups wait for review; viewers are approved right away."""
    if role in STAFF_ROLES:
        return ApprovalStatus.pending
    return ApprovalStatus.approved


class User(TimestampMixin, SQLModel, table=True):
    """User database model.

    Note: external_id is internal-only (Firebase UID) and should
    never be exposed in API responses.
    """

    __tablename__: str = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    external_id: str = Field(index=True, unique=True)
    email: EmailStr = Field(index=True, unique=True, max_length=255)
    username: str = Field(index=True, unique=True, max_length=50)
    first_name: str = Field(default="", max_length=50)
    last_name: str = Field(default="", max_length=50)
    age: str = Field(default="", max_length=10)
    gender: str = Field(default="", max_length=20)
    contact_number: str = Field(default="", max_length=30)
    address: str = Field(default="", max_length=255)
    role: UserRole = Field(default=UserRole.viewer, max_length=20)
    approval_status: ApprovalStatus = Field(
        default=ApprovalStatus.approved, max_length=20, index=True
    )
    is_active: bool = Field(default=True)

    @property
    def display_name(self) -> str:
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.username


class WishlistEntry(TimestampMixin, SQLModel, table=True):
    """One saved item in a user's wishlist. The composite key makes it a set."""

    __tablename__: str = "wishlist_entries"

    user_id: uuid.UUID = Field(
        foreign_key="users.id", primary_key=True, ondelete="CASCADE"
    )
    item_id: uuid.UUID = Field(
        foreign_key="items.id", primary_key=True, ondelete="CASCADE"
    )
