"""Inquiry domain models.

An inquiry keeps snapshot copies of the item name/photo and the user's
display name taken at creation, and also links to the live rows. The
links go NULL if a referent is deleted; the snapshots never change.
"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Index, text
from sqlmodel import Field, Relationship, SQLModel

from lenddesk.core.mixins import TimestampMixin
from lenddesk.item.models import Item
from lenddesk.user.models import User


class InquiryStatus(str, Enum):
    """pending -> approved | rejected, exactly once."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


REPLY_STATUSES = frozenset({InquiryStatus.approved, InquiryStatus.rejected})

_PENDING_ONLY = text("status = 'pending'")


class Inquiry(TimestampMixin, SQLModel, table=True):
    """A user's request about an item, adjudicated once by staff."""

    __tablename__: str = "inquiries"
    __table_args__ = (
        # At most one pending inquiry per (user, item)
        Index(
            "uq_inquiries_pending_user_item",
            "user_id",
            "item_id",
            unique=True,
            sqlite_where=_PENDING_ONLY,
            postgresql_where=_PENDING_ONLY,
        ),
        Index("ix_inquiries_user_id_created_at", "user_id", "created_at"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    item_id: uuid.UUID | None = Field(
        default=None, foreign_key="items.id", index=True, ondelete="SET NULL"
    )
    item_name: str = Field(max_length=200)
    item_photo_url: str = Field(default="", max_length=2048)

    user_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
    user_name: str = Field(max_length=101)

    user_message: str
    status: InquiryStatus = Field(
        default=InquiryStatus.pending, max_length=20, index=True
    )

    admin_reply: str = Field(default="")
    replied_by: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
    replied_at: datetime | None = Field(default=None)

    is_read: bool = Field(default=False)
    is_read_by_admin: bool = Field(default=False, index=True)

    item: Item | None = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    user: User | None = Relationship(
        sa_relationship_kwargs={
            "foreign_keys": "[Inquiry.user_id]",
            "lazy": "selectin",
        }
    )
    replier: User | None = Relationship(
        sa_relationship_kwargs={
            "foreign_keys": "[Inquiry.replied_by]",
            "lazy": "selectin",
        }
    )
