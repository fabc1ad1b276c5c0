"""Inquiry domain schemas.

Create/reply bodies keep their fields optional so missing values are
reported with the inquiry-specific messages instead of generic field
errors.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, field_serializer
from sqlmodel import SQLModel

from lenddesk.core.pagination import PageMeta
from lenddesk.core.schemas import TimestampRead, format_utc
from lenddesk.inquiry.models import InquiryStatus
from lenddesk.item.schemas import ItemSummary
from lenddesk.user.schemas import UserSummary


class InquiryCreate(SQLModel):
    item_id: uuid.UUID | None = None
    user_message: str | None = None


class InquiryReply(SQLModel):
    admin_reply: str | None = None
    status: str | None = None


class InquiryRead(TimestampRead):
    id: uuid.UUID
    item_id: uuid.UUID | None
    item_name: str
    item_photo_url: str
    user_id: uuid.UUID | None
    user_name: str
    user_message: str
    status: InquiryStatus
    admin_reply: str
    replied_by: uuid.UUID | None
    replied_at: datetime | None
    is_read: bool
    is_read_by_admin: bool

    # Live joined view; null when the referent is gone
    item: ItemSummary | None = None
    user: UserSummary | None = None
    replier: UserSummary | None = None

    @field_serializer("replied_at")
    def serialize_replied_at(self, value: datetime | None) -> str | None:
        return format_utc(value) if value is not None else None


class InquiryResponse(BaseModel):
    message: str
    inquiry: InquiryRead


class InquiryListResponse(PageMeta):
    message: str
    inquiries: list[InquiryRead]


class InquiryStats(BaseModel):
    total: int
    unread_by_admin: int
    by_status: dict[InquiryStatus, int]


class InquiryStatsResponse(BaseModel):
    message: str
    stats: InquiryStats
