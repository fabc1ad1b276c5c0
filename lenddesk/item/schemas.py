"""Item domain schemas.

Quantities are plain ints here (lax mode turns "3" into 3); their range
rules live in `item.service.validate_quantities` so they report the
catalog's own messages.
"""

import uuid
from enum import Enum

from pydantic import BaseModel
from sqlmodel import Field, SQLModel

from lenddesk.core.pagination import PageMeta
from lenddesk.core.schemas import TimestampRead


class ItemSortField(str, Enum):
    created_at = "created_at"
    updated_at = "updated_at"
    name = "name"
    qty_total = "qty_total"
    qty_available = "qty_available"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class ItemCreate(SQLModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    photo_url: str = Field(default="", max_length=2048)
    qty_total: int | None = None
    qty_available: int | None = None
    is_active: bool = True


class ItemUpdate(SQLModel):
    """Partial update; omitted fields keep their stored values."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    photo_url: str | None = Field(default=None, max_length=2048)
    qty_total: int | None = None
    qty_available: int | None = None
    is_active: bool | None = None


class ItemRead(TimestampRead):
    id: uuid.UUID
    name: str
    description: str
    photo_url: str
    qty_total: int
    qty_available: int
    is_active: bool


class ItemSummary(SQLModel):
    """Minimal item view embedded in other resources."""

    id: uuid.UUID
    name: str
    photo_url: str
    is_active: bool


class ItemResponse(BaseModel):
    message: str
    item: ItemRead


class ItemListResponse(PageMeta):
    message: str
    items: list[ItemRead]
    sort_by: ItemSortField | None = None
    sort_order: SortOrder | None = None
    search: str | None = None


class WishlistAdd(BaseModel):
    item_id: uuid.UUID
