"""Item domain models."""

import uuid

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from lenddesk.core.mixins import TimestampMixin


class Item(TimestampMixin, SQLModel, table=True):
    """A lendable catalog entry.

    `is_active=False` means archived: hidden from the public catalog but
    kept for inquiries and wishlists that reference it.
    """

    __tablename__: str = "items"
    __table_args__ = (
        CheckConstraint("qty_total >= 0", name="ck_items_qty_total_non_negative"),
        CheckConstraint(
            "qty_available >= 0", name="ck_items_qty_available_non_negative"
        ),
        CheckConstraint(
            "qty_available <= qty_total", name="ck_items_qty_available_le_total"
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, max_length=200)
    description: str = Field(default="")
    photo_url: str = Field(default="", max_length=2048)
    qty_total: int = Field(default=0)
    qty_available: int = Field(default=0)
    is_active: bool = Field(default=True, index=True)
