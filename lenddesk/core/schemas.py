"""Shared response schema pieces."""

from datetime import UTC, datetime

from pydantic import BaseModel, field_serializer
from sqlmodel import SQLModel


def format_utc(value: datetime) -> str:
    """Format a datetime as ISO 8601 in UTC with a Z suffix, whole seconds.

    Naive datetimes are assumed to already be UTC (SQLite drops tzinfo).
    """
    if value.tzinfo is not None:
        utc_value = value.astimezone(UTC)
    else:
        utc_value = value.replace(tzinfo=UTC)
    return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


class TimestampRead(SQLModel):
    """Base for read schemas of tables using TimestampMixin."""

    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_timestamps(self, value: datetime) -> str:
        return format_utc(value)


class MessageResponse(BaseModel):
    """Generic `{message}` response body."""

    message: str
