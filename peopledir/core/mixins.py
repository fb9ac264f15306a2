"""Column mixins shared by table models."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import text
from sqlmodel import Field


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(UTC).replace(microsecond=0)


def _timestamp(*, touch_on_update: bool = False) -> Any:
    column_kwargs: dict[str, Any] = {"server_default": text("CURRENT_TIMESTAMP")}
    if touch_on_update:
        column_kwargs["onupdate"] = utc_now
    return Field(default_factory=utc_now, sa_column_kwargs=column_kwargs)


class TimestampMixin:
    """Adds created_at and updated_at to a record.

    updated_at moves forward whenever the row is written by an UPDATE, so
    an edit bumps it even when only the teams change.
    """

    created_at: datetime = _timestamp()
    updated_at: datetime = _timestamp(touch_on_update=True)
