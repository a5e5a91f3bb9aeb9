from __future__ import annotations

import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

# Day quantities carry two fractional digits so a 0.25-day short leave is stored exactly.
DAYS_TYPE = sa.Numeric(5, 2)


def now_utc() -> datetime:
    """Return the current UTC time."""
    return datetime.now(UTC)


def leave_type_fk() -> sa.Column:
    """A fresh, indexed ``leave_type_id`` column; records go with their leave type."""
    return sa.Column(sa.Uuid, sa.ForeignKey("leave_type.id", ondelete="CASCADE"), nullable=False, index=True)


class UUIDBase(SQLModel):
    """Every leaveflow table is keyed by a random UUID."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, sa_type=sa.Uuid)


class TimestampMixin(SQLModel):
    """Adds ``created_at``; application listings are ordered newest first by it."""

    created_at: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
