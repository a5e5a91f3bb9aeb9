from __future__ import annotations

from sqlmodel import Field

from leaveflow.models.base import TimestampMixin, UUIDBase


class LeaveType(UUIDBase, TimestampMixin, table=True):
    """Catalog entry for a kind of leave (e.g. Annual, Sick)."""

    __tablename__ = "leave_type"

    name: str = Field(max_length=100, unique=True)
    description: str | None = Field(default=None, max_length=255)
