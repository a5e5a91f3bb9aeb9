# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreateLeaveTypeRequest(BaseModel):
    """Request body for adding a leave type to the catalog."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=255)


class LeaveTypeResponse(BaseModel):
    """A single leave type."""

    id: uuid.UUID
    name: str
    description: str | None
    created_at: datetime


class LeaveTypeListResponse(BaseModel):
    """All leave types in the catalog."""

    items: list[LeaveTypeResponse]
    total: int
