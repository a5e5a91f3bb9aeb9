# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Annotated, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from leaveflow.models.enums import ApplicationScope, ApplicationStatus, HalfDayPeriod, LeaveCategory

# ---------------------------------------------------------------------------
# Submission payloads, one variant per category
# ---------------------------------------------------------------------------


class _LeaveRequestBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    leave_type_id: uuid.UUID
    start_date: date
    reason: str | None = Field(default=None, max_length=1000)


class FullDayLeave(_LeaveRequestBase):
    """One or more whole days, both endpoints inclusive."""

    category: Literal["FULL_DAY"]
    end_date: date


class HalfDayLeave(_LeaveRequestBase):
    """Half of a single day."""

    category: Literal["HALF_DAY"]
    half_day_period: HalfDayPeriod


class ShortLeave(_LeaveRequestBase):
    """A short absence within a single day, optionally with a time window."""

    category: Literal["SHORT_LEAVE"]
    short_leave_start_time: time | None = None
    short_leave_end_time: time | None = None

    @model_validator(mode="after")
    def _validate_window(self) -> Self:
        start, end = self.short_leave_start_time, self.short_leave_end_time
        if start is not None and end is not None and end <= start:
            msg = "short_leave_end_time must be after short_leave_start_time"
            raise ValueError(msg)
        return self


LeaveRequestVariant = FullDayLeave | HalfDayLeave | ShortLeave
SubmitLeavePayload = Annotated[LeaveRequestVariant, Field(discriminator="category")]


class RejectPayload(BaseModel):
    """Request body for rejecting an application."""

    reason: str = Field(max_length=1000)


# ---------------------------------------------------------------------------
# Listing filter
# ---------------------------------------------------------------------------


class ScopeFilter(BaseModel):
    """Which applications a listing should return, before access scoping."""

    scope: ApplicationScope = ApplicationScope.ALL
    status: ApplicationStatus | None = None
    employee_id: uuid.UUID | None = None
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=50, ge=1, le=100)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ApplicationResponse(BaseModel):
    """Response schema for a single leave application."""

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_id: uuid.UUID
    category: LeaveCategory
    start_date: date
    end_date: date | None
    half_day_period: HalfDayPeriod | None
    short_leave_start_time: time | None
    short_leave_end_time: time | None
    total_days: Decimal
    balance_year: int
    reason: str | None
    status: ApplicationStatus
    approver_id: uuid.UUID | None
    approved_at: datetime | None
    rejection_reason: str | None
    created_at: datetime


class ApplicationListResponse(BaseModel):
    """Paginated list of leave applications."""

    items: list[ApplicationResponse]
    total: int
