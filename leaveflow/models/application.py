# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime, time
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from leaveflow.models.base import DAYS_TYPE, TimestampMixin, UUIDBase, leave_type_fk
from leaveflow.models.enums import ApplicationStatus


class LeaveApplication(UUIDBase, TimestampMixin, table=True):
    """An employee's leave application with approval workflow state."""

    __tablename__ = "leave_application"
    __table_args__ = (
        sa.Index("ix_application_employee_status", "employee_id", "status"),
        sa.Index("ix_application_employee_category_start", "employee_id", "category", "start_date"),
    )

    employee_id: uuid.UUID = Field(index=True)
    leave_type_id: uuid.UUID = Field(sa_column=leave_type_fk())
    category: str = Field(max_length=20)
    start_date: date
    end_date: date | None = None
    half_day_period: str | None = Field(default=None, max_length=20)
    short_leave_start_time: time | None = None
    short_leave_end_time: time | None = None
    total_days: Decimal = Field(sa_type=DAYS_TYPE)  # ty: ignore[invalid-argument-type]
    balance_year: int
    reason: str | None = None
    status: str = Field(
        default=ApplicationStatus.PENDING, max_length=20, index=True, sa_column_kwargs={"server_default": "PENDING"}
    )
    approver_id: uuid.UUID | None = None
    approved_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    rejection_reason: str | None = None
