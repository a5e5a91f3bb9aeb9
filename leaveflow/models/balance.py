# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from leaveflow.models.base import DAYS_TYPE, UUIDBase, leave_type_fk, now_utc


class LeaveBalance(UUIDBase, table=True):
    """Per-employee, per-leave-type, per-year entitlement record.

    Only the ledger service mutates these rows, always through a single
    conditional UPDATE that bumps ``version``.
    """

    __tablename__ = "leave_balance"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "leave_type_id", "year", name="uq_balance_employee_type_year"),
        sa.CheckConstraint("used_days >= 0", name="ck_balance_used_non_negative"),
        sa.CheckConstraint("available_days >= 0", name="ck_balance_available_non_negative"),
    )

    employee_id: uuid.UUID = Field(index=True)
    leave_type_id: uuid.UUID = Field(sa_column=leave_type_fk())
    year: int = Field(index=True)
    total_days: Decimal = Field(default=Decimal("20.0"), sa_type=DAYS_TYPE)  # ty: ignore[invalid-argument-type]
    used_days: Decimal = Field(default=Decimal("0"), sa_type=DAYS_TYPE)  # ty: ignore[invalid-argument-type]
    available_days: Decimal = Field(default=Decimal("20.0"), sa_type=DAYS_TYPE)  # ty: ignore[invalid-argument-type]
    version: int = Field(default=1, sa_column_kwargs={"server_default": "1"})
    updated_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now()},
    )
