# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Balance response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    """Balance record for one leave type in one year."""

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_id: uuid.UUID
    leave_type_name: str
    year: int
    total_days: Decimal
    used_days: Decimal
    available_days: Decimal
    version: int
    updated_at: datetime | None


class BalanceListResponse(BaseModel):
    """All balance records for an employee in one year."""

    items: list[BalanceResponse]
    total: int


# ---------------------------------------------------------------------------
# Manual override request schema
# ---------------------------------------------------------------------------


class ManualBalanceUpdate(BaseModel):
    """HR override of a balance record. Stored exactly as given."""

    total_days: Decimal = Field(ge=0, max_digits=5, decimal_places=2)
    used_days: Decimal = Field(ge=0, max_digits=5, decimal_places=2)
    available_days: Decimal = Field(ge=0, max_digits=5, decimal_places=2)
