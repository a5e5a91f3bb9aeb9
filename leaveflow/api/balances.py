# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Query

from leaveflow.api.deps import CallerDep, HRDep
from leaveflow.db import SessionDep
from leaveflow.schemas.balance import BalanceListResponse, BalanceResponse, ManualBalanceUpdate
from leaveflow.services import ledger

employee_balance_router = APIRouter(
    prefix="/employees/{employee_id}/balances",
    tags=["balances"],
)

balance_router = APIRouter(
    prefix="/balances",
    tags=["balances"],
)


@employee_balance_router.get("", response_model=BalanceListResponse)
async def get_employee_balances(
    employee_id: uuid.UUID,
    session: SessionDep,
    caller: CallerDep,
    year: int | None = Query(default=None, ge=1900, le=9999),
) -> BalanceListResponse:
    """Get an employee's balances for a year (current year by default)."""
    return await ledger.get_balances(session, caller, employee_id, year)


@employee_balance_router.post("/initialize", response_model=BalanceListResponse)
async def initialize_employee_balances(
    employee_id: uuid.UUID,
    session: SessionDep,
    caller: HRDep,
    year: int | None = Query(default=None, ge=1900, le=9999),
) -> BalanceListResponse:
    """Create any missing balance records for the year (HR only)."""
    return await ledger.list_balances(session, employee_id, year or date.today().year)


@balance_router.put("/{balance_id}", response_model=BalanceResponse)
async def set_manual_balance(
    balance_id: uuid.UUID,
    payload: ManualBalanceUpdate,
    session: SessionDep,
    caller: HRDep,
) -> BalanceResponse:
    """Overwrite a balance record's totals verbatim (HR only)."""
    return await ledger.set_manual_balance(session, balance_id, payload)
