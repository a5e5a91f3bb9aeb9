# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from leaveflow.config import get_settings
from leaveflow.exceptions import InsufficientBalance, NotFound, ValidationError
from leaveflow.models.balance import LeaveBalance
from leaveflow.models.base import now_utc
from leaveflow.models.leave_type import LeaveType
from leaveflow.schemas.balance import BalanceListResponse, BalanceResponse
from leaveflow.services.access import ensure_can_view_employee
from leaveflow.services.directory import get_employee_directory

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leaveflow.schemas.auth import CallerIdentity
    from leaveflow.schemas.balance import ManualBalanceUpdate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_balance_response(balance: LeaveBalance, leave_type_name: str) -> BalanceResponse:
    """Map a balance model to its response schema."""
    return BalanceResponse(
        id=balance.id,
        employee_id=balance.employee_id,
        leave_type_id=balance.leave_type_id,
        leave_type_name=leave_type_name,
        year=balance.year,
        total_days=balance.total_days,
        used_days=balance.used_days,
        available_days=balance.available_days,
        version=balance.version,
        updated_at=balance.updated_at,
    )


def _record_filter(employee_id: uuid.UUID, leave_type_id: uuid.UUID, year: int) -> list[sa.ColumnElement[bool]]:
    return [
        col(LeaveBalance.employee_id) == employee_id,
        col(LeaveBalance.leave_type_id) == leave_type_id,
        col(LeaveBalance.year) == year,
    ]


async def _select_year_balances(session: AsyncSession, employee_id: uuid.UUID, year: int) -> list[LeaveBalance]:
    result = await session.execute(
        select(LeaveBalance)
        .where(col(LeaveBalance.employee_id) == employee_id, col(LeaveBalance.year) == year)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def _find_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    year: int,
) -> LeaveBalance | None:
    result = await session.execute(
        select(LeaveBalance)
        .where(*_record_filter(employee_id, leave_type_id, year))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


def _require_positive(days: Decimal) -> None:
    if days <= 0:
        raise ValidationError("Days must be greater than zero")


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


async def ensure_year_balances(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> list[LeaveBalance]:
    """Return the employee's records for ``year``, creating missing ones.

    Every leave type in the catalog gets a record at the configured default
    entitlement. Newly created rows are committed immediately; a concurrent
    initializer losing the unique-constraint race simply re-reads.
    """
    directory = get_employee_directory()
    if not await directory.employee_exists(employee_id):
        raise NotFound("Employee not found")

    balances = await _select_year_balances(session, employee_id, year)
    known = {b.leave_type_id for b in balances}

    type_result = await session.execute(select(col(LeaveType.id)))
    missing = [leave_type_id for leave_type_id in type_result.scalars().all() if leave_type_id not in known]
    if not missing:
        return balances

    default_days = get_settings().default_total_days
    for leave_type_id in missing:
        session.add(
            LeaveBalance(
                employee_id=employee_id,
                leave_type_id=leave_type_id,
                year=year,
                total_days=default_days,
                used_days=Decimal("0"),
                available_days=default_days,
            )
        )
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.info("Balances for employee %s in %d were initialized concurrently", employee_id, year)
    else:
        logger.info("Initialized %d balance record(s) for employee %s in %d", len(missing), employee_id, year)

    return await _select_year_balances(session, employee_id, year)


async def get_balance(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    year: int,
) -> LeaveBalance:
    """Return one balance record, lazily initializing the employee's year."""
    for balance in await ensure_year_balances(session, employee_id, year):
        if balance.leave_type_id == leave_type_id:
            return balance
    raise NotFound("Leave type not found")


async def list_balances(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> BalanceListResponse:
    """List an employee's balance records for a year, ordered by leave type name."""
    await ensure_year_balances(session, employee_id, year)
    result = await session.execute(
        select(LeaveBalance, col(LeaveType.name))
        .join(LeaveType, col(LeaveType.id) == col(LeaveBalance.leave_type_id))
        .where(col(LeaveBalance.employee_id) == employee_id, col(LeaveBalance.year) == year)
        .order_by(col(LeaveType.name))
        .execution_options(populate_existing=True)
    )
    items = [_build_balance_response(balance, name) for balance, name in result.all()]
    return BalanceListResponse(items=items, total=len(items))


async def get_balances(
    session: AsyncSession,
    caller: CallerIdentity,
    employee_id: uuid.UUID,
    year: int | None = None,
) -> BalanceListResponse:
    """Balances visible to the caller, for the current year unless given."""
    await ensure_can_view_employee(caller, employee_id)
    return await list_balances(session, employee_id, year or date.today().year)


# ---------------------------------------------------------------------------
# Write path: debit / credit run inside the caller's transaction
# ---------------------------------------------------------------------------


async def debit(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    days: Decimal,
    year: int,
) -> None:
    """Consume ``days`` from the record, re-checking availability atomically.

    The sufficiency predicate lives in the UPDATE's WHERE clause, so two
    concurrent debits can never both pass on a balance that covers one. Both
    the stored ``available_days`` and ``total_days - used_days`` must cover
    the debit, since a manual override may have left them apart.
    Does not commit.
    """
    _require_positive(days)
    result = await session.execute(
        update(LeaveBalance)
        .where(
            *_record_filter(employee_id, leave_type_id, year),
            col(LeaveBalance.available_days) >= days,
            col(LeaveBalance.total_days) - col(LeaveBalance.used_days) >= days,
        )
        .values(
            used_days=col(LeaveBalance.used_days) + days,
            available_days=col(LeaveBalance.total_days) - (col(LeaveBalance.used_days) + days),
            version=col(LeaveBalance.version) + 1,
            updated_at=now_utc(),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 1:  # type: ignore[attr-defined]
        return

    balance = await _find_balance(session, employee_id, leave_type_id, year)
    if balance is None:
        raise NotFound("Balance record not found")
    available = min(balance.available_days, balance.total_days - balance.used_days)
    logger.warning("Debit of %s day(s) refused for employee %s: only %s available", days, employee_id, available)
    raise InsufficientBalance(f"Insufficient balance: {available} day(s) available, {days} requested")


async def credit(
    session: AsyncSession,
    employee_id: uuid.UUID,
    leave_type_id: uuid.UUID,
    days: Decimal,
    year: int,
) -> None:
    """Give back ``days`` previously debited. Neither ``used_days`` nor ``available_days`` drops below zero.

    No shipped transition calls this yet; it is the ledger half of a future
    Approved -> Cancelled transition. Does not commit.
    """
    _require_positive(days)
    remaining = col(LeaveBalance.used_days) - days
    new_used = sa.case((remaining < 0, Decimal("0")), else_=remaining)
    new_available = col(LeaveBalance.total_days) - new_used
    result = await session.execute(
        update(LeaveBalance)
        .where(*_record_filter(employee_id, leave_type_id, year))
        .values(
            used_days=new_used,
            available_days=sa.case((new_available < 0, Decimal("0")), else_=new_available),
            version=col(LeaveBalance.version) + 1,
            updated_at=now_utc(),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:  # type: ignore[attr-defined]
        raise NotFound("Balance record not found")


# ---------------------------------------------------------------------------
# Write path: HR manual override
# ---------------------------------------------------------------------------


async def set_manual(
    session: AsyncSession,
    balance_id: uuid.UUID,
    total_days: Decimal,
    used_days: Decimal,
    available_days: Decimal,
) -> LeaveBalance:
    """Store an HR-supplied triple verbatim.

    ``available_days`` is not recomputed here, so the derived-field invariant
    may be left broken until the next debit or credit. Commits.
    """
    if min(total_days, used_days, available_days) < 0:
        raise ValidationError("Balance values must not be negative")
    if available_days != total_days - used_days:
        logger.warning(
            "Manual override on balance %s is not self-consistent: total=%s used=%s available=%s",
            balance_id,
            total_days,
            used_days,
            available_days,
        )

    result = await session.execute(
        update(LeaveBalance)
        .where(col(LeaveBalance.id) == balance_id)
        .values(
            total_days=total_days,
            used_days=used_days,
            available_days=available_days,
            version=col(LeaveBalance.version) + 1,
            updated_at=now_utc(),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:  # type: ignore[attr-defined]
        await session.rollback()
        raise NotFound("Balance record not found")
    await session.commit()

    refreshed = await session.execute(
        select(LeaveBalance).where(col(LeaveBalance.id) == balance_id).execution_options(populate_existing=True)
    )
    return refreshed.scalar_one()


async def set_manual_balance(
    session: AsyncSession,
    balance_id: uuid.UUID,
    payload: ManualBalanceUpdate,
) -> BalanceResponse:
    """HR override entry point used by the API."""
    balance = await set_manual(session, balance_id, payload.total_days, payload.used_days, payload.available_days)
    leave_type = await session.get(LeaveType, balance.leave_type_id)
    return _build_balance_response(balance, leave_type.name if leave_type else "")
