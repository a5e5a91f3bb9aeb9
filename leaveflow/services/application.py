# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select, update
from sqlmodel import col

from leaveflow.config import get_settings
from leaveflow.exceptions import AccessDenied, AppError, InvalidStateTransition, NotFound, ValidationError
from leaveflow.models.application import LeaveApplication
from leaveflow.models.base import now_utc
from leaveflow.models.enums import ApplicationStatus, Decision, HalfDayPeriod, LeaveCategory, Role
from leaveflow.schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    FullDayLeave,
    HalfDayLeave,
    ShortLeave,
)
from leaveflow.services import ledger
from leaveflow.services.access import ensure_can_decide, ensure_can_view_application, resolve_visible_employees
from leaveflow.services.directory import get_employee_directory
from leaveflow.services.leave_type import get_leave_type_or_404
from leaveflow.services.rules import RuleContext, month_bounds, validate_leave_request

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leaveflow.schemas.application import ScopeFilter, SubmitLeavePayload
    from leaveflow.schemas.auth import CallerIdentity

logger = logging.getLogger(__name__)

# Statuses that still count against the monthly short-leave allowance.
_BOOKED_STATUSES = [ApplicationStatus.PENDING.value, ApplicationStatus.APPROVED.value]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_application_response(application: LeaveApplication) -> ApplicationResponse:
    """Map an application model to its response schema."""
    return ApplicationResponse(
        id=application.id,
        employee_id=application.employee_id,
        leave_type_id=application.leave_type_id,
        category=LeaveCategory(application.category),
        start_date=application.start_date,
        end_date=application.end_date,
        half_day_period=HalfDayPeriod(application.half_day_period) if application.half_day_period else None,
        short_leave_start_time=application.short_leave_start_time,
        short_leave_end_time=application.short_leave_end_time,
        total_days=application.total_days,
        balance_year=application.balance_year,
        reason=application.reason,
        status=ApplicationStatus(application.status),
        approver_id=application.approver_id,
        approved_at=application.approved_at,
        rejection_reason=application.rejection_reason,
        created_at=application.created_at,
    )


async def _load_application(
    session: AsyncSession,
    caller: CallerIdentity,
    application_id: uuid.UUID,
) -> LeaveApplication:
    """Fetch an application by ID.

    Only HR learns that an ID does not exist; everyone else gets AccessDenied
    so probing IDs reveals nothing.
    """
    result = await session.execute(
        select(LeaveApplication)
        .where(col(LeaveApplication.id) == application_id)
        .execution_options(populate_existing=True)
    )
    application = result.scalar_one_or_none()
    if application is None:
        if caller.role == Role.HR:
            raise NotFound("Leave application not found")
        raise AccessDenied()
    return application


async def _count_short_leaves_in_month(session: AsyncSession, employee_id: uuid.UUID, day: date) -> int:
    first, last = month_bounds(day)
    result = await session.execute(
        select(func.count())
        .select_from(LeaveApplication)
        .where(
            col(LeaveApplication.employee_id) == employee_id,
            col(LeaveApplication.category) == LeaveCategory.SHORT_LEAVE.value,
            col(LeaveApplication.status).in_(_BOOKED_STATUSES),
            col(LeaveApplication.start_date) >= first,
            col(LeaveApplication.start_date) <= last,
        )
    )
    return int(result.scalar_one())


async def _claim_pending(session: AsyncSession, application_id: uuid.UUID, **values: Any) -> bool:
    """Move a PENDING application to its decided state in one statement.

    Returns False when another request already moved it out of PENDING.
    """
    result = await session.execute(
        update(LeaveApplication)
        .where(
            col(LeaveApplication.id) == application_id,
            col(LeaveApplication.status) == ApplicationStatus.PENDING.value,
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1  # type: ignore[attr-defined]


def _ensure_pending(application: LeaveApplication) -> None:
    if application.status != ApplicationStatus.PENDING.value:
        raise InvalidStateTransition(f"Application is already {application.status}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def submit_leave(
    session: AsyncSession,
    caller: CallerIdentity,
    payload: SubmitLeavePayload,
    today: date | None = None,
) -> ApplicationResponse:
    """File a leave application for the caller.

    Flow:
    1. Employee and leave type must exist
    2. Read the current-year balance (lazily initialized)
    3. Count booked short leaves in the request's month
    4. Run the rule validator (cross-month, short-leave cap, sufficiency)
    5. Create the PENDING application and commit

    No balance is reserved; the ledger is only debited on approval.
    """
    today = today or date.today()
    settings = get_settings()
    category = LeaveCategory(payload.category)
    employee_id = caller.user_id

    # 1. Referenced entities.
    if not await get_employee_directory().employee_exists(employee_id):
        raise NotFound("Employee not found")
    await get_leave_type_or_404(session, payload.leave_type_id)

    # 2-3. Facts for the rules.
    balance = await ledger.get_balance(session, employee_id, payload.leave_type_id, today.year)
    short_leaves = 0
    if category == LeaveCategory.SHORT_LEAVE:
        short_leaves = await _count_short_leaves_in_month(session, employee_id, payload.start_date)

    # 4. Validate.
    end_date = payload.end_date if isinstance(payload, FullDayLeave) else None
    total_days = validate_leave_request(
        category,
        payload.start_date,
        end_date,
        RuleContext(
            short_leaves_in_month=short_leaves,
            available_days=min(balance.available_days, balance.total_days - balance.used_days),
            short_leave_cap=settings.short_leave_monthly_cap,
        ),
    )

    # 5. Create.
    application = LeaveApplication(
        employee_id=employee_id,
        leave_type_id=payload.leave_type_id,
        category=category.value,
        start_date=payload.start_date,
        end_date=end_date,
        half_day_period=payload.half_day_period.value if isinstance(payload, HalfDayLeave) else None,
        short_leave_start_time=payload.short_leave_start_time if isinstance(payload, ShortLeave) else None,
        short_leave_end_time=payload.short_leave_end_time if isinstance(payload, ShortLeave) else None,
        total_days=total_days,
        balance_year=today.year,
        reason=payload.reason,
        status=ApplicationStatus.PENDING.value,
    )
    session.add(application)
    await session.commit()
    await session.refresh(application)

    logger.info(
        "Employee %s submitted %s leave %s for %s day(s)",
        employee_id,
        category.value,
        application.id,
        total_days,
    )
    return _build_application_response(application)


async def decide(
    session: AsyncSession,
    caller: CallerIdentity,
    application_id: uuid.UUID,
    decision: Decision,
    reason: str | None = None,
) -> ApplicationResponse:
    """Approve or reject a pending application.

    Access is checked before anything else. Only PENDING applications can be
    decided; APPROVED and REJECTED are terminal.
    """
    application = await _load_application(session, caller, application_id)
    await ensure_can_decide(caller, application)
    _ensure_pending(application)

    if decision == Decision.APPROVE:
        return await _approve(session, caller, application)

    if reason is None or not reason.strip():
        raise ValidationError("A rejection reason is required")
    return await _reject(session, caller, application, reason.strip())


async def _approve(
    session: AsyncSession,
    caller: CallerIdentity,
    application: LeaveApplication,
) -> ApplicationResponse:
    """Claim the application and debit the ledger in one transaction.

    1. Make sure the balance record exists (may commit its creation).
    2. Conditionally flip PENDING -> APPROVED.
    3. Debit the ledger; on failure roll back so the application stays PENDING.
    4. Commit.
    """
    # Plain values: the lazy balance initializer may roll back and expire the instance.
    application_id = application.id
    employee_id, leave_type_id = application.employee_id, application.leave_type_id
    total_days, balance_year = application.total_days, application.balance_year
    await ledger.get_balance(session, employee_id, leave_type_id, balance_year)

    claimed = await _claim_pending(
        session,
        application_id,
        status=ApplicationStatus.APPROVED.value,
        approver_id=caller.user_id,
        approved_at=now_utc(),
    )
    if not claimed:
        await session.rollback()
        raise InvalidStateTransition("Application was already decided by another request")

    try:
        await ledger.debit(session, employee_id, leave_type_id, total_days, balance_year)
    except AppError:
        await session.rollback()
        raise

    await session.commit()
    await session.refresh(application)
    logger.info("Application %s approved by %s", application_id, caller.user_id)
    return _build_application_response(application)


async def _reject(
    session: AsyncSession,
    caller: CallerIdentity,
    application: LeaveApplication,
    reason: str,
) -> ApplicationResponse:
    """Flip PENDING -> REJECTED. A pending application was never debited."""
    claimed = await _claim_pending(
        session,
        application.id,
        status=ApplicationStatus.REJECTED.value,
        approver_id=caller.user_id,
        approved_at=now_utc(),
        rejection_reason=reason,
    )
    if not claimed:
        await session.rollback()
        raise InvalidStateTransition("Application was already decided by another request")

    await session.commit()
    await session.refresh(application)
    logger.info("Application %s rejected by %s", application.id, caller.user_id)
    return _build_application_response(application)


async def get_application(
    session: AsyncSession,
    caller: CallerIdentity,
    application_id: uuid.UUID,
) -> ApplicationResponse:
    """Get a single application the caller may see."""
    application = await _load_application(session, caller, application_id)
    await ensure_can_view_application(caller, application)
    return _build_application_response(application)


async def list_visible_applications(
    session: AsyncSession,
    caller: CallerIdentity,
    scope_filter: ScopeFilter,
) -> ApplicationListResponse:
    """List applications inside the caller's scope, newest first."""
    visible = await resolve_visible_employees(caller, scope_filter.scope)

    filters = []
    if visible is not None:
        filters.append(col(LeaveApplication.employee_id).in_(list(visible)))
    if scope_filter.employee_id is not None:
        if visible is not None and scope_filter.employee_id not in visible:
            raise AccessDenied()
        filters.append(col(LeaveApplication.employee_id) == scope_filter.employee_id)
    if scope_filter.status is not None:
        filters.append(col(LeaveApplication.status) == scope_filter.status.value)

    count_result = await session.execute(select(func.count()).select_from(LeaveApplication).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveApplication)
        .where(*filters)
        .order_by(col(LeaveApplication.created_at).desc())
        .offset(scope_filter.offset)
        .limit(scope_filter.limit)
        .execution_options(populate_existing=True)
    )
    applications = list(result.scalars().all())

    return ApplicationListResponse(
        items=[_build_application_response(a) for a in applications],
        total=total,
    )
