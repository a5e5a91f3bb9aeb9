"""Who may see or act on whose leave.

HR is unrestricted. A manager reaches the applications and balances of their
direct reports. Everyone can read their own. Only HR and the applicant's
direct manager can decide an application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from leaveflow.exceptions import AccessDenied
from leaveflow.models.enums import ApplicationScope, Role
from leaveflow.services.directory import get_employee_directory

if TYPE_CHECKING:
    import uuid

    from leaveflow.models.application import LeaveApplication
    from leaveflow.schemas.auth import CallerIdentity


async def _manages(caller: CallerIdentity, employee_id: uuid.UUID) -> bool:
    if caller.role != Role.MANAGER:
        return False
    return await get_employee_directory().manager_of(employee_id) == caller.user_id


async def can_view_employee(caller: CallerIdentity, employee_id: uuid.UUID) -> bool:
    if caller.role == Role.HR or caller.user_id == employee_id:
        return True
    return await _manages(caller, employee_id)


async def can_decide_for(caller: CallerIdentity, employee_id: uuid.UUID) -> bool:
    if caller.role == Role.HR:
        return True
    return await _manages(caller, employee_id)


async def ensure_can_view_employee(caller: CallerIdentity, employee_id: uuid.UUID) -> None:
    if not await can_view_employee(caller, employee_id):
        raise AccessDenied()


async def ensure_can_view_application(caller: CallerIdentity, application: LeaveApplication) -> None:
    await ensure_can_view_employee(caller, application.employee_id)


async def ensure_can_decide(caller: CallerIdentity, application: LeaveApplication) -> None:
    if not await can_decide_for(caller, application.employee_id):
        raise AccessDenied()


async def resolve_visible_employees(
    caller: CallerIdentity,
    scope: ApplicationScope = ApplicationScope.ALL,
) -> set[uuid.UUID] | None:
    """Employee ids whose applications the caller may list.

    ``None`` means unrestricted. ``TEAM`` is the caller's direct reports and
    is refused to plain employees.
    """
    if scope == ApplicationScope.MINE:
        return {caller.user_id}

    if scope == ApplicationScope.TEAM:
        if caller.role == Role.EMPLOYEE:
            raise AccessDenied("Only managers and HR have a team view")
        return set(await get_employee_directory().direct_reports(caller.user_id))

    if caller.role == Role.HR:
        return None
    if caller.role == Role.MANAGER:
        reports = await get_employee_directory().direct_reports(caller.user_id)
        return {caller.user_id, *reports}
    return {caller.user_id}
