# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import date

from fastapi import APIRouter

from leaveflow.api.deps import CallerDep, HRDep
from leaveflow.db import SessionDep
from leaveflow.exceptions import NotFound
from leaveflow.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from leaveflow.services import ledger
from leaveflow.services.directory import EmployeeInfo, get_employee_directory, validate_manager

logger = logging.getLogger(__name__)

employees_router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)


def _build_employee_response(employee: EmployeeInfo) -> EmployeeResponse:
    return EmployeeResponse(
        id=employee.id,
        full_name=employee.full_name,
        email=employee.email,
        role=employee.role,
        manager_id=employee.manager_id,
    )


@employees_router.put("/{employee_id}", response_model=EmployeeResponse)
async def upsert_employee(
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
    session: SessionDep,
    caller: HRDep,
) -> EmployeeResponse:
    """Create or update a directory entry and initialize this year's balances (HR only)."""
    directory = get_employee_directory()
    await validate_manager(directory, employee_id, payload.manager_id)

    employee = EmployeeInfo(
        id=employee_id,
        full_name=payload.full_name,
        email=payload.email,
        role=payload.role,
        manager_id=payload.manager_id,
    )
    directory.seed(employee)  # ty: ignore[unresolved-attribute]
    logger.info("Directory entry %s upserted by %s", employee_id, caller.user_id)

    await ledger.ensure_year_balances(session, employee_id, date.today().year)
    return _build_employee_response(employee)


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(caller: CallerDep) -> EmployeeListResponse:
    """List every directory entry."""
    employees = await get_employee_directory().list_employees()
    return EmployeeListResponse(
        items=[_build_employee_response(e) for e in employees],
        total=len(employees),
    )


@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(employee_id: uuid.UUID, caller: CallerDep) -> EmployeeResponse:
    """Get one directory entry."""
    employee = await get_employee_directory().get_employee(employee_id)
    if employee is None:
        raise NotFound("Employee not found")
    return _build_employee_response(employee)
