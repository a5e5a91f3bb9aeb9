from __future__ import annotations

from fastapi import APIRouter, status

from leaveflow.api.deps import CallerDep, HRDep
from leaveflow.db import SessionDep
from leaveflow.schemas.leave_type import CreateLeaveTypeRequest, LeaveTypeListResponse, LeaveTypeResponse
from leaveflow.services import leave_type as leave_type_service

leave_types_router = APIRouter(
    prefix="/leave-types",
    tags=["leave-types"],
)


@leave_types_router.get("", response_model=LeaveTypeListResponse)
async def list_leave_types(session: SessionDep, caller: CallerDep) -> LeaveTypeListResponse:
    """List the leave type catalog."""
    return await leave_type_service.list_leave_types(session)


@leave_types_router.post("", response_model=LeaveTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_leave_type(
    payload: CreateLeaveTypeRequest,
    session: SessionDep,
    caller: HRDep,
) -> LeaveTypeResponse:
    """Add a leave type to the catalog (HR only)."""
    return await leave_type_service.create_leave_type(session, payload)
