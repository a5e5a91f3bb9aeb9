# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Body, Query, status

from leaveflow.api.deps import CallerDep
from leaveflow.db import SessionDep
from leaveflow.models.enums import ApplicationScope, ApplicationStatus, Decision
from leaveflow.schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    LeaveRequestVariant,
    RejectPayload,
    ScopeFilter,
)
from leaveflow.services import application as application_service

applications_router = APIRouter(
    prefix="/applications",
    tags=["applications"],
)


@applications_router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def submit_leave(
    payload: Annotated[LeaveRequestVariant, Body(discriminator="category")],
    session: SessionDep,
    caller: CallerDep,
) -> ApplicationResponse:
    """Submit a leave application for the caller."""
    return await application_service.submit_leave(session, caller, payload)


@applications_router.get("", response_model=ApplicationListResponse)
async def list_applications(
    session: SessionDep,
    caller: CallerDep,
    scope: ApplicationScope = Query(default=ApplicationScope.ALL),
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    employee_id: uuid.UUID | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> ApplicationListResponse:
    """List the applications visible to the caller."""
    scope_filter = ScopeFilter(
        scope=scope,
        status=status_filter,
        employee_id=employee_id,
        offset=offset,
        limit=limit,
    )
    return await application_service.list_visible_applications(session, caller, scope_filter)


@applications_router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: uuid.UUID,
    session: SessionDep,
    caller: CallerDep,
) -> ApplicationResponse:
    """Get a single leave application."""
    return await application_service.get_application(session, caller, application_id)


@applications_router.post("/{application_id}/approve", response_model=ApplicationResponse)
async def approve_application(
    application_id: uuid.UUID,
    session: SessionDep,
    caller: CallerDep,
) -> ApplicationResponse:
    """Approve a pending application (HR or the applicant's manager)."""
    return await application_service.decide(session, caller, application_id, Decision.APPROVE)


@applications_router.post("/{application_id}/reject", response_model=ApplicationResponse)
async def reject_application(
    application_id: uuid.UUID,
    payload: RejectPayload,
    session: SessionDep,
    caller: CallerDep,
) -> ApplicationResponse:
    """Reject a pending application with a reason (HR or the applicant's manager)."""
    return await application_service.decide(session, caller, application_id, Decision.REJECT, payload.reason)
