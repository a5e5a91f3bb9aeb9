from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from leaveflow.exceptions import AppError, NotFound
from leaveflow.models.leave_type import LeaveType
from leaveflow.schemas.leave_type import LeaveTypeListResponse, LeaveTypeResponse

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from leaveflow.schemas.leave_type import CreateLeaveTypeRequest

logger = logging.getLogger(__name__)


def _build_leave_type_response(leave_type: LeaveType) -> LeaveTypeResponse:
    return LeaveTypeResponse(
        id=leave_type.id,
        name=leave_type.name,
        description=leave_type.description,
        created_at=leave_type.created_at,
    )


async def get_leave_type_or_404(session: AsyncSession, leave_type_id: uuid.UUID) -> LeaveType:
    """Fetch a leave type by ID. Raises NotFound if missing."""
    leave_type = await session.get(LeaveType, leave_type_id)
    if leave_type is None:
        raise NotFound("Leave type not found")
    return leave_type


async def list_leave_types(session: AsyncSession) -> LeaveTypeListResponse:
    """List the whole catalog ordered by name."""
    result = await session.execute(select(LeaveType).order_by(col(LeaveType.name)))
    items = [_build_leave_type_response(lt) for lt in result.scalars().all()]
    return LeaveTypeListResponse(items=items, total=len(items))


async def create_leave_type(session: AsyncSession, payload: CreateLeaveTypeRequest) -> LeaveTypeResponse:
    """Add a leave type. Existing employees receive a balance on their next access."""
    leave_type = LeaveType(name=payload.name, description=payload.description)
    session.add(leave_type)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise AppError(f"Leave type '{payload.name}' already exists", status_code=409) from None

    await session.refresh(leave_type)
    logger.info("Added leave type %s", leave_type.name)
    return _build_leave_type_response(leave_type)
