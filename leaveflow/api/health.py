import logging
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import func, select

from leaveflow.config import get_settings
from leaveflow.db import SessionDep
from leaveflow.models.leave_type import LeaveType
from leaveflow.services.directory import get_employee_directory

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness, a database probe and what the service can currently act on."""

    status: Literal["ok", "degraded"]
    database: Literal["ok", "unreachable"]
    leave_types: int | None
    employees: int
    version: str
    environment: str


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    """Report service health. No identity headers are required.

    ``leave_types`` is null when the database cannot be reached. ``employees``
    counts the directory, which lives in process memory.
    """
    settings = get_settings()
    leave_types: int | None = None

    try:
        leave_types = (await session.execute(select(func.count()).select_from(LeaveType))).scalar_one()
    except Exception:
        logger.exception("Health check: database connectivity failed")

    employees = len(await get_employee_directory().list_employees())
    database: Literal["ok", "unreachable"] = "ok" if leave_types is not None else "unreachable"
    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        database=database,
        leave_types=leave_types,
        employees=employees,
        version=settings.app_version,
        environment=settings.environment,
    )
