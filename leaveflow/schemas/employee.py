# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from leaveflow.models.enums import Role


class UpsertEmployeeRequest(BaseModel):
    """Request body for upserting an employee in the directory stub."""

    full_name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=1, max_length=255)
    role: Role = Role.EMPLOYEE
    manager_id: uuid.UUID | None = None


class EmployeeResponse(BaseModel):
    """Response schema for a directory entry."""

    id: uuid.UUID
    full_name: str
    email: str
    role: Role
    manager_id: uuid.UUID | None


class EmployeeListResponse(BaseModel):
    """List of directory entries."""

    items: list[EmployeeResponse]
    total: int
