# ruff: noqa: B008
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header, status

from leaveflow.exceptions import AccessDenied, ValidationError
from leaveflow.models.enums import Role
from leaveflow.schemas.auth import CallerIdentity
from leaveflow.services.directory import get_employee_directory


async def get_caller(
    x_user_id: str | None = Header(default=None),
    x_role: str | None = Header(default=None),
) -> CallerIdentity:
    """Build the caller identity from the identity provider's headers.

    Both headers are mandatory; there is no fallback identity.
    """
    if not x_user_id or not x_role:
        raise AccessDenied("Authentication required", status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        user_id = uuid.UUID(x_user_id)
        role = Role(int(x_role))
    except ValueError:
        raise ValidationError("Malformed identity headers") from None

    manager_id = await get_employee_directory().manager_of(user_id)
    return CallerIdentity(user_id=user_id, role=role, manager_id=manager_id)


CallerDep = Annotated[CallerIdentity, Depends(get_caller)]


async def require_hr(caller: CallerDep) -> CallerIdentity:
    """Require the HR role for the request."""
    if caller.role != Role.HR:
        raise AccessDenied("HR access required")
    return caller


HRDep = Annotated[CallerIdentity, Depends(require_hr)]
