# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel

from leaveflow.models.enums import Role


class CallerIdentity(BaseModel):
    """Verified identity of the caller, supplied by the identity provider."""

    user_id: uuid.UUID
    role: Role
    manager_id: uuid.UUID | None = None
