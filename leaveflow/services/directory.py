# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from leaveflow.exceptions import NotFound, ValidationError
from leaveflow.models.enums import Role


class EmployeeInfo(BaseModel):
    """Directory entry for a person who can file or decide leave."""

    id: uuid.UUID
    full_name: str
    email: str
    role: Role = Role.EMPLOYEE
    manager_id: uuid.UUID | None = None


@runtime_checkable
class EmployeeDirectory(Protocol):
    """Interface for the user directory."""

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch a directory entry. Returns None if not found."""
        ...

    async def list_employees(self) -> list[EmployeeInfo]:
        """List every directory entry."""
        ...

    async def employee_exists(self, employee_id: uuid.UUID) -> bool:
        """Return True if the employee is known to the directory."""
        ...

    async def manager_of(self, employee_id: uuid.UUID) -> uuid.UUID | None:
        """Return the employee's direct manager, if any."""
        ...

    async def direct_reports(self, manager_id: uuid.UUID) -> list[uuid.UUID]:
        """Return the ids of employees whose manager is ``manager_id``."""
        ...


class InMemoryEmployeeDirectory:
    """In-memory stub implementation for development."""

    def __init__(self) -> None:
        self._employees: dict[uuid.UUID, EmployeeInfo] = {}

    def seed(self, employee: EmployeeInfo) -> None:
        """Seed or replace an employee."""
        self._employees[employee.id] = employee

    async def get_employee(self, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch a directory entry. Returns None if not found."""
        return self._employees.get(employee_id)

    async def list_employees(self) -> list[EmployeeInfo]:
        """List every directory entry, HR first."""
        return sorted(self._employees.values(), key=lambda e: (e.role, e.full_name))

    async def employee_exists(self, employee_id: uuid.UUID) -> bool:
        """Return True if the employee is known to the directory."""
        return employee_id in self._employees

    async def manager_of(self, employee_id: uuid.UUID) -> uuid.UUID | None:
        """Return the employee's direct manager, if any."""
        employee = self._employees.get(employee_id)
        return employee.manager_id if employee else None

    async def direct_reports(self, manager_id: uuid.UUID) -> list[uuid.UUID]:
        """Return the ids of employees whose manager is ``manager_id``."""
        return [e.id for e in self._employees.values() if e.manager_id == manager_id]


_employee_directory: EmployeeDirectory = InMemoryEmployeeDirectory()


def get_employee_directory() -> EmployeeDirectory:
    """FastAPI dependency for the employee directory."""
    return _employee_directory


def set_employee_directory(directory: EmployeeDirectory) -> None:
    """Override the directory (for testing or production wiring)."""
    global _employee_directory
    _employee_directory = directory


async def validate_manager(
    directory: EmployeeDirectory,
    employee_id: uuid.UUID,
    manager_id: uuid.UUID | None,
) -> None:
    """Check that ``manager_id`` can manage ``employee_id``.

    The manager must exist, must not be the employee, and must not report
    (directly or transitively) to the employee.
    """
    if manager_id is None:
        return
    if manager_id == employee_id:
        raise ValidationError("An employee cannot manage themselves")
    manager = await directory.get_employee(manager_id)
    if manager is None:
        raise NotFound("Manager not found")
    if manager.role == Role.EMPLOYEE:
        raise ValidationError("Manager must have the MANAGER or HR role")

    seen: set[uuid.UUID] = set()
    current: uuid.UUID | None = manager_id
    while current is not None and current not in seen:
        if current == employee_id:
            raise ValidationError("Manager assignment would create a reporting cycle")
        seen.add(current)
        current = await directory.manager_of(current)
