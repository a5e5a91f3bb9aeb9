"""Tests for who may see and decide whose leave."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest

from leaveflow.exceptions import AccessDenied
from leaveflow.models.enums import ApplicationScope
from leaveflow.services.access import (
    can_decide_for,
    can_view_employee,
    ensure_can_view_employee,
    resolve_visible_employees,
)
from tests.factories import (
    EMPLOYEE_A,
    EMPLOYEE_A_ID,
    EMPLOYEE_B,
    EMPLOYEE_B_ID,
    HR,
    MANAGER_A,
    MANAGER_A_ID,
    MANAGER_B,
)

if TYPE_CHECKING:
    from leaveflow.schemas.auth import CallerIdentity


@pytest.mark.parametrize(
    ("caller", "expected"),
    [(HR, True), (MANAGER_A, True), (EMPLOYEE_A, True), (MANAGER_B, False), (EMPLOYEE_B, False)],
)
async def test_can_view_employee_a(caller: CallerIdentity, expected: bool) -> None:
    assert await can_view_employee(caller, EMPLOYEE_A_ID) is expected


@pytest.mark.parametrize(
    ("caller", "expected"),
    [(HR, True), (MANAGER_A, True), (EMPLOYEE_A, False), (MANAGER_B, False), (EMPLOYEE_B, False)],
)
async def test_can_decide_for_employee_a(caller: CallerIdentity, expected: bool) -> None:
    assert await can_decide_for(caller, EMPLOYEE_A_ID) is expected


async def test_manager_cannot_decide_own_application() -> None:
    assert await can_decide_for(MANAGER_A, MANAGER_A_ID) is False


async def test_hr_can_decide_own_application() -> None:
    assert await can_decide_for(HR, HR.user_id) is True


async def test_ensure_can_view_raises() -> None:
    with pytest.raises(AccessDenied):
        await ensure_can_view_employee(EMPLOYEE_B, EMPLOYEE_A_ID)


async def test_unknown_employee_visible_only_to_hr() -> None:
    stranger = uuid.uuid4()
    assert await can_view_employee(HR, stranger)
    assert not await can_view_employee(MANAGER_A, stranger)


# ---------------------------------------------------------------------------
# Listing scope
# ---------------------------------------------------------------------------


async def test_hr_all_scope_is_unrestricted() -> None:
    assert await resolve_visible_employees(HR, ApplicationScope.ALL) is None


async def test_manager_all_scope_is_self_and_reports() -> None:
    assert await resolve_visible_employees(MANAGER_A, ApplicationScope.ALL) == {MANAGER_A_ID, EMPLOYEE_A_ID}


async def test_employee_all_scope_is_self() -> None:
    assert await resolve_visible_employees(EMPLOYEE_B, ApplicationScope.ALL) == {EMPLOYEE_B_ID}


async def test_mine_scope() -> None:
    assert await resolve_visible_employees(HR, ApplicationScope.MINE) == {HR.user_id}


async def test_team_scope_is_direct_reports_only() -> None:
    assert await resolve_visible_employees(MANAGER_A, ApplicationScope.TEAM) == {EMPLOYEE_A_ID}


async def test_hr_team_scope_is_managers() -> None:
    assert await resolve_visible_employees(HR, ApplicationScope.TEAM) == {MANAGER_A_ID, MANAGER_B.user_id}


async def test_employee_team_scope_denied() -> None:
    with pytest.raises(AccessDenied):
        await resolve_visible_employees(EMPLOYEE_A, ApplicationScope.TEAM)
