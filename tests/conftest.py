from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from leaveflow.db import engine_options, get_session
from leaveflow.main import app
from leaveflow.models import LeaveType, Role, SQLModel
from leaveflow.services.directory import EmployeeInfo, InMemoryEmployeeDirectory, set_employee_directory
from tests.factories import EMPLOYEE_A_ID, EMPLOYEE_B_ID, HR_ID, MANAGER_A_ID, MANAGER_B_ID

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """A fresh file-backed SQLite database per test.

    Every session gets its own connection, so concurrent sessions contend
    for the database lock the way separate API requests would.
    """
    url = f"sqlite+aiosqlite:///{tmp_path / 'leaveflow.db'}"
    _engine = create_async_engine(url, poolclass=NullPool, **engine_options(url))
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await _engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def directory() -> Iterator[InMemoryEmployeeDirectory]:
    """Seed the in-memory directory: HR, two managers, one report each."""
    svc = InMemoryEmployeeDirectory()
    svc.seed(EmployeeInfo(id=HR_ID, full_name="Helen Hart", email="hr@example.com", role=Role.HR))
    for manager_id, name in ((MANAGER_A_ID, "Mark Lane"), (MANAGER_B_ID, "Maria Ortiz")):
        svc.seed(
            EmployeeInfo(
                id=manager_id,
                full_name=name,
                email=f"{name.split()[0].lower()}@example.com",
                role=Role.MANAGER,
                manager_id=HR_ID,
            )
        )
    svc.seed(
        EmployeeInfo(
            id=EMPLOYEE_A_ID,
            full_name="Alice Johnson",
            email="alice@example.com",
            manager_id=MANAGER_A_ID,
        )
    )
    svc.seed(
        EmployeeInfo(
            id=EMPLOYEE_B_ID,
            full_name="Bob Smith",
            email="bob@example.com",
            manager_id=MANAGER_B_ID,
        )
    )
    set_employee_directory(svc)
    yield svc
    set_employee_directory(InMemoryEmployeeDirectory())


@pytest.fixture
async def leave_types(db_session: AsyncSession) -> dict[str, uuid.UUID]:
    """Seed the catalog with Annual and Sick leave and return name -> id."""
    annual = LeaveType(name="Annual", description="Paid vacation")
    sick = LeaveType(name="Sick")
    db_session.add_all([annual, sick])
    await db_session.commit()
    return {"Annual": annual.id, "Sick": sick.id}


@pytest.fixture
def annual_id(leave_types: dict[str, uuid.UUID]) -> uuid.UUID:
    return leave_types["Annual"]


@pytest.fixture
async def async_client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    """Async HTTP client whose requests each open their own session."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
