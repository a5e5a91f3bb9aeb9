"""Seed script for development data.

Run with:  python -m leaveflow.seed
The API must already be running at BASE_URL. The directory is in memory, so
re-run the script after every API restart.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date, timedelta

import httpx

BASE_URL = "http://localhost:8000"

# Well-known directory UUIDs
HR_ID = "00000000-0000-0000-0000-000000000001"
MARK_ID = "00000000-0000-0000-0000-000000000002"
MARIA_ID = "00000000-0000-0000-0000-000000000003"
ALICE_ID = "00000000-0000-0000-0000-000000000004"
BOB_ID = "00000000-0000-0000-0000-000000000005"
CAROL_ID = "00000000-0000-0000-0000-000000000006"

# Role codes: 1 HR, 2 manager, 3 employee
EMPLOYEES = [
    {"id": HR_ID, "full_name": "Helen Hart", "email": "helen.hart@example.com", "role": 1},
    {"id": MARK_ID, "full_name": "Mark Lane", "email": "mark.lane@example.com", "role": 2, "manager_id": HR_ID},
    {"id": MARIA_ID, "full_name": "Maria Ortiz", "email": "maria.ortiz@example.com", "role": 2, "manager_id": HR_ID},
    {"id": ALICE_ID, "full_name": "Alice Johnson", "email": "alice.johnson@example.com", "manager_id": MARK_ID},
    {"id": BOB_ID, "full_name": "Bob Smith", "email": "bob.smith@example.com", "manager_id": MARK_ID},
    {"id": CAROL_ID, "full_name": "Carol Williams", "email": "carol.williams@example.com", "manager_id": MARIA_ID},
]

LEAVE_TYPES = [
    {"name": "Annual Leave", "description": "Paid vacation"},
    {"name": "Casual Leave", "description": "Short personal errands"},
    {"name": "Sick Leave", "description": "Illness or medical appointments"},
]


def _headers(user_id: str, role: int) -> dict[str, str]:
    return {"Content-Type": "application/json", "X-User-Id": user_id, "X-Role": str(role)}


HR_HEADERS = _headers(HR_ID, 1)


def _report(resp: httpx.Response, label: str) -> dict | None:
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    if resp.status_code == 409:
        print(f"  [SKIP] {label} (already exists)")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_leave_types(client: httpx.AsyncClient) -> dict[str, str]:
    """Seed the leave type catalog and return a name->id mapping."""
    print("\n--- Seeding leave types ---")
    for leave_type in LEAVE_TYPES:
        resp = await client.post(f"{BASE_URL}/leave-types", json=leave_type, headers=HR_HEADERS)
        _report(resp, f"Leave type: {leave_type['name']}")

    resp = await client.get(f"{BASE_URL}/leave-types", headers=HR_HEADERS)
    resp.raise_for_status()
    return {item["name"]: item["id"] for item in resp.json()["items"]}


async def seed_employees(client: httpx.AsyncClient) -> None:
    """Seed the directory via PUT (upsert). Managers go in before their reports."""
    print("\n--- Seeding employees ---")
    for emp in EMPLOYEES:
        body = {k: v for k, v in emp.items() if k != "id"}
        resp = await client.put(f"{BASE_URL}/employees/{emp['id']}", json=body, headers=HR_HEADERS)
        _report(resp, str(emp["full_name"]))


def _next_weekday(start: date, days_ahead: int) -> date:
    candidate = start + timedelta(days=days_ahead)
    while candidate.weekday() >= 5:
        candidate += timedelta(days=1)
    return candidate


async def seed_applications(client: httpx.AsyncClient, leave_type_ids: dict[str, str]) -> None:
    """File a few applications and decide one of them."""
    print("\n--- Seeding applications ---")
    today = date.today()
    annual_id = leave_type_ids.get("Annual Leave")
    casual_id = leave_type_ids.get("Casual Leave")
    sick_id = leave_type_ids.get("Sick Leave")

    if annual_id:
        # Keep the range inside one month.
        start = _next_weekday(today, 7)
        end = min(start + timedelta(days=2), start.replace(day=28))
        resp = await client.post(
            f"{BASE_URL}/applications",
            json={
                "category": "FULL_DAY",
                "leave_type_id": annual_id,
                "start_date": start.isoformat(),
                "end_date": max(start, end).isoformat(),
                "reason": "Family vacation",
            },
            headers=_headers(ALICE_ID, 3),
        )
        _report(resp, "Application: Alice annual leave (PENDING)")

    if casual_id:
        resp = await client.post(
            f"{BASE_URL}/applications",
            json={
                "category": "SHORT_LEAVE",
                "leave_type_id": casual_id,
                "start_date": _next_weekday(today, 3).isoformat(),
                "short_leave_start_time": "15:00:00",
                "short_leave_end_time": "17:00:00",
                "reason": "Bank appointment",
            },
            headers=_headers(BOB_ID, 3),
        )
        result = _report(resp, "Application: Bob short leave")
        if result:
            resp = await client.post(
                f"{BASE_URL}/applications/{result['id']}/approve",
                headers=_headers(MARK_ID, 2),
            )
            _report(resp, "Mark approved Bob's short leave")

    if sick_id:
        resp = await client.post(
            f"{BASE_URL}/applications",
            json={
                "category": "HALF_DAY",
                "leave_type_id": sick_id,
                "start_date": _next_weekday(today, 1).isoformat(),
                "half_day_period": "MORNING",
                "reason": "Doctor appointment",
            },
            headers=_headers(CAROL_ID, 3),
        )
        _report(resp, "Application: Carol half day (PENDING)")


async def main() -> None:
    print("=" * 60)
    print("  Leaveflow - Development Seed Script")
    print("=" * 60)

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            resp = await client.get(f"{BASE_URL}/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", BASE_URL)
            sys.exit(1)

        leave_type_ids = await seed_leave_types(client)
        await seed_employees(client)
        await seed_applications(client, leave_type_ids)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
