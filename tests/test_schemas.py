"""Unit tests for the leave submission union and the other API schemas."""

from __future__ import annotations

import uuid
from datetime import time
from decimal import Decimal

import pytest
from pydantic import TypeAdapter, ValidationError

from leaveflow.models.enums import ApplicationScope, HalfDayPeriod
from leaveflow.schemas.application import (
    FullDayLeave,
    HalfDayLeave,
    RejectPayload,
    ScopeFilter,
    ShortLeave,
    SubmitLeavePayload,
)
from leaveflow.schemas.balance import ManualBalanceUpdate

_adapter: TypeAdapter[SubmitLeavePayload] = TypeAdapter(SubmitLeavePayload)

LEAVE_TYPE_ID = str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Discriminated submission payload
# ---------------------------------------------------------------------------


def test_full_day_payload() -> None:
    payload = _adapter.validate_python(
        {
            "category": "FULL_DAY",
            "leave_type_id": LEAVE_TYPE_ID,
            "start_date": "2024-03-04",
            "end_date": "2024-03-06",
        }
    )
    assert isinstance(payload, FullDayLeave)
    assert payload.end_date.day == 6


def test_full_day_requires_end_date() -> None:
    with pytest.raises(ValidationError, match="end_date"):
        _adapter.validate_python({"category": "FULL_DAY", "leave_type_id": LEAVE_TYPE_ID, "start_date": "2024-03-04"})


def test_half_day_payload() -> None:
    payload = _adapter.validate_python(
        {
            "category": "HALF_DAY",
            "leave_type_id": LEAVE_TYPE_ID,
            "start_date": "2024-03-04",
            "half_day_period": "AFTERNOON",
        }
    )
    assert isinstance(payload, HalfDayLeave)
    assert payload.half_day_period == HalfDayPeriod.AFTERNOON


def test_half_day_requires_period() -> None:
    with pytest.raises(ValidationError, match="half_day_period"):
        _adapter.validate_python({"category": "HALF_DAY", "leave_type_id": LEAVE_TYPE_ID, "start_date": "2024-03-04"})


def test_half_day_rejects_end_date() -> None:
    with pytest.raises(ValidationError):
        _adapter.validate_python(
            {
                "category": "HALF_DAY",
                "leave_type_id": LEAVE_TYPE_ID,
                "start_date": "2024-03-04",
                "end_date": "2024-03-05",
                "half_day_period": "MORNING",
            }
        )


def test_short_leave_times_optional() -> None:
    payload = _adapter.validate_python(
        {"category": "SHORT_LEAVE", "leave_type_id": LEAVE_TYPE_ID, "start_date": "2024-03-04"}
    )
    assert isinstance(payload, ShortLeave)
    assert payload.short_leave_start_time is None


def test_short_leave_window() -> None:
    payload = _adapter.validate_python(
        {
            "category": "SHORT_LEAVE",
            "leave_type_id": LEAVE_TYPE_ID,
            "start_date": "2024-03-04",
            "short_leave_start_time": "09:00",
            "short_leave_end_time": "11:00",
        }
    )
    assert isinstance(payload, ShortLeave)
    assert payload.short_leave_end_time == time(11, 0)


def test_short_leave_window_must_be_ordered() -> None:
    with pytest.raises(ValidationError, match="must be after"):
        _adapter.validate_python(
            {
                "category": "SHORT_LEAVE",
                "leave_type_id": LEAVE_TYPE_ID,
                "start_date": "2024-03-04",
                "short_leave_start_time": "11:00",
                "short_leave_end_time": "09:00",
            }
        )


def test_unknown_category_rejected() -> None:
    with pytest.raises(ValidationError):
        _adapter.validate_python({"category": "SABBATICAL", "leave_type_id": LEAVE_TYPE_ID, "start_date": "2024-03-04"})


def test_extra_fields_rejected() -> None:
    with pytest.raises(ValidationError):
        _adapter.validate_python(
            {
                "category": "FULL_DAY",
                "leave_type_id": LEAVE_TYPE_ID,
                "start_date": "2024-03-04",
                "end_date": "2024-03-04",
                "employee_id": str(uuid.uuid4()),
            }
        )


# ---------------------------------------------------------------------------
# Other request schemas
# ---------------------------------------------------------------------------


def test_reject_payload_requires_reason() -> None:
    with pytest.raises(ValidationError):
        RejectPayload.model_validate({})


def test_scope_filter_defaults() -> None:
    f = ScopeFilter()
    assert f.scope == ApplicationScope.ALL
    assert f.status is None
    assert f.limit == 50


def test_scope_filter_limit_bounds() -> None:
    with pytest.raises(ValidationError):
        ScopeFilter(limit=0)
    with pytest.raises(ValidationError):
        ScopeFilter(limit=101)


def test_manual_update_rejects_negative() -> None:
    with pytest.raises(ValidationError):
        ManualBalanceUpdate(total_days=Decimal("10"), used_days=Decimal("-1"), available_days=Decimal("11"))


def test_manual_update_allows_inconsistent_triple() -> None:
    update = ManualBalanceUpdate(total_days=Decimal("10"), used_days=Decimal("2"), available_days=Decimal("9.5"))
    assert update.available_days == Decimal("9.5")
