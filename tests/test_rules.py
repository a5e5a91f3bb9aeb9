"""Tests for the leave rule validator: day counts, cross-month, short-leave cap, sufficiency."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from leaveflow.exceptions import CrossMonthNotAllowed, InsufficientBalance, ShortLeaveLimitExceeded, ValidationError
from leaveflow.models.enums import LeaveCategory
from leaveflow.services.rules import (
    RuleContext,
    calculate_total_days,
    check_cross_month,
    check_short_leave_cap,
    month_bounds,
    validate_leave_request,
)

PLENTY = RuleContext(short_leaves_in_month=0, available_days=Decimal("20"))


# ---------------------------------------------------------------------------
# Day counts
# ---------------------------------------------------------------------------


def test_full_day_counts_both_endpoints() -> None:
    assert calculate_total_days(LeaveCategory.FULL_DAY, date(2024, 3, 4), date(2024, 3, 6)) == Decimal("3")


def test_full_day_single_day_is_one() -> None:
    assert calculate_total_days(LeaveCategory.FULL_DAY, date(2024, 3, 4), date(2024, 3, 4)) == Decimal("1")


def test_full_day_counts_weekends() -> None:
    # Fri through Mon.
    assert calculate_total_days(LeaveCategory.FULL_DAY, date(2024, 3, 1), date(2024, 3, 4)) == Decimal("4")


def test_full_day_end_before_start_rejected() -> None:
    with pytest.raises(ValidationError):
        calculate_total_days(LeaveCategory.FULL_DAY, date(2024, 3, 6), date(2024, 3, 4))


def test_full_day_requires_end_date() -> None:
    with pytest.raises(ValidationError):
        calculate_total_days(LeaveCategory.FULL_DAY, date(2024, 3, 6))


def test_half_day_is_half() -> None:
    assert calculate_total_days(LeaveCategory.HALF_DAY, date(2024, 3, 4)) == Decimal("0.5")


def test_short_leave_is_quarter() -> None:
    assert calculate_total_days(LeaveCategory.SHORT_LEAVE, date(2024, 3, 4)) == Decimal("0.25")


def test_half_day_ignores_end_date() -> None:
    assert calculate_total_days(LeaveCategory.HALF_DAY, date(2024, 3, 4), date(2024, 4, 9)) == Decimal("0.5")


# ---------------------------------------------------------------------------
# Cross-month
# ---------------------------------------------------------------------------


def test_cross_month_full_day_rejected() -> None:
    with pytest.raises(CrossMonthNotAllowed):
        check_cross_month(LeaveCategory.FULL_DAY, date(2024, 1, 30), date(2024, 2, 2))


def test_cross_year_full_day_rejected() -> None:
    with pytest.raises(CrossMonthNotAllowed):
        check_cross_month(LeaveCategory.FULL_DAY, date(2024, 12, 31), date(2025, 1, 1))


def test_same_month_in_different_years_rejected() -> None:
    with pytest.raises(CrossMonthNotAllowed):
        check_cross_month(LeaveCategory.FULL_DAY, date(2024, 3, 1), date(2025, 3, 1))


def test_whole_month_allowed() -> None:
    check_cross_month(LeaveCategory.FULL_DAY, date(2024, 2, 1), date(2024, 2, 29))


# ---------------------------------------------------------------------------
# Short-leave cap
# ---------------------------------------------------------------------------


def test_short_leave_cap_allows_up_to_cap() -> None:
    check_short_leave_cap(LeaveCategory.SHORT_LEAVE, 1, 2)


def test_short_leave_cap_blocks_at_cap() -> None:
    with pytest.raises(ShortLeaveLimitExceeded):
        check_short_leave_cap(LeaveCategory.SHORT_LEAVE, 2, 2)


def test_short_leave_cap_ignores_other_categories() -> None:
    check_short_leave_cap(LeaveCategory.HALF_DAY, 5, 2)


def test_month_bounds_leap_february() -> None:
    assert month_bounds(date(2024, 2, 15)) == (date(2024, 2, 1), date(2024, 2, 29))


# ---------------------------------------------------------------------------
# Full validator
# ---------------------------------------------------------------------------


def test_validate_returns_total_days() -> None:
    total = validate_leave_request(LeaveCategory.FULL_DAY, date(2024, 3, 4), date(2024, 3, 6), PLENTY)
    assert total == Decimal("3")


def test_validate_insufficient_balance() -> None:
    context = RuleContext(short_leaves_in_month=0, available_days=Decimal("1.0"))
    with pytest.raises(InsufficientBalance):
        validate_leave_request(LeaveCategory.FULL_DAY, date(2024, 3, 4), date(2024, 3, 6), context)


def test_validate_exact_balance_is_enough() -> None:
    context = RuleContext(short_leaves_in_month=0, available_days=Decimal("0.25"))
    total = validate_leave_request(LeaveCategory.SHORT_LEAVE, date(2024, 3, 4), None, context)
    assert total == Decimal("0.25")


def test_validate_third_short_leave_rejected() -> None:
    context = RuleContext(short_leaves_in_month=2, available_days=Decimal("20"))
    with pytest.raises(ShortLeaveLimitExceeded):
        validate_leave_request(LeaveCategory.SHORT_LEAVE, date(2024, 3, 20), None, context)


def test_validate_custom_cap() -> None:
    context = RuleContext(short_leaves_in_month=2, available_days=Decimal("20"), short_leave_cap=3)
    validate_leave_request(LeaveCategory.SHORT_LEAVE, date(2024, 3, 20), None, context)


def test_validate_cross_month_checked_before_balance() -> None:
    empty = RuleContext(short_leaves_in_month=0, available_days=Decimal("0"))
    with pytest.raises(CrossMonthNotAllowed):
        validate_leave_request(LeaveCategory.FULL_DAY, date(2024, 1, 30), date(2024, 2, 2), empty)


def test_validate_cap_checked_before_balance() -> None:
    context = RuleContext(short_leaves_in_month=2, available_days=Decimal("0"))
    with pytest.raises(ShortLeaveLimitExceeded):
        validate_leave_request(LeaveCategory.SHORT_LEAVE, date(2024, 3, 20), None, context)
