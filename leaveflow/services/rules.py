"""Leave policy rules.

Everything here is pure: callers gather the facts (existing short leaves in
the month, available balance) and the functions only decide. Rules run in a
fixed order and the first failure wins.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from leaveflow.exceptions import CrossMonthNotAllowed, InsufficientBalance, ShortLeaveLimitExceeded, ValidationError
from leaveflow.models.enums import LeaveCategory

HALF_DAY_DAYS = Decimal("0.5")
SHORT_LEAVE_DAYS = Decimal("0.25")
DEFAULT_SHORT_LEAVE_CAP = 2


@dataclass(frozen=True)
class RuleContext:
    """Facts about the employee that the rules need, read before validation."""

    short_leaves_in_month: int
    available_days: Decimal
    short_leave_cap: int = DEFAULT_SHORT_LEAVE_CAP


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last calendar day of ``day``'s month."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def calculate_total_days(category: LeaveCategory, start_date: date, end_date: date | None = None) -> Decimal:
    """Number of days a request charges against the balance.

    Full-day leave counts both endpoints, so a single day is 1.
    """
    if category == LeaveCategory.FULL_DAY:
        if end_date is None:
            raise ValidationError("end_date is required for full-day leave")
        if end_date < start_date:
            raise ValidationError("end_date must not be before start_date")
        return Decimal((end_date - start_date).days + 1)
    if category == LeaveCategory.HALF_DAY:
        return HALF_DAY_DAYS
    if category == LeaveCategory.SHORT_LEAVE:
        return SHORT_LEAVE_DAYS
    raise ValidationError(f"Unknown leave category: {category}")


def check_cross_month(category: LeaveCategory, start_date: date, end_date: date | None) -> None:
    """Full-day leave must start and end in the same calendar month."""
    if category != LeaveCategory.FULL_DAY or end_date is None:
        return
    if (start_date.year, start_date.month) != (end_date.year, end_date.month):
        raise CrossMonthNotAllowed(
            f"Full-day leave from {start_date.isoformat()} to {end_date.isoformat()} spans two months; "
            "submit one request per month"
        )


def check_short_leave_cap(category: LeaveCategory, short_leaves_in_month: int, cap: int) -> None:
    """Pending and approved short leaves in the month count toward the cap."""
    if category != LeaveCategory.SHORT_LEAVE:
        return
    if short_leaves_in_month >= cap:
        raise ShortLeaveLimitExceeded(
            f"Short leave limit reached: {short_leaves_in_month} of {cap} already booked this month"
        )


def check_sufficiency(available_days: Decimal, total_days: Decimal) -> None:
    if available_days < total_days:
        raise InsufficientBalance(f"Insufficient balance: {available_days} day(s) available, {total_days} requested")


def validate_leave_request(
    category: LeaveCategory,
    start_date: date,
    end_date: date | None,
    context: RuleContext,
) -> Decimal:
    """Run every rule in order and return the day count to charge."""
    total_days = calculate_total_days(category, start_date, end_date)
    check_cross_month(category, start_date, end_date)
    check_short_leave_cap(category, context.short_leaves_in_month, context.short_leave_cap)
    check_sufficiency(context.available_days, total_days)
    return total_days
