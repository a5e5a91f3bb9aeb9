from __future__ import annotations

import enum


class Role(enum.IntEnum):
    """Organizational role of a caller. Lower numbers carry more authority."""

    HR = 1
    MANAGER = 2
    EMPLOYEE = 3


class LeaveCategory(enum.StrEnum):
    """Granularity of a leave request."""

    FULL_DAY = "FULL_DAY"
    HALF_DAY = "HALF_DAY"
    SHORT_LEAVE = "SHORT_LEAVE"


class HalfDayPeriod(enum.StrEnum):
    """Which half of the day a half-day leave covers."""

    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"


class ApplicationStatus(enum.StrEnum):
    """State machine for leave applications. APPROVED and REJECTED are terminal."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Decision(enum.StrEnum):
    """Action a manager or HR takes on a pending application."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"


class ApplicationScope(enum.StrEnum):
    """Which slice of the visible applications a listing returns."""

    ALL = "ALL"
    MINE = "MINE"
    TEAM = "TEAM"
