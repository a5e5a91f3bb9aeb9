from sqlmodel import SQLModel

from leaveflow.models.application import LeaveApplication
from leaveflow.models.balance import LeaveBalance
from leaveflow.models.base import TimestampMixin, UUIDBase
from leaveflow.models.enums import (
    ApplicationScope,
    ApplicationStatus,
    Decision,
    HalfDayPeriod,
    LeaveCategory,
    Role,
)
from leaveflow.models.leave_type import LeaveType

__all__ = [
    "ApplicationScope",
    "ApplicationStatus",
    "Decision",
    "HalfDayPeriod",
    "LeaveApplication",
    "LeaveBalance",
    "LeaveCategory",
    "LeaveType",
    "Role",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
