"""
Database models
"""
from leave_compliance.models.user import User, UserRole
from leave_compliance.models.leave import (
    LeaveRequest,
    LeaveType,
    LeaveStatus,
    HalfDayPeriod,
    ACTIVE_LEAVE_STATUSES,
)
from leave_compliance.models.policy import LeavePolicy
from leave_compliance.models.holiday import Holiday, HolidayType

__all__ = [
    "User",
    "UserRole",
    "LeaveRequest",
    "LeaveType",
    "LeaveStatus",
    "HalfDayPeriod",
    "ACTIVE_LEAVE_STATUSES",
    "LeavePolicy",
    "Holiday",
    "HolidayType",
]
