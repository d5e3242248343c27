"""
Leave models
"""
from sqlalchemy import (
    Column,
    Integer,
    Date,
    DateTime,
    ForeignKey,
    String,
    Text,
    Numeric,
    Enum as SQLEnum,
    Boolean,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import text
import enum
from leave_compliance.db.base import Base


def _values(enum_cls):
    return [m.value for m in enum_cls]


class LeaveType(str, enum.Enum):
    ANNUAL = "annual"
    SICK = "sick"
    CASUAL = "casual"
    EMERGENCY = "emergency"
    MATERNITY = "maternity"
    PATERNITY = "paternity"


class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ESCALATED = "escalated"


class HalfDayPeriod(str, enum.Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"


# Statuses that hold days against the balance and count for overlap
ACTIVE_LEAVE_STATUSES = (LeaveStatus.PENDING, LeaveStatus.APPROVED)


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    leave_type = Column(SQLEnum(LeaveType, values_callable=_values), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_days = Column(Numeric(5, 1), nullable=False)  # Supports 0.5 days
    reason = Column(Text, nullable=False)
    status = Column(SQLEnum(LeaveStatus, values_callable=_values), nullable=False, server_default=text("'pending'"))
    is_half_day = Column(Boolean, nullable=False, default=False)
    half_day_period = Column(SQLEnum(HalfDayPeriod, values_callable=_values), nullable=True)
    emergency_contact = Column(String(255), nullable=True)
    work_handover = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    user = relationship("User", back_populates="leave_requests")

    __table_args__ = (
        Index("ix_leave_requests_user_dates", "user_id", "start_date", "end_date"),
        Index("ix_leave_requests_user_submitted", "user_id", "submitted_at"),
        CheckConstraint("start_date <= end_date", name="check_start_date_le_end_date"),
    )
