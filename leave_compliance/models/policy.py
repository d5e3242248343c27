"""
Leave policy model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, CheckConstraint
from sqlalchemy.sql import func
from leave_compliance.db.base import Base


class LeavePolicy(Base):
    """
    Per-leave-type policy definition.

    One row per leave type; the engine only sees rows with is_active = true.
    """
    __tablename__ = "leave_policies"

    id = Column(Integer, primary_key=True, index=True)
    leave_type = Column(String(50), unique=True, nullable=False, index=True)
    total_days_per_year = Column(Integer, nullable=False)
    can_carry_forward = Column(Boolean, nullable=False, default=False)
    max_carry_forward_days = Column(Integer, nullable=True)
    requires_approval = Column(Boolean, nullable=False, default=True)
    allow_half_day = Column(Boolean, nullable=False, default=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    __table_args__ = (
        CheckConstraint("total_days_per_year >= 0", name="check_total_days_non_negative"),
        CheckConstraint(
            "max_carry_forward_days IS NULL OR (max_carry_forward_days >= 0 AND max_carry_forward_days <= 30)",
            name="check_max_carry_forward_range",
        ),
        CheckConstraint(
            "NOT can_carry_forward OR max_carry_forward_days IS NOT NULL",
            name="check_carry_forward_requires_max",
        ),
    )
