"""
Holiday calendar model
"""
from sqlalchemy import Column, Integer, Date, DateTime, String, Text, Boolean, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.sql import func
import enum
from leave_compliance.db.base import Base


class HolidayType(str, enum.Enum):
    PUBLIC = "public"
    COMPANY = "company"
    RELIGIOUS = "religious"
    NATIONAL = "national"


class Holiday(Base):
    __tablename__ = "holidays"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    type = Column(SQLEnum(HolidayType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    is_recurring = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint("name", "date", name="uq_holiday_name_date"),
    )
