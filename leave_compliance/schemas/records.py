"""
Read models returned by the data-access collaborators.

Detached from the ORM session so they can cross thread boundaries.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from leave_compliance.utils.enums import enum_to_str


class UserRecord(BaseModel):
    id: int
    role: str
    department: Optional[str] = None
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)

    @field_validator("role", mode="before")
    @classmethod
    def role_to_str(cls, v):
        return enum_to_str(v)


class LeavePolicyRecord(BaseModel):
    leave_type: str
    total_days_per_year: int = Field(..., ge=0)
    can_carry_forward: bool = False
    max_carry_forward_days: Optional[int] = Field(None, ge=0, le=30)
    requires_approval: bool = True
    allow_half_day: bool = True
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)

    @field_validator("leave_type", mode="before")
    @classmethod
    def leave_type_to_str(cls, v):
        return enum_to_str(v)

    @model_validator(mode="after")
    def check_carry_forward(self) -> "LeavePolicyRecord":
        if self.can_carry_forward and self.max_carry_forward_days is None:
            raise ValueError("max_carry_forward_days is required when can_carry_forward is true")
        return self


class LedgerEntry(BaseModel):
    id: Optional[int] = None
    leave_type: str
    status: str
    total_days: Decimal
    submitted_at: datetime
    start_date: date
    end_date: date

    model_config = ConfigDict(from_attributes=True)

    @field_validator("leave_type", "status", mode="before")
    @classmethod
    def enums_to_str(cls, v):
        return enum_to_str(v)


class HolidayRecord(BaseModel):
    name: str
    date: date
    type: str
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)

    @field_validator("type", mode="before")
    @classmethod
    def type_to_str(cls, v):
        return enum_to_str(v)
