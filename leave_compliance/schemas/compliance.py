"""
Compliance engine schemas

Field names serialize in camelCase (isCompliant, expectedValue, ...) for
existing consumers; Python attributes stay snake_case.
"""
import enum
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from leave_compliance.models.leave import LeaveType, HalfDayPeriod


class Severity(str, enum.Enum):
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    INFO = "INFO"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LeaveRequestDraft(CamelModel):
    """Proposed leave request evaluated by the engine (not persisted)"""
    leave_type: LeaveType = Field(..., description="Type of leave")
    start_date: date = Field(..., description="First day of leave (inclusive)")
    end_date: date = Field(..., description="Last day of leave (inclusive)")
    is_half_day: bool = Field(False, description="Half-day request")
    half_day_period: Optional[HalfDayPeriod] = Field(None, description="morning or afternoon, required for half days")
    reason: str = Field("", description="Reason for leave")
    emergency_contact: Optional[str] = Field(None, description="Contact while on leave")
    work_handover: Optional[str] = Field(None, description="Work handover notes")

    @model_validator(mode="after")
    def check_date_order(self) -> "LeaveRequestDraft":
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class PolicyViolation(CamelModel):
    severity: Severity
    code: str
    message: str
    field: Optional[str] = None
    value: Optional[Any] = None
    expected_value: Optional[Any] = None


class PolicyWarning(CamelModel):
    code: str
    message: str
    suggestion: Optional[str] = None


class ComplianceResult(CamelModel):
    """
    Outcome of one evaluation.

    violations holds both CRITICAL and WARNING severity findings; only
    CRITICAL ones make the request non-compliant. warnings is a separate,
    always advisory channel.
    """
    is_compliant: bool = True
    violations: List[PolicyViolation] = Field(default_factory=list)
    warnings: List[PolicyWarning] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    def add_violation(self, severity: Severity, code: str, message: str, **details) -> None:
        self.violations.append(PolicyViolation(severity=severity, code=code, message=message, **details))

    def add_warning(self, code: str, message: str, suggestion: Optional[str] = None) -> None:
        self.warnings.append(PolicyWarning(code=code, message=message, suggestion=suggestion))

    def has_critical(self) -> bool:
        return any(v.severity == Severity.CRITICAL for v in self.violations)

    def codes(self) -> List[str]:
        """Codes of all findings, violations first, in emission order"""
        return [v.code for v in self.violations] + [w.code for w in self.warnings]


class ComplianceSummary(CamelModel):
    overall_compliance: int = Field(..., ge=0, le=100)
    policy_violations: int = 0
    policy_warnings: int = 0
    recommendations: List[str] = Field(default_factory=list)


class LeaveBalanceItem(CamelModel):
    leave_type: str
    entitlement: Decimal
    used: Decimal
    pending: Decimal
    available: Decimal


class LeaveBalanceResponse(CamelModel):
    year: int
    user_id: int
    items: List[LeaveBalanceItem]
