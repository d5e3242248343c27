"""
Leave rule tables used by the compliance engine.

Defaults match the leave handbook; operators can override any table with a
JSON file named by COMPLIANCE_RULES_FILE without a redeploy.
"""
import logging
from decimal import Decimal
from pathlib import Path
from typing import Dict, FrozenSet, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class ComplianceRuleTables(BaseModel):
    """Per-leave-type requirement tables and department/role restrictions"""

    notice_days: Dict[str, int] = Field(default_factory=lambda: {
        "annual": 7,
        "sick": 0,
        "casual": 1,
        "emergency": 0,
        "maternity": 30,
        "paternity": 14,
    })
    default_notice_days: int = 1

    max_consecutive_days: Dict[str, int] = Field(default_factory=lambda: {
        "annual": 15,
        "sick": 30,
        "casual": 3,
        "emergency": 5,
        "maternity": 180,
        "paternity": 30,
    })
    default_max_consecutive_days: int = 10

    documentation_required: Dict[str, bool] = Field(default_factory=lambda: {
        "sick": True,
        "maternity": True,
        "paternity": True,
        "emergency": False,
        "annual": False,
        "casual": False,
    })
    min_reason_length: int = 20

    emergency_contact_required: Dict[str, bool] = Field(default_factory=lambda: {
        "annual": True,
        "sick": False,
        "casual": False,
        "emergency": True,
        "maternity": True,
        "paternity": True,
    })

    handover_threshold_days: int = 3
    low_balance_ratio: Decimal = Decimal("0.8")

    # department / role -> leave types with special restrictions
    department_restrictions: Dict[str, FrozenSet[str]] = Field(default_factory=lambda: {
        "IT": frozenset({"maternity", "paternity"}),
        "Finance": frozenset({"emergency"}),
        "HR": frozenset({"casual"}),
    })
    role_restrictions: Dict[str, FrozenSet[str]] = Field(default_factory=lambda: {
        "manager": frozenset({"casual"}),
        "admin": frozenset({"emergency"}),
    })

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("notice_days", "max_consecutive_days")
    @classmethod
    def non_negative_days(cls, v: Dict[str, int]) -> Dict[str, int]:
        for leave_type, days in v.items():
            if days < 0:
                raise ValueError(f"{leave_type}: day counts must be >= 0")
        return v

    @field_validator("low_balance_ratio")
    @classmethod
    def ratio_in_range(cls, v: Decimal) -> Decimal:
        if not (0 < v <= 1):
            raise ValueError("low_balance_ratio must be in (0, 1]")
        return v

    def notice_for(self, leave_type: str) -> int:
        return self.notice_days.get(leave_type, self.default_notice_days)

    def max_consecutive_for(self, leave_type: str) -> int:
        return self.max_consecutive_days.get(leave_type, self.default_max_consecutive_days)

    def requires_documentation(self, leave_type: str) -> bool:
        return self.documentation_required.get(leave_type, False)

    def requires_emergency_contact(self, leave_type: str) -> bool:
        return self.emergency_contact_required.get(leave_type, False)

    def department_restricts(self, department: Optional[str], leave_type: str) -> bool:
        return leave_type in self.department_restrictions.get(department or "", frozenset())

    def role_restricts(self, role: Optional[str], leave_type: str) -> bool:
        return leave_type in self.role_restrictions.get(role or "", frozenset())


def load_rule_tables(path: Optional[str] = None) -> ComplianceRuleTables:
    """
    Build the rule tables, optionally overridden from a JSON file.

    Tables missing from the file keep their defaults; a table present in the
    file replaces the default table wholesale.

    Raises:
        FileNotFoundError: If path is given but does not exist
        pydantic.ValidationError: If the file content is invalid
    """
    if not path:
        logger.info("Using default compliance rule tables")
        return ComplianceRuleTables()

    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Compliance rules file not found: {path}")

    tables = ComplianceRuleTables.model_validate_json(source.read_text(encoding="utf-8"))
    logger.info("Loaded compliance rule tables from %s", source)
    return tables
