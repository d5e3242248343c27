"""
Tests for compliance rule table loading
"""
import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from leave_compliance.core.rule_tables import ComplianceRuleTables, load_rule_tables


def test_defaults():
    tables = load_rule_tables(None)

    assert tables.notice_for("annual") == 7
    assert tables.notice_for("sabbatical") == 1
    assert tables.max_consecutive_for("maternity") == 180
    assert tables.max_consecutive_for("sabbatical") == 10
    assert tables.requires_documentation("sick") is True
    assert tables.requires_emergency_contact("casual") is False
    assert tables.department_restricts("IT", "paternity") is True
    assert tables.department_restricts(None, "paternity") is False
    assert tables.role_restricts("admin", "emergency") is True
    assert tables.low_balance_ratio == Decimal("0.8")


def test_file_overrides_named_tables(tmp_path):
    rules_file = tmp_path / "rules.json"
    rules_file.write_text(json.dumps({
        "notice_days": {"annual": 14},
        "department_restrictions": {"Operations": ["annual"]},
        "handover_threshold_days": 5,
    }))

    tables = load_rule_tables(str(rules_file))

    assert tables.notice_for("annual") == 14
    # replaced wholesale
    assert tables.notice_for("maternity") == 1
    assert tables.department_restricts("Operations", "annual") is True
    assert tables.department_restricts("IT", "paternity") is False
    assert tables.handover_threshold_days == 5
    assert tables.max_consecutive_for("annual") == 15


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rule_tables(str(tmp_path / "absent.json"))


def test_unknown_key_rejected(tmp_path):
    rules_file = tmp_path / "rules.json"
    rules_file.write_text(json.dumps({"notice_dayz": {"annual": 3}}))

    with pytest.raises(ValidationError):
        load_rule_tables(str(rules_file))


def test_negative_days_rejected():
    with pytest.raises(ValidationError):
        ComplianceRuleTables(max_consecutive_days={"annual": -1})


@pytest.mark.parametrize("ratio", ["0", "1.5"])
def test_ratio_bounds(ratio):
    with pytest.raises(ValidationError):
        ComplianceRuleTables(low_balance_ratio=Decimal(ratio))


def test_tables_are_frozen():
    tables = ComplianceRuleTables()
    with pytest.raises(ValidationError):
        tables.min_reason_length = 5
