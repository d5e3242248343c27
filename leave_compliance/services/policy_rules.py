"""
Leave policy rules - each rule checks one constraint of a leave request draft
and records its findings on the shared ComplianceResult.

Rules are pure: they only read the already-loaded inputs they receive and
never touch the database.
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Sequence

from leave_compliance.core.rule_tables import ComplianceRuleTables
from leave_compliance.models.leave import LeaveStatus
from leave_compliance.schemas.compliance import ComplianceResult, LeaveRequestDraft, Severity
from leave_compliance.schemas.records import HolidayRecord, LeavePolicyRecord, LedgerEntry, UserRecord
from leave_compliance.utils.enums import enum_to_str

HALF_DAY = Decimal("0.5")


def requested_span(draft: LeaveRequestDraft) -> Decimal:
    """
    Number of leave days requested by a draft.

    Half-day requests count 0.5 regardless of dates; otherwise this is the
    inclusive calendar-day count (weekends and holidays are not subtracted).
    """
    if draft.is_half_day:
        return HALF_DAY
    return Decimal((draft.end_date - draft.start_date).days + 1)


def format_days(days: Decimal) -> str:
    """Render a day amount without a trailing .0 for whole days"""
    days = Decimal(days)
    if days == days.to_integral_value():
        return str(int(days))
    return str(days.normalize())


def sum_days(entries: Sequence[LedgerEntry], status: LeaveStatus) -> Decimal:
    return sum((Decimal(e.total_days) for e in entries if e.status == status.value), Decimal("0"))


def available_days(policy: LeavePolicyRecord, ytd_entries: Sequence[LedgerEntry]) -> Decimal:
    """Entitlement minus approved and pending days; may go negative"""
    used = sum_days(ytd_entries, LeaveStatus.APPROVED)
    pending = sum_days(ytd_entries, LeaveStatus.PENDING)
    return Decimal(policy.total_days_per_year) - used - pending


def check_balance(
    draft: LeaveRequestDraft,
    policy: LeavePolicyRecord,
    ytd_entries: Sequence[LedgerEntry],
    tables: ComplianceRuleTables,
    result: ComplianceResult,
) -> None:
    """
    Warn when the request exhausts or nearly exhausts the year's balance.

    A negative balance is allowed; the excess is deducted from salary.
    """
    total_days = requested_span(draft)
    available = available_days(policy, ytd_entries)

    if total_days > available:
        excess = total_days - available
        result.add_warning(
            "NEGATIVE_BALANCE_WARNING",
            f"Leave request will result in negative balance. "
            f"{format_days(excess)} days will be deducted from salary.",
            "Salary deduction will apply for excess days",
        )
    elif total_days > available * tables.low_balance_ratio:
        result.add_warning(
            "LOW_BALANCE_WARNING",
            f"Leave balance will be low after this request ({format_days(available - total_days)} days remaining)",
            "Consider shorter leave period or different leave type",
        )


def check_notice_period(
    draft: LeaveRequestDraft,
    tables: ComplianceRuleTables,
    today: date,
    result: ComplianceResult,
) -> None:
    leave_type = enum_to_str(draft.leave_type)
    required_notice = tables.notice_for(leave_type)
    days_until_start = (draft.start_date - today).days

    if days_until_start < required_notice:
        result.add_violation(
            Severity.WARNING,
            "INSUFFICIENT_NOTICE",
            f"Insufficient notice period. Required: {required_notice} days, Given: {days_until_start} days",
            field="startDate",
            value=draft.start_date,
            expected_value=today + timedelta(days=required_notice),
        )
        result.suggestions.append("Consider adjusting start date to meet notice requirements")


def check_consecutive_days(
    draft: LeaveRequestDraft,
    tables: ComplianceRuleTables,
    result: ComplianceResult,
) -> None:
    total_days = requested_span(draft)
    max_allowed = tables.max_consecutive_for(enum_to_str(draft.leave_type))

    if total_days > max_allowed:
        result.add_warning(
            "EXCEEDS_MAX_CONSECUTIVE",
            f"Extended leave period: {format_days(total_days)} days (beyond recommended {max_allowed} days)",
            "Manager approval required for extended leave periods",
        )


def check_half_day(
    draft: LeaveRequestDraft,
    policy: LeavePolicyRecord,
    result: ComplianceResult,
) -> None:
    """The only rule battery check that blocks the request"""
    if not draft.is_half_day:
        return

    if not policy.allow_half_day:
        result.add_violation(
            Severity.CRITICAL,
            "HALF_DAY_NOT_ALLOWED",
            f"Half-day leave not allowed for {enum_to_str(draft.leave_type)} leave",
            field="isHalfDay",
            value=True,
            expected_value=False,
        )

    if not draft.half_day_period:
        result.add_violation(
            Severity.CRITICAL,
            "HALF_DAY_PERIOD_REQUIRED",
            "Half-day period is required when half-day is selected",
            field="halfDayPeriod",
            value=None,
            expected_value="morning or afternoon",
        )


def check_documentation(
    draft: LeaveRequestDraft,
    tables: ComplianceRuleTables,
    result: ComplianceResult,
) -> None:
    leave_type = enum_to_str(draft.leave_type)
    if not tables.requires_documentation(leave_type):
        return

    reason_length = len(draft.reason or "")
    if reason_length < tables.min_reason_length:
        result.add_violation(
            Severity.WARNING,
            "INSUFFICIENT_DOCUMENTATION",
            f"Detailed reason required for {leave_type} leave (minimum {tables.min_reason_length} characters)",
            field="reason",
            value=reason_length,
            expected_value=tables.min_reason_length,
        )


def check_approval(policy: LeavePolicyRecord, result: ComplianceResult) -> None:
    if policy.requires_approval:
        result.add_warning(
            "APPROVAL_REQUIRED",
            "This leave request requires manager approval",
            "Ensure your manager is available for approval",
        )


def check_emergency_contact(
    draft: LeaveRequestDraft,
    tables: ComplianceRuleTables,
    result: ComplianceResult,
) -> None:
    leave_type = enum_to_str(draft.leave_type)
    if tables.requires_emergency_contact(leave_type) and not draft.emergency_contact:
        result.add_violation(
            Severity.WARNING,
            "EMERGENCY_CONTACT_REQUIRED",
            f"Emergency contact information is required for {leave_type} leave",
            field="emergencyContact",
            value=draft.emergency_contact,
            expected_value="Valid contact information",
        )


def check_work_handover(
    draft: LeaveRequestDraft,
    tables: ComplianceRuleTables,
    result: ComplianceResult,
) -> None:
    total_days = requested_span(draft)
    if total_days > tables.handover_threshold_days and not draft.work_handover:
        result.add_violation(
            Severity.WARNING,
            "WORK_HANDOVER_REQUIRED",
            f"Work handover notes are required for leaves longer than {tables.handover_threshold_days} days",
            field="workHandover",
            value=draft.work_handover,
            expected_value="Work handover details",
        )


def check_holiday_conflict(
    draft: LeaveRequestDraft,
    holidays: Sequence[HolidayRecord],
    result: ComplianceResult,
) -> None:
    conflicting = [
        h for h in holidays
        if h.is_active and draft.start_date <= h.date <= draft.end_date
    ]
    if conflicting:
        holiday_names = ", ".join(h.name for h in conflicting)
        result.add_warning(
            "HOLIDAY_CONFLICT",
            f"Leave period conflicts with holidays: {holiday_names}",
            "Consider adjusting leave dates to avoid holiday conflicts",
        )


def overlapping_entries(draft: LeaveRequestDraft, entries: Sequence[LedgerEntry]) -> List[LedgerEntry]:
    """Pending or approved entries whose inclusive range intersects the draft"""
    active = {LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value}
    return [
        e for e in entries
        if e.status in active and e.start_date <= draft.end_date and e.end_date >= draft.start_date
    ]


def check_overlap(
    draft: LeaveRequestDraft,
    entries: Sequence[LedgerEntry],
    result: ComplianceResult,
) -> None:
    overlapping = overlapping_entries(draft, entries)
    if overlapping:
        result.add_warning(
            "OVERLAPPING_REQUESTS",
            f"Leave period overlaps with {len(overlapping)} existing request(s)",
            "Review overlapping periods with your manager",
        )


def check_department(
    user: UserRecord,
    draft: LeaveRequestDraft,
    tables: ComplianceRuleTables,
    result: ComplianceResult,
) -> None:
    leave_type = enum_to_str(draft.leave_type)
    if tables.department_restricts(user.department, leave_type):
        result.add_warning(
            "DEPARTMENT_RESTRICTION",
            f"{leave_type} leave has special restrictions in {user.department} department",
            "Contact HR for department-specific leave policies",
        )


def check_role(
    user: UserRecord,
    draft: LeaveRequestDraft,
    tables: ComplianceRuleTables,
    result: ComplianceResult,
) -> None:
    leave_type = enum_to_str(draft.leave_type)
    if tables.role_restricts(user.role, leave_type):
        result.add_warning(
            "ROLE_RESTRICTION",
            f"{leave_type} leave has restrictions for {user.role} role",
            "Contact HR for role-specific leave policies",
        )

