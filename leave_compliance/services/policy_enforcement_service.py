"""
Policy enforcement service - evaluates a leave request draft against every
applicable leave policy rule and reports the outcome.

evaluate() and summarize() never raise: policy outcomes live in the returned
result, and data-access failures are logged and degraded to an error result.
"""
import logging
from concurrent.futures import Executor, wait
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, NamedTuple, Optional

from leave_compliance.core.errors import UserNotFoundError
from leave_compliance.core.rule_tables import ComplianceRuleTables
from leave_compliance.models.leave import LeaveStatus
from leave_compliance.repositories.base import HolidayCalendar, LeaveLedger, PolicyRepository, UserDirectory
from leave_compliance.schemas.compliance import (
    ComplianceResult,
    ComplianceSummary,
    LeaveBalanceItem,
    LeaveRequestDraft,
    PolicyViolation,
    Severity,
)
from leave_compliance.schemas.records import HolidayRecord, LeavePolicyRecord, LedgerEntry, UserRecord
from leave_compliance.services import policy_rules as rules
from leave_compliance.utils.enums import enum_to_str

logger = logging.getLogger(__name__)

SUMMARY_WINDOW_DAYS = 90
ACTIVE_STATUSES = (LeaveStatus.APPROVED.value, LeaveStatus.PENDING.value)


class EvaluationInputs(NamedTuple):
    user: Optional[UserRecord]
    policy: Optional[LeavePolicyRecord]
    ytd_entries: List[LedgerEntry]
    overlapping: List[LedgerEntry]
    holidays: List[HolidayRecord]


def year_bounds(year: int) -> tuple:
    """First and last instant of a calendar year"""
    return datetime(year, 1, 1), datetime(year, 12, 31, 23, 59, 59, 999999)


class PolicyComplianceEngine:
    """
    Leave policy compliance engine.

    Holds no per-call state; a single instance can serve any number of
    concurrent evaluations.
    """

    def __init__(
        self,
        users: UserDirectory,
        policies: PolicyRepository,
        ledger: LeaveLedger,
        holidays: HolidayCalendar,
        tables: Optional[ComplianceRuleTables] = None,
        executor: Optional[Executor] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.users = users
        self.policies = policies
        self.ledger = ledger
        self.holidays = holidays
        self.tables = tables or ComplianceRuleTables()
        self.executor = executor
        self.clock = clock

    # ------------------------------------------------------------------ #
    # Input loading
    # ------------------------------------------------------------------ #

    def _run_reads(self, reads: Dict[str, Callable[[], object]]) -> Dict[str, object]:
        """
        Run independent reads, concurrently when an executor is configured.

        The first failing read's exception propagates once all reads settle.
        """
        if self.executor is None:
            return {name: read() for name, read in reads.items()}

        futures = {name: self.executor.submit(read) for name, read in reads.items()}
        wait(futures.values())
        return {name: future.result() for name, future in futures.items()}

    def _load_inputs(self, user_id: int, draft: LeaveRequestDraft, today: date) -> EvaluationInputs:
        leave_type = enum_to_str(draft.leave_type)
        loaded = self._run_reads({
            "user": lambda: self.users.find_by_id(user_id),
            "policy": lambda: self.policies.find_active_by_type(leave_type),
            "ytd_entries": lambda: self.ledger.find_for_user(
                user_id,
                leave_type=leave_type,
                status_in=ACTIVE_STATUSES,
                submitted_between=year_bounds(today.year),
            ),
            "overlapping": lambda: self.ledger.find_for_user(
                user_id,
                status_in=ACTIVE_STATUSES,
                overlapping=(draft.start_date, draft.end_date),
            ),
            "holidays": lambda: self.holidays.find_active_in_range(draft.start_date, draft.end_date),
        })
        return EvaluationInputs(**loaded)

    # ------------------------------------------------------------------ #
    # Evaluation
    # ------------------------------------------------------------------ #

    def evaluate(self, user_id: int, draft: LeaveRequestDraft) -> ComplianceResult:
        """
        Evaluate a leave request draft for a user.

        Args:
            user_id: Requesting user
            draft: Proposed leave request

        Returns:
            ComplianceResult; is_compliant is False iff a CRITICAL violation
            was recorded. Never raises.
        """
        try:
            today = self.clock().date()
            inputs = self._load_inputs(user_id, draft, today)
            result = ComplianceResult()

            if inputs.user is None:
                result.add_violation(Severity.CRITICAL, "USER_NOT_FOUND", "User not found")
                result.is_compliant = False
                return result

            if inputs.policy is None:
                result.add_violation(
                    Severity.CRITICAL,
                    "POLICY_NOT_FOUND",
                    f"No active policy found for {enum_to_str(draft.leave_type)} leave",
                )
                result.is_compliant = False
                return result

            self._apply_rules(inputs, draft, today, result)
            result.is_compliant = not result.has_critical()

            logger.debug(
                "Evaluated %s leave for user %s: compliant=%s codes=%s",
                enum_to_str(draft.leave_type), user_id, result.is_compliant, result.codes(),
            )
            return result
        except Exception:
            logger.error("Error enforcing leave policies for user %s", user_id, exc_info=True)
            return ComplianceResult(
                is_compliant=False,
                violations=[PolicyViolation(
                    severity=Severity.CRITICAL,
                    code="ENFORCEMENT_ERROR",
                    message="Error enforcing policies",
                )],
            )

    def _apply_rules(
        self,
        inputs: EvaluationInputs,
        draft: LeaveRequestDraft,
        today: date,
        result: ComplianceResult,
    ) -> None:
        # Order fixes the order of findings in the result
        tables = self.tables
        rules.check_balance(draft, inputs.policy, inputs.ytd_entries, tables, result)
        rules.check_notice_period(draft, tables, today, result)
        rules.check_consecutive_days(draft, tables, result)
        rules.check_half_day(draft, inputs.policy, result)
        rules.check_documentation(draft, tables, result)
        rules.check_approval(inputs.policy, result)
        rules.check_emergency_contact(draft, tables, result)
        rules.check_work_handover(draft, tables, result)
        rules.check_holiday_conflict(draft, inputs.holidays, result)
        rules.check_overlap(draft, inputs.overlapping, result)
        rules.check_department(inputs.user, draft, tables, result)
        rules.check_role(inputs.user, draft, tables, result)

    @staticmethod
    def requested_span(draft: LeaveRequestDraft) -> Decimal:
        return rules.requested_span(draft)

    # ------------------------------------------------------------------ #
    # Reporting
    # ------------------------------------------------------------------ #

    def summarize(self, user_id: int) -> ComplianceSummary:
        """
        Compliance summary over the user's requests of the last 90 days.

        Never raises; failures degrade to an all-zero summary.
        """
        try:
            user = self.users.find_by_id(user_id)
            if user is None:
                return ComplianceSummary(
                    overall_compliance=0,
                    recommendations=["User not found"],
                )

            since = self.clock() - timedelta(days=SUMMARY_WINDOW_DAYS)
            recent = self.ledger.find_for_user(user_id, submitted_between=(since, None))

            total = len(recent)
            approved = sum(1 for r in recent if r.status == LeaveStatus.APPROVED.value)
            rejected = sum(1 for r in recent if r.status == LeaveStatus.REJECTED.value)

            rate = Decimal(approved) * 100 / Decimal(total) if total else Decimal(100)
            overall = int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

            recommendations = []
            if rejected > 0:
                recommendations.append("Review rejected leave requests to understand policy violations")
            # Threshold applies to the unrounded rate
            if rate < 80:
                recommendations.append("Consider reviewing leave policies and submission guidelines")

            return ComplianceSummary(
                overall_compliance=overall,
                policy_violations=rejected,
                policy_warnings=total - approved - rejected,
                recommendations=recommendations,
            )
        except Exception:
            logger.error("Error getting policy compliance summary for user %s", user_id, exc_info=True)
            return ComplianceSummary(
                overall_compliance=0,
                recommendations=["Error calculating compliance"],
            )

    def balances(self, user_id: int, year: Optional[int] = None) -> List[LeaveBalanceItem]:
        """
        Leave balance per active policy for a calendar year.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        if self.users.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

        year = year or self.clock().year
        entries = self.ledger.find_for_user(
            user_id,
            status_in=ACTIVE_STATUSES,
            submitted_between=year_bounds(year),
        )

        items = []
        for policy in self.policies.list_active():
            of_type = [e for e in entries if e.leave_type == policy.leave_type]
            used = rules.sum_days(of_type, LeaveStatus.APPROVED)
            pending = rules.sum_days(of_type, LeaveStatus.PENDING)
            items.append(LeaveBalanceItem(
                leave_type=policy.leave_type,
                entitlement=Decimal(policy.total_days_per_year),
                used=used,
                pending=pending,
                available=rules.available_days(policy, of_type),
            ))
        return items
