"""
Read-only data-access interfaces consumed by the compliance engine
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Protocol, Tuple

from leave_compliance.schemas.records import HolidayRecord, LeavePolicyRecord, LedgerEntry, UserRecord


class UserDirectory(Protocol):
    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        raise NotImplementedError


class PolicyRepository(Protocol):
    def find_active_by_type(self, leave_type: str) -> Optional[LeavePolicyRecord]:
        raise NotImplementedError

    def list_active(self) -> List[LeavePolicyRecord]:
        raise NotImplementedError


class LeaveLedger(Protocol):
    def find_for_user(
        self,
        user_id: int,
        *,
        leave_type: Optional[str] = None,
        status_in: Optional[Iterable[str]] = None,
        submitted_between: Optional[Tuple[Optional[datetime], Optional[datetime]]] = None,
        overlapping: Optional[Tuple[date, date]] = None,
    ) -> List[LedgerEntry]:
        """
        Leave requests of a user, filtered by any combination of type,
        status, submission window (either bound may be None) and
        intersection with an inclusive date range.
        """
        raise NotImplementedError


class HolidayCalendar(Protocol):
    def find_active_in_range(self, start_date: date, end_date: date) -> List[HolidayRecord]:
        raise NotImplementedError
