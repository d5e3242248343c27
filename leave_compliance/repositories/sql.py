"""
SQLAlchemy implementations of the compliance data-access interfaces.

Every call opens its own short-lived session from the factory, so adapters
can be used from several threads at once.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from leave_compliance.models.holiday import Holiday
from leave_compliance.models.leave import LeaveRequest
from leave_compliance.models.policy import LeavePolicy
from leave_compliance.models.user import User
from leave_compliance.schemas.records import HolidayRecord, LeavePolicyRecord, LedgerEntry, UserRecord

SessionFactory = Callable[[], Session]


class SqlUserDirectory:
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        with self._session_factory() as db:
            user = db.query(User).filter(User.id == user_id).first()
            return UserRecord.model_validate(user) if user else None


class SqlPolicyRepository:
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def find_active_by_type(self, leave_type: str) -> Optional[LeavePolicyRecord]:
        with self._session_factory() as db:
            policy = db.query(LeavePolicy).filter(
                LeavePolicy.leave_type == leave_type,
                LeavePolicy.is_active == True,  # noqa: E712
            ).first()
            return LeavePolicyRecord.model_validate(policy) if policy else None

    def list_active(self) -> List[LeavePolicyRecord]:
        with self._session_factory() as db:
            policies = db.query(LeavePolicy).filter(
                LeavePolicy.is_active == True  # noqa: E712
            ).order_by(LeavePolicy.leave_type).all()
            return [LeavePolicyRecord.model_validate(p) for p in policies]


class SqlLeaveLedger:
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def find_for_user(
        self,
        user_id: int,
        *,
        leave_type: Optional[str] = None,
        status_in: Optional[Iterable[str]] = None,
        submitted_between: Optional[Tuple[Optional[datetime], Optional[datetime]]] = None,
        overlapping: Optional[Tuple[date, date]] = None,
    ) -> List[LedgerEntry]:
        with self._session_factory() as db:
            query = db.query(LeaveRequest).filter(LeaveRequest.user_id == user_id)

            if leave_type is not None:
                query = query.filter(LeaveRequest.leave_type == leave_type)

            if status_in is not None:
                query = query.filter(LeaveRequest.status.in_(list(status_in)))

            if submitted_between is not None:
                submitted_from, submitted_to = submitted_between
                if submitted_from is not None:
                    query = query.filter(LeaveRequest.submitted_at >= submitted_from)
                if submitted_to is not None:
                    query = query.filter(LeaveRequest.submitted_at <= submitted_to)

            if overlapping is not None:
                range_start, range_end = overlapping
                query = query.filter(
                    LeaveRequest.start_date <= range_end,
                    LeaveRequest.end_date >= range_start,
                )

            rows = query.order_by(LeaveRequest.start_date, LeaveRequest.id).all()
            return [LedgerEntry.model_validate(r) for r in rows]


class SqlHolidayCalendar:
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def find_active_in_range(self, start_date: date, end_date: date) -> List[HolidayRecord]:
        with self._session_factory() as db:
            holidays = db.query(Holiday).filter(
                Holiday.is_active == True,  # noqa: E712
                Holiday.date >= start_date,
                Holiday.date <= end_date,
            ).order_by(Holiday.date, Holiday.name).all()
            return [HolidayRecord.model_validate(h) for h in holidays]
