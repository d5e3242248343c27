"""
Tests for the SQLAlchemy compliance repositories against SQLite
"""
from datetime import date, datetime
from decimal import Decimal

from leave_compliance.models import Holiday, HolidayType, LeaveStatus, LeaveType, UserRole
from leave_compliance.repositories.sql import (
    SqlHolidayCalendar,
    SqlLeaveLedger,
    SqlPolicyRepository,
    SqlUserDirectory,
)
from leave_compliance.schemas.records import LedgerEntry, UserRecord


def test_user_directory(session_factory, make_user):
    user = make_user("Dana Lee", role=UserRole.MANAGER, department="Finance")
    directory = SqlUserDirectory(session_factory)

    record = directory.find_by_id(user.id)

    assert isinstance(record, UserRecord)
    assert record.role == "manager"
    assert record.department == "Finance"
    assert directory.find_by_id(user.id + 100) is None


def test_policy_repository_ignores_inactive(session_factory, make_policy):
    make_policy("annual", 25)
    make_policy("sick", 10)
    make_policy("casual", 8, is_active=False)
    repo = SqlPolicyRepository(session_factory)

    assert repo.find_active_by_type("annual").total_days_per_year == 25
    assert repo.find_active_by_type("casual") is None
    assert repo.find_active_by_type("unpaid") is None
    assert [p.leave_type for p in repo.list_active()] == ["annual", "sick"]


def test_ledger_filters(session_factory, employee, make_user, make_leave):
    make_leave(employee, LeaveType.ANNUAL, date(2024, 5, 10), date(2024, 5, 15), 6, LeaveStatus.APPROVED,
              submitted_at=datetime(2024, 4, 1, 9, 0))
    make_leave(employee, LeaveType.ANNUAL, date(2024, 2, 1), date(2024, 2, 1), "0.5", LeaveStatus.PENDING,
              submitted_at=datetime(2024, 1, 20, 9, 0))
    make_leave(employee, LeaveType.SICK, date(2024, 5, 14), date(2024, 5, 14), 1, LeaveStatus.REJECTED,
              submitted_at=datetime(2024, 5, 14, 7, 0))
    make_leave(employee, LeaveType.ANNUAL, date(2023, 12, 20), date(2023, 12, 22), 3, LeaveStatus.APPROVED,
              submitted_at=datetime(2023, 11, 1, 9, 0))
    other = make_user("Other Person")
    make_leave(other, LeaveType.ANNUAL, date(2024, 5, 10), date(2024, 5, 15), 6, LeaveStatus.APPROVED)
    ledger = SqlLeaveLedger(session_factory)

    everything = ledger.find_for_user(employee.id)
    assert [e.start_date for e in everything] == [
        date(2023, 12, 20), date(2024, 2, 1), date(2024, 5, 10), date(2024, 5, 14),
    ]
    assert all(isinstance(e, LedgerEntry) for e in everything)

    this_year_annual = ledger.find_for_user(
        employee.id,
        leave_type="annual",
        status_in=("approved", "pending"),
        submitted_between=(datetime(2024, 1, 1), datetime(2024, 12, 31, 23, 59, 59)),
    )
    assert [(e.status, e.total_days) for e in this_year_annual] == [
        ("pending", Decimal("0.5")),
        ("approved", Decimal("6")),
    ]

    overlapping = ledger.find_for_user(employee.id, overlapping=(date(2024, 5, 14), date(2024, 5, 20)))
    assert [e.leave_type for e in overlapping] == ["annual", "sick"]

    since = ledger.find_for_user(employee.id, submitted_between=(datetime(2024, 4, 1), None))
    assert len(since) == 2


def test_holiday_calendar(db, session_factory):
    db.add_all([
        Holiday(name="Spring Festival", date=date(2024, 4, 3), type=HolidayType.PUBLIC),
        Holiday(name="Founders Day", date=date(2024, 4, 3), type=HolidayType.COMPANY),
        Holiday(name="Earth Day", date=date(2024, 4, 2), type=HolidayType.NATIONAL),
        Holiday(name="Old Holiday", date=date(2024, 4, 2), type=HolidayType.PUBLIC, is_active=False),
        Holiday(name="Labour Day", date=date(2024, 5, 1), type=HolidayType.PUBLIC),
    ])
    db.commit()
    calendar = SqlHolidayCalendar(session_factory)

    holidays = calendar.find_active_in_range(date(2024, 4, 1), date(2024, 4, 30))

    assert [h.name for h in holidays] == ["Earth Day", "Founders Day", "Spring Festival"]
    assert holidays[1].type == "company"
