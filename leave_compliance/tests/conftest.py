"""
Pytest configuration and fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from leave_compliance.main import app  # noqa: E402
from leave_compliance.db.base import Base  # noqa: E402
from leave_compliance.core.deps import get_db, get_session_factory  # noqa: E402
from leave_compliance.core.security import create_access_token  # noqa: E402

# Import all models to ensure they're registered with Base.metadata
from leave_compliance.models import (  # noqa: E402
    User,
    UserRole,
    LeaveRequest,
    LeavePolicy,
    Holiday,
)


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(db):
    """Factory handed to the SQL repositories (shares the test database)"""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(name, role=UserRole.EMPLOYEE, department=None, manager=None, is_active=True):
        user = User(
            name=name,
            email=f"{name.lower().replace(' ', '.')}@example.com",
            role=role,
            department=department,
            manager_id=manager.id if manager else None,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_policy(db):
    def _make_policy(leave_type, total_days_per_year, allow_half_day=True, requires_approval=True, is_active=True):
        policy = LeavePolicy(
            leave_type=leave_type,
            total_days_per_year=total_days_per_year,
            can_carry_forward=False,
            requires_approval=requires_approval,
            allow_half_day=allow_half_day,
            is_active=is_active,
        )
        db.add(policy)
        db.commit()
        db.refresh(policy)
        return policy
    return _make_policy


@pytest.fixture
def make_leave(db):
    def _make_leave(user, leave_type, start_date, end_date, total_days, status, submitted_at=None,
                    reason="Planned time off"):
        leave = LeaveRequest(
            user_id=user.id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            total_days=Decimal(str(total_days)),
            reason=reason,
            status=status,
            submitted_at=submitted_at or datetime.now(),
        )
        db.add(leave)
        db.commit()
        db.refresh(leave)
        return leave
    return _make_leave


@pytest.fixture
def auth_headers():
    """Bearer headers for a user (sub = user id)"""
    def _auth_headers(user) -> dict:
        token = create_access_token({"sub": str(user.id), "role": user.role.value})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def employee(make_user):
    return make_user("Test Employee", department="Engineering")


@pytest.fixture
def manager(make_user):
    return make_user("Team Manager", role=UserRole.MANAGER, department="Engineering")


@pytest.fixture
def admin(make_user):
    return make_user("System Admin", role=UserRole.ADMIN, department="Administration")
