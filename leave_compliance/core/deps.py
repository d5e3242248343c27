"""
Dependencies and guards for FastAPI endpoints
"""
from typing import Generator
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session, sessionmaker
from leave_compliance.db.session import SessionLocal
from leave_compliance.core.rule_tables import ComplianceRuleTables
from leave_compliance.core.security import decode_token
from leave_compliance.models.user import User, UserRole
from leave_compliance.repositories.sql import (
    SqlHolidayCalendar,
    SqlLeaveLedger,
    SqlPolicyRepository,
    SqlUserDirectory,
)
from leave_compliance.services.policy_enforcement_service import PolicyComplianceEngine


security = HTTPBearer()


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Session factory used by the compliance repositories (one session per read)"""
    return SessionLocal


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token
    """
    token = credentials.credentials

    try:
        payload = decode_token(token)
        sub_value = payload.get("sub")
        if sub_value is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )
        user_id: int = int(sub_value)
    except (ValueError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return user


def require_roles(*allowed_roles: UserRole):
    """
    Dependency factory for role-based access control

    Usage:
        @router.get("/managers-only")
        async def endpoint(user: User = Depends(require_roles(UserRole.MANAGER))):
            ...
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        # ADMIN is allowed everywhere
        if current_user.role == UserRole.ADMIN:
            return current_user

        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {[r.value for r in allowed_roles]}"
            )
        return current_user
    return role_checker


def get_compliance_engine(
    request: Request,
    session_factory: sessionmaker = Depends(get_session_factory),
) -> PolicyComplianceEngine:
    """
    Build the compliance engine over the SQL repositories.

    Rule tables and the read executor are owned by the application
    lifecycle (see main.py); when they are absent, defaults and inline
    reads are used.
    """
    tables = getattr(request.app.state, "rule_tables", None) or ComplianceRuleTables()
    executor = getattr(request.app.state, "compliance_executor", None)
    return PolicyComplianceEngine(
        users=SqlUserDirectory(session_factory),
        policies=SqlPolicyRepository(session_factory),
        ledger=SqlLeaveLedger(session_factory),
        holidays=SqlHolidayCalendar(session_factory),
        tables=tables,
        executor=executor,
    )
