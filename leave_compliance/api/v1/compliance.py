"""
Leave policy compliance endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from leave_compliance.core.deps import get_db, get_current_user, require_roles, get_compliance_engine
from leave_compliance.models.user import User, UserRole
from leave_compliance.schemas.compliance import (
    ComplianceResult,
    ComplianceSummary,
    LeaveBalanceResponse,
    LeaveRequestDraft,
)
from leave_compliance.services.policy_enforcement_service import PolicyComplianceEngine

router = APIRouter()


def _ensure_can_view(db: Session, current_user: User, user_id: int) -> None:
    """Admins see everyone; managers only their direct reports."""
    if current_user.role == UserRole.ADMIN or current_user.id == user_id:
        return

    target = db.query(User).filter(User.id == user_id).first()
    if target is None or target.manager_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Managers can only view their direct reports."
        )


@router.post("/check", response_model=ComplianceResult)
async def check_my_leave(
    draft: LeaveRequestDraft,
    current_user: User = Depends(get_current_user),
    engine: PolicyComplianceEngine = Depends(get_compliance_engine),
):
    """
    Pre-check a leave request against the leave policies.

    Nothing is persisted. isCompliant is false only when a blocking
    (CRITICAL) violation was found; WARNING violations and warnings are
    advisory.
    """
    return await run_in_threadpool(engine.evaluate, current_user.id, draft)


@router.post("/check/{user_id}", response_model=ComplianceResult)
async def check_leave_for_user(
    user_id: int,
    draft: LeaveRequestDraft,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    engine: PolicyComplianceEngine = Depends(get_compliance_engine),
):
    """Pre-check a leave request on behalf of another user (Manager/Admin)"""
    _ensure_can_view(db, current_user, user_id)
    return await run_in_threadpool(engine.evaluate, user_id, draft)


@router.get("/summary/me", response_model=ComplianceSummary)
async def my_compliance_summary(
    current_user: User = Depends(get_current_user),
    engine: PolicyComplianceEngine = Depends(get_compliance_engine),
):
    """Compliance summary over the caller's requests of the last 90 days"""
    return await run_in_threadpool(engine.summarize, current_user.id)


@router.get("/summary/{user_id}", response_model=ComplianceSummary)
async def user_compliance_summary(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(UserRole.MANAGER)),
    engine: PolicyComplianceEngine = Depends(get_compliance_engine),
):
    """Compliance summary for another user (Manager/Admin)"""
    _ensure_can_view(db, current_user, user_id)
    return await run_in_threadpool(engine.summarize, user_id)


@router.get("/balance/me", response_model=LeaveBalanceResponse)
async def my_leave_balance(
    year: Optional[int] = Query(None, description="Calendar year (defaults to the current year)"),
    current_user: User = Depends(get_current_user),
    engine: PolicyComplianceEngine = Depends(get_compliance_engine),
):
    """
    Leave balance per active policy: entitlement, approved (used) days,
    pending days and what is left. available may be negative.
    """
    year = year or engine.clock().year
    items = await run_in_threadpool(engine.balances, current_user.id, year)
    return LeaveBalanceResponse(year=year, user_id=current_user.id, items=items)
