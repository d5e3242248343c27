"""
Default leave policies for a fresh installation
"""
import logging
from typing import List, Tuple
from sqlalchemy.orm import Session
from leave_compliance.models.policy import LeavePolicy

logger = logging.getLogger(__name__)

DEFAULT_LEAVE_POLICIES = [
    {
        "leave_type": "annual",
        "total_days_per_year": 25,
        "can_carry_forward": True,
        "max_carry_forward_days": 5,
        "allow_half_day": True,
        "description": "Annual vacation leave",
    },
    {
        "leave_type": "sick",
        "total_days_per_year": 10,
        "can_carry_forward": False,
        "max_carry_forward_days": None,
        "allow_half_day": True,
        "description": "Sick leave for illness or medical appointments",
    },
    {
        "leave_type": "casual",
        "total_days_per_year": 8,
        "can_carry_forward": False,
        "max_carry_forward_days": None,
        "allow_half_day": True,
        "description": "Casual leave for personal matters",
    },
    {
        "leave_type": "maternity",
        "total_days_per_year": 90,
        "can_carry_forward": False,
        "max_carry_forward_days": None,
        "allow_half_day": False,
        "description": "Maternity leave",
    },
    {
        "leave_type": "paternity",
        "total_days_per_year": 15,
        "can_carry_forward": False,
        "max_carry_forward_days": None,
        "allow_half_day": False,
        "description": "Paternity leave",
    },
    {
        "leave_type": "emergency",
        "total_days_per_year": 5,
        "can_carry_forward": False,
        "max_carry_forward_days": None,
        "allow_half_day": True,
        "description": "Emergency leave for urgent situations",
    },
]


def get_or_create_leave_policy(db: Session, defaults: dict) -> Tuple[LeavePolicy, bool]:
    """
    Return the policy for defaults["leave_type"], creating it if missing.

    An existing policy is left unchanged, active or not.
    """
    policy = db.query(LeavePolicy).filter(LeavePolicy.leave_type == defaults["leave_type"]).first()
    if policy:
        return policy, False

    policy = LeavePolicy(requires_approval=True, is_active=True, **defaults)
    db.add(policy)
    db.flush()
    logger.info("Created %s leave policy (%s days/year)", policy.leave_type, policy.total_days_per_year)
    return policy, True


def seed_leave_policies(db: Session) -> List[Tuple[LeavePolicy, bool]]:
    """Create every missing default policy and commit"""
    seeded = [get_or_create_leave_policy(db, defaults) for defaults in DEFAULT_LEAVE_POLICIES]
    db.commit()
    return seeded
