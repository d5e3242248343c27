"""
Seed the default leave policies (annual=25, sick=10, casual=8, maternity=90,
paternity=15, emergency=5). Existing policies are left unchanged. Run from the
project root with .env loaded.

Usage:
  python scripts/seed_leave_policies.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from leave_compliance.core.logging import setup_logging
from leave_compliance.db.session import SessionLocal
from leave_compliance.services.policy_seed import seed_leave_policies


def main():
    setup_logging()
    db = SessionLocal()
    try:
        for policy, created in seed_leave_policies(db):
            state = "created" if created else "exists"
            print(
                f"{policy.leave_type}: {policy.total_days_per_year} days/year, "
                f"half-day={'yes' if policy.allow_half_day else 'no'}, active={policy.is_active} ({state})"
            )
    finally:
        db.close()


if __name__ == "__main__":
    main()
