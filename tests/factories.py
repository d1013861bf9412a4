"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    program = ProgramFactory.create(name="Kids Program")
    db_session.add(program)
    await db_session.commit()
"""

import uuid
from datetime import datetime, timezone

from tests.conftest import TEST_ORG_ID

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _unique_email() -> str:
    return f"test-{uuid.uuid4().hex[:8]}@test.com"


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


class ProgramFactory:
    @staticmethod
    def create(**overrides):
        from services.memberships_service.models import Program

        defaults = {
            "id": _id(),
            "organization_id": TEST_ORG_ID,
            "name": "Adult Brazilian Jiu-jitsu",
            "slug": f"program-{uuid.uuid4().hex[:8]}",
            "is_active": True,
            "sort_order": 0,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Program(**defaults)


class WaiverTemplateFactory:
    @staticmethod
    def create(**overrides):
        from services.memberships_service.models import WaiverTemplate

        defaults = {
            "id": _id(),
            "organization_id": TEST_ORG_ID,
            "name": "Liability Waiver",
            "slug": f"waiver-{uuid.uuid4().hex[:8]}",
            "version": 1,
            "content": "I accept the risks of training.",
            "is_active": True,
            "is_default": False,
            "requires_guardian": True,
            "guardian_age_threshold": 16,
            "sort_order": 0,
            "parent_id": None,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return WaiverTemplate(**defaults)


class MembershipPlanFactory:
    @staticmethod
    def create(program_id=None, **overrides):
        from services.memberships_service.models import MembershipPlan

        defaults = {
            "id": _id(),
            "organization_id": TEST_ORG_ID,
            "program_id": program_id,
            "name": "Month to Month (Gold)",
            "slug": f"plan-{uuid.uuid4().hex[:8]}",
            "category": "Adult Brazilian Jiu-jitsu",
            "description": None,
            "is_active": True,
            "is_trial": False,
            "price": 170,
            "signup_fee": 35,
            "frequency": "Monthly",
            "contract_length": "Month-to-Month",
            "access_level": "Unlimited",
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return MembershipPlan(**defaults)


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


class MemberFactory:
    @staticmethod
    def create(**overrides):
        from services.memberships_service.models import Member

        defaults = {
            "id": f"user_{uuid.uuid4().hex[:12]}",
            "organization_id": TEST_ORG_ID,
            "email": _unique_email(),
            "first_name": "Test",
            "last_name": "Member",
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Member(**defaults)


class MemberMembershipFactory:
    @staticmethod
    def create(member_id, membership_plan_id, **overrides):
        from services.memberships_service.models import (
            BillingType,
            MemberMembership,
            MemberMembershipStatus,
        )

        defaults = {
            "id": _id(),
            "member_id": member_id,
            "membership_plan_id": membership_plan_id,
            "status": MemberMembershipStatus.ACTIVE,
            "billing_type": BillingType.AUTOPAY,
            "start_date": _now(),
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return MemberMembership(**defaults)
