"""Memberships Service models package.

Re-exports all models and enums so that:
  - ``from services.memberships_service.models import MembershipPlan`` works
  - Alembic env.py sees every table through one import
  - SQLAlchemy's mapper registry resolves string relationships on import
"""

from services.memberships_service.models.core import Member, Program, new_id  # noqa: F401
from services.memberships_service.models.enums import (  # noqa: F401
    AutoRenewal,
    BillingType,
    ChargeSignUpFee,
    ContractLength,
    MemberMembershipStatus,
    MemberStatus,
    MembershipStatus,
    MembershipType,
    PaymentFrequency,
    StartDateOption,
)
from services.memberships_service.models.membership import (  # noqa: F401
    MemberMembership,
    MembershipPlan,
)
from services.memberships_service.models.waiver import (  # noqa: F401
    MembershipWaiver,
    WaiverTemplate,
)

__all__ = [
    "AutoRenewal",
    "BillingType",
    "ChargeSignUpFee",
    "ContractLength",
    "Member",
    "MemberMembership",
    "MemberMembershipStatus",
    "MemberStatus",
    "MembershipPlan",
    "MembershipStatus",
    "MembershipType",
    "MembershipWaiver",
    "PaymentFrequency",
    "Program",
    "StartDateOption",
    "WaiverTemplate",
    "new_id",
]
