"""Memberships Service schemas package.

Re-exports all schemas so routers use a single import namespace:
  - schemas/reference.py - program, waiver template and plan listings
  - schemas/membership.py - plan creation and member membership changes
"""

from services.memberships_service.schemas.membership import (  # noqa: F401
    AddMembershipRequest,
    ChangeMembershipRequest,
    IdResponse,
    MembershipPlanCreate,
)
from services.memberships_service.schemas.reference import (  # noqa: F401
    MembershipPlanListResponse,
    MembershipPlanResponse,
    ProgramListResponse,
    ProgramResponse,
    WaiverTemplateListResponse,
    WaiverTemplateResponse,
)
