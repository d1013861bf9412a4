"""Reference listings for the membership wizard and member pages."""

from fastapi import APIRouter, Depends
from libs.auth.dependencies import require_role
from libs.auth.models import AuthContext, OrgRole
from libs.db.session import get_async_db
from services.memberships_service.models import MembershipPlan
from services.memberships_service.schemas import (
    MembershipPlanListResponse,
    MembershipPlanResponse,
    ProgramListResponse,
    ProgramResponse,
    WaiverTemplateListResponse,
    WaiverTemplateResponse,
)
from services.memberships_service.services import reference_service
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["reference"])


def _plan_response(plan: MembershipPlan) -> MembershipPlanResponse:
    return MembershipPlanResponse(
        id=plan.id,
        name=plan.name,
        slug=plan.slug,
        category=plan.category,
        program=plan.program.name if plan.program else None,
        price=plan.price,
        signup_fee=plan.signup_fee,
        frequency=plan.frequency,
        contract_length=plan.contract_length,
        access_level=plan.access_level,
        description=plan.description,
        is_trial=plan.is_trial,
        is_active=plan.is_active,
    )


@router.get("/programs/active", response_model=ProgramListResponse)
async def list_active_programs(
    auth: AuthContext = Depends(require_role(OrgRole.FRONT_DESK)),
    db: AsyncSession = Depends(get_async_db),
):
    programs = await reference_service.list_active_programs(db, org_id=auth.org_id)
    return ProgramListResponse(
        programs=[
            ProgramResponse(
                id=p.id, name=p.name, status="active" if p.is_active else "inactive"
            )
            for p in programs
        ]
    )


@router.get("/waivers/templates/active", response_model=WaiverTemplateListResponse)
async def list_active_waiver_templates(
    auth: AuthContext = Depends(require_role(OrgRole.FRONT_DESK)),
    db: AsyncSession = Depends(get_async_db),
):
    templates = await reference_service.list_active_waiver_templates(
        db, org_id=auth.org_id
    )
    return WaiverTemplateListResponse(
        templates=[WaiverTemplateResponse.model_validate(t) for t in templates]
    )


@router.get("/membership-plans", response_model=MembershipPlanListResponse)
async def list_membership_plans(
    auth: AuthContext = Depends(require_role(OrgRole.FRONT_DESK)),
    db: AsyncSession = Depends(get_async_db),
):
    """All plans, inactive included; callers filter on ``is_active``."""
    plans = await reference_service.list_membership_plans(db, org_id=auth.org_id)
    return MembershipPlanListResponse(plans=[_plan_response(p) for p in plans])
