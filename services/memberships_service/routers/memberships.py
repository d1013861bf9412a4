"""Membership mutations. Failures come back as ``{"detail": {"code", "message"}}``."""

from fastapi import APIRouter, Depends, Request, status
from libs.auth.dependencies import require_role
from libs.auth.models import AuthContext, OrgRole
from libs.common.rate_limit import rpc_limit
from libs.db.session import get_async_db
from services.memberships_service.schemas import (
    AddMembershipRequest,
    ChangeMembershipRequest,
    IdResponse,
    MembershipPlanCreate,
)
from services.memberships_service.services import membership_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["memberships"])


@router.post(
    "/membership-plans",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
@rpc_limit
async def create_membership_plan(
    request: Request,
    payload: MembershipPlanCreate,
    auth: AuthContext = Depends(require_role(OrgRole.ADMIN)),
    db: AsyncSession = Depends(get_async_db),
):
    """Create a membership plan from the membership wizard."""
    plan = await membership_ops.create_membership_plan(
        db, org_id=auth.org_id, payload=payload
    )
    return IdResponse(id=plan.id)


@router.post(
    "/member-memberships",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
@rpc_limit
async def add_membership(
    request: Request,
    payload: AddMembershipRequest,
    auth: AuthContext = Depends(require_role(OrgRole.FRONT_DESK)),
    db: AsyncSession = Depends(get_async_db),
):
    membership = await membership_ops.add_membership(
        db,
        org_id=auth.org_id,
        member_id=payload.member_id,
        membership_plan_id=payload.membership_plan_id,
    )
    return IdResponse(id=membership.id)


@router.post("/member-memberships/change", response_model=IdResponse)
@rpc_limit
async def change_membership(
    request: Request,
    payload: ChangeMembershipRequest,
    auth: AuthContext = Depends(require_role(OrgRole.FRONT_DESK)),
    db: AsyncSession = Depends(get_async_db),
):
    """Move a member to another plan; the previous membership is kept as history."""
    membership = await membership_ops.change_membership(
        db,
        org_id=auth.org_id,
        member_id=payload.member_id,
        new_membership_plan_id=payload.new_membership_plan_id,
    )
    return IdResponse(id=membership.id)
