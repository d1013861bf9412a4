"""Membership mutations: creating plans and moving members between them."""

import re
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.common.errors import ErrorKind, ServiceError
from libs.common.logging import get_logger
from services.memberships_service.models import (
    BillingType,
    Member,
    MemberMembership,
    MemberMembershipStatus,
    MembershipPlan,
    MembershipStatus,
    MembershipType,
    MembershipWaiver,
    Program,
    WaiverTemplate,
)
from services.memberships_service.schemas import MembershipPlanCreate
from services.memberships_service.wizard.summary import (
    CONTRACT_LABELS,
    FREQUENCY_LABELS,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


def slugify(name: str) -> str:
    """'12 Month Commitment (Gold)' -> '12_month_commitment_gold'"""
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


def _access_level(payload: MembershipPlanCreate) -> str:
    if payload.membership_type == MembershipType.PUNCHCARD:
        noun = "Class" if payload.classes_included == 1 else "Classes"
        return f"{payload.classes_included} {noun} Total"
    return "Unlimited"


def _plan_price(payload: MembershipPlanCreate) -> float:
    if payload.membership_type == MembershipType.PUNCHCARD:
        return payload.punchcard_price or 0
    return payload.monthly_fee or 0


async def _get_program(db: AsyncSession, org_id: str, program_id: str) -> Program:
    result = await db.execute(
        select(Program).where(
            Program.id == program_id, Program.organization_id == org_id
        )
    )
    program = result.scalar_one_or_none()
    if program is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "Program not found")
    return program


async def _get_waiver_template(
    db: AsyncSession, org_id: str, template_id: str
) -> WaiverTemplate:
    result = await db.execute(
        select(WaiverTemplate).where(
            WaiverTemplate.id == template_id,
            WaiverTemplate.organization_id == org_id,
            WaiverTemplate.is_active.is_(True),
        )
    )
    template = result.scalar_one_or_none()
    if template is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "Waiver template not found")
    return template


async def _get_member(db: AsyncSession, org_id: str, member_id: str) -> Member:
    result = await db.execute(
        select(Member).where(Member.id == member_id, Member.organization_id == org_id)
    )
    member = result.scalar_one_or_none()
    if member is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "Member not found")
    return member


async def _get_active_plan(db: AsyncSession, org_id: str, plan_id: str) -> MembershipPlan:
    result = await db.execute(
        select(MembershipPlan).where(
            MembershipPlan.id == plan_id,
            MembershipPlan.organization_id == org_id,
            MembershipPlan.is_active.is_(True),
        )
    )
    plan = result.scalar_one_or_none()
    if plan is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "Membership plan not found")
    return plan


async def _current_membership(
    db: AsyncSession, member_id: str
) -> Optional[MemberMembership]:
    result = await db.execute(
        select(MemberMembership)
        .where(
            MemberMembership.member_id == member_id,
            MemberMembership.status == MemberMembershipStatus.ACTIVE,
        )
        .order_by(MemberMembership.start_date.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


def _billing_type(plan: MembershipPlan) -> BillingType:
    if plan.is_trial or plan.membership_type == MembershipType.PUNCHCARD:
        return BillingType.ONE_TIME
    return BillingType.AUTOPAY


async def create_membership_plan(
    db: AsyncSession, *, org_id: str, payload: MembershipPlanCreate
) -> MembershipPlan:
    """Create a plan from the wizard's data and attach its required waiver."""
    program = await _get_program(db, org_id, payload.program_id)
    template = await _get_waiver_template(db, org_id, payload.waiver_template_id)

    is_trial = payload.membership_type == MembershipType.TRIAL
    plan = MembershipPlan(
        organization_id=org_id,
        program_id=program.id,
        name=payload.membership_name,
        slug=slugify(payload.membership_name),
        category=program.name,
        description=payload.description or None,
        is_active=payload.status == MembershipStatus.ACTIVE,
        is_trial=is_trial,
        price=_plan_price(payload),
        signup_fee=payload.sign_up_fee or 0,
        frequency=FREQUENCY_LABELS[payload.payment_frequency],
        contract_length=CONTRACT_LABELS[payload.contract_length],
        access_level=_access_level(payload),
        membership_type=payload.membership_type,
        charge_signup_fee=payload.charge_sign_up_fee,
        payment_frequency=payload.payment_frequency,
        start_date_option=payload.membership_start_date,
        custom_start_date=payload.custom_start_date,
        pro_rate_first_payment=payload.pro_rate_first_payment,
        contract_term=payload.contract_length,
        auto_renewal=payload.auto_renewal,
        cancellation_fee=payload.cancellation_fee,
        hold_limit_per_year=payload.hold_limit_per_year,
        classes_included=(
            payload.classes_included
            if payload.membership_type == MembershipType.PUNCHCARD
            else None
        ),
    )
    plan.waivers.append(
        MembershipWaiver(waiver_template_id=template.id, is_required=True)
    )
    db.add(plan)
    await db.commit()
    await db.refresh(plan)
    logger.info(
        "Created membership plan %s (%s) for org %s",
        plan.id,
        payload.membership_name,
        org_id,
    )
    return plan


async def add_membership(
    db: AsyncSession, *, org_id: str, member_id: str, membership_plan_id: str
) -> MemberMembership:
    """Put a member on a plan."""
    member = await _get_member(db, org_id, member_id)
    plan = await _get_active_plan(db, org_id, membership_plan_id)

    current = await _current_membership(db, member.id)
    if current is not None and current.membership_plan_id == plan.id:
        raise ServiceError(
            ErrorKind.ALREADY_MEMBER, "Member is already a member of this plan"
        )

    membership = MemberMembership(
        member_id=member.id,
        membership_plan_id=plan.id,
        status=MemberMembershipStatus.ACTIVE,
        billing_type=_billing_type(plan),
        start_date=utc_now(),
    )
    db.add(membership)
    await db.commit()
    await db.refresh(membership)
    logger.info("Added member %s to plan %s", member_id, membership_plan_id)
    return membership


async def change_membership(
    db: AsyncSession, *, org_id: str, member_id: str, new_membership_plan_id: str
) -> MemberMembership:
    """
    Move a member from their current plan to another.

    The old membership is kept as history, marked converted and ended now.
    """
    member = await _get_member(db, org_id, member_id)
    current = await _current_membership(db, member.id)
    if current is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "Active membership not found")

    plan = await _get_active_plan(db, org_id, new_membership_plan_id)
    if current.membership_plan_id == plan.id:
        raise ServiceError(
            ErrorKind.ALREADY_MEMBER, "Member is already a member of this plan"
        )

    previous_plan_id = current.membership_plan_id
    now = utc_now()
    current.status = MemberMembershipStatus.CONVERTED
    current.end_date = now
    replacement = MemberMembership(
        member_id=member.id,
        membership_plan_id=plan.id,
        status=MemberMembershipStatus.ACTIVE,
        billing_type=_billing_type(plan),
        start_date=now,
    )
    db.add(replacement)
    await db.commit()
    await db.refresh(replacement)
    logger.info(
        "Changed member %s from plan %s to %s",
        member_id,
        previous_plan_id,
        new_membership_plan_id,
    )
    return replacement
