"""Read-only listings that feed the dashboard's pickers."""

from typing import Sequence

from services.memberships_service.models import MembershipPlan, Program, WaiverTemplate
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload


async def list_active_programs(db: AsyncSession, *, org_id: str) -> Sequence[Program]:
    query = (
        select(Program)
        .where(Program.organization_id == org_id, Program.is_active.is_(True))
        .order_by(Program.sort_order, Program.name)
    )
    result = await db.execute(query)
    return result.scalars().all()


async def list_active_waiver_templates(
    db: AsyncSession, *, org_id: str
) -> Sequence[WaiverTemplate]:
    """Current templates only; archived versions have a ``parent_id``."""
    query = (
        select(WaiverTemplate)
        .where(
            WaiverTemplate.organization_id == org_id,
            WaiverTemplate.is_active.is_(True),
            WaiverTemplate.parent_id.is_(None),
        )
        .order_by(WaiverTemplate.sort_order, WaiverTemplate.name)
    )
    result = await db.execute(query)
    return result.scalars().all()


async def list_membership_plans(db: AsyncSession, *, org_id: str) -> Sequence[MembershipPlan]:
    """Every plan in the organization, inactive ones included."""
    query = (
        select(MembershipPlan)
        .where(MembershipPlan.organization_id == org_id)
        .options(selectinload(MembershipPlan.program))
        .order_by(MembershipPlan.created_at, MembershipPlan.name)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    return result.scalars().all()
