"""Drive the membership wizard against the memberships app in-process.

The wizard's RPC client is pointed at the ASGI app through its transport, so
these tests cover reference loading, submission and error translation over
real HTTP round trips.
"""

import httpx
import pytest
from libs.auth.dependencies import get_current_user
from services.memberships_service.models import MembershipPlan
from services.memberships_service.wizard import MembershipWizard, WizardStep, submit_membership
from services.memberships_service.wizard.client import MembershipsClient
from services.memberships_service.wizard.reference import FALLBACK_PLANS, ReferenceDataLoader
from sqlalchemy import select
from tests.conftest import make_admin_user
from tests.factories import MembershipPlanFactory, ProgramFactory, WaiverTemplateFactory


@pytest.fixture
def wizard_client(memberships_client):
    """RPC client routed into the memberships app, signed in as an admin."""
    from services.memberships_service.app.main import app

    app.dependency_overrides[get_current_user] = lambda: make_admin_user()
    return MembershipsClient("http://memberships", transport=httpx.ASGITransport(app=app))


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_walk_wizard_and_create_membership(wizard_client, db_session):
    program = ProgramFactory.create(name="Adult Brazilian Jiu-jitsu")
    waiver = WaiverTemplateFactory.create(name="Adult Waiver", version=2)
    db_session.add_all([program, waiver])
    await db_session.commit()

    loader = ReferenceDataLoader(wizard_client)
    wizard = MembershipWizard()

    wizard.update_data(membership_name="12 Month Commitment (Gold)")
    assert wizard.can_proceed()
    wizard.next_step()

    programs = await loader.load_programs()
    waiver_options = await loader.load_waiver_options()
    assert waiver_options == [(waiver.id, "Adult Waiver (v2)")]
    wizard.update_data(
        associated_program_id=programs[0].id,
        associated_program_name=programs[0].name,
        associated_waiver_id=waiver_options[0][0],
        associated_waiver_name=waiver_options[0][1],
    )
    assert wizard.can_proceed()
    wizard.next_step()

    wizard.update_data(monthly_fee=150, sign_up_fee=35)
    assert wizard.can_proceed()
    wizard.next_step()

    wizard.update_data(contract_length="12-months", auto_renewal="month-to-month")
    assert wizard.step == WizardStep.CONTRACT_TERMS

    created = await submit_membership(wizard, wizard_client)

    assert created is not None, wizard.error
    assert created.summary.contract == "12 Months"
    assert wizard.step == WizardStep.BASICS

    plan = (
        await db_session.execute(select(MembershipPlan).where(MembershipPlan.id == created.id))
    ).scalar_one()
    assert plan.program_id == program.id
    assert plan.auto_renewal == "month-to-month"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_active_plans_come_from_service(wizard_client, db_session):
    db_session.add(MembershipPlanFactory.create(name="Gold"))
    await db_session.commit()

    plans = await ReferenceDataLoader(wizard_client).load_membership_plans()

    assert [p.name for p in plans] == ["Gold"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_no_plans_falls_back(wizard_client):
    plans = await ReferenceDataLoader(wizard_client).load_membership_plans()

    assert plans == list(FALLBACK_PLANS)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_deleted_program_is_translated(wizard_client, db_session):
    waiver = WaiverTemplateFactory.create()
    db_session.add(waiver)
    await db_session.commit()

    wizard = MembershipWizard()
    wizard.update_data(
        membership_name="Gold",
        associated_program_id="deleted-program",
        associated_waiver_id=waiver.id,
        monthly_fee=100,
    )

    assert await submit_membership(wizard, wizard_client) is None

    assert wizard.error == "The selected program or waiver is no longer available."
    assert wizard.data.membership_name == "Gold"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_forbidden_role_gets_generic_message(wizard_client, db_session):
    from services.memberships_service.app.main import app
    from tests.conftest import make_user

    program = ProgramFactory.create()
    waiver = WaiverTemplateFactory.create()
    db_session.add_all([program, waiver])
    await db_session.commit()
    app.dependency_overrides[get_current_user] = lambda: make_user()

    wizard = MembershipWizard()
    wizard.update_data(
        membership_name="Gold",
        associated_program_id=program.id,
        associated_waiver_id=waiver.id,
        monthly_fee=100,
    )

    assert await submit_membership(wizard, wizard_client) is None

    assert wizard.error == "Failed to create membership. Please try again."


async def _seed_and_fill(db, **fields) -> MembershipWizard:
    program = ProgramFactory.create()
    waiver = WaiverTemplateFactory.create()
    db.add_all([program, waiver])
    await db.commit()

    wizard = MembershipWizard()
    wizard.update_data(
        membership_name="Gold",
        associated_program_id=program.id,
        associated_waiver_id=waiver.id,
        **fields,
    )
    return wizard


@pytest.mark.asyncio
@pytest.mark.integration
async def test_trial_with_negative_fee_is_created_free(wizard_client, db_session):
    wizard = await _seed_and_fill(db_session, membership_type="trial", monthly_fee=-5)

    created = await submit_membership(wizard, wizard_client)

    assert created is not None, wizard.error
    plan = (
        await db_session.execute(select(MembershipPlan).where(MembershipPlan.id == created.id))
    ).scalar_one()
    assert plan.price == 0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_custom_start_without_date_is_created(wizard_client, db_session):
    wizard = await _seed_and_fill(
        db_session, monthly_fee=100, membership_start_date="custom", custom_start_date=""
    )

    created = await submit_membership(wizard, wizard_client)

    assert created is not None, wizard.error
    plan = (
        await db_session.execute(select(MembershipPlan).where(MembershipPlan.id == created.id))
    ).scalar_one()
    assert plan.custom_start_date is None
