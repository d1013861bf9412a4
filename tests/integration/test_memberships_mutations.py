"""Integration tests for memberships_service mutation endpoints."""

import pytest
from services.memberships_service.models import MembershipPlan
from sqlalchemy import select
from tests.conftest import make_admin_user, override_auth
from tests.factories import (
    MemberFactory,
    MemberMembershipFactory,
    MembershipPlanFactory,
    ProgramFactory,
    WaiverTemplateFactory,
)


def _plan_body(program_id, waiver_id, **overrides):
    body = {
        "membership_name": "Month to Month (Gold)",
        "status": "active",
        "membership_type": "standard",
        "description": "No commitment",
        "program_id": program_id,
        "waiver_template_id": waiver_id,
        "sign_up_fee": 35,
        "charge_sign_up_fee": "at-registration",
        "monthly_fee": 170,
        "payment_frequency": "monthly",
        "membership_start_date": "same-as-registration",
        "custom_start_date": None,
        "pro_rate_first_payment": False,
        "contract_length": "month-to-month",
        "auto_renewal": "none",
        "cancellation_fee": None,
        "hold_limit_per_year": None,
        "classes_included": None,
        "punchcard_price": None,
    }
    body.update(overrides)
    return body


async def _seed_reference(db):
    program = ProgramFactory.create()
    waiver = WaiverTemplateFactory.create()
    db.add_all([program, waiver])
    await db.commit()
    return program, waiver


# ---------------------------------------------------------------------------
# POST /membership-plans
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_plan_requires_admin(memberships_client, db_session):
    program, waiver = await _seed_reference(db_session)

    response = await memberships_client.post(
        "/membership-plans", json=_plan_body(program.id, waiver.id)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_plan(memberships_client, db_session):
    from services.memberships_service.app.main import app

    program, waiver = await _seed_reference(db_session)

    with override_auth(app, make_admin_user()):
        response = await memberships_client.post(
            "/membership-plans", json=_plan_body(program.id, waiver.id)
        )

    assert response.status_code == 201, response.text
    plan_id = response.json()["id"]
    plan = (
        await db_session.execute(select(MembershipPlan).where(MembershipPlan.id == plan_id))
    ).scalar_one()
    assert plan.name == "Month to Month (Gold)"
    assert plan.slug == "month_to_month_gold"
    assert plan.price == 170


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_plan_unknown_program_is_tagged(memberships_client, db_session):
    from services.memberships_service.app.main import app

    _, waiver = await _seed_reference(db_session)

    with override_auth(app, make_admin_user()):
        response = await memberships_client.post(
            "/membership-plans", json=_plan_body("missing", waiver.id)
        )

    assert response.status_code == 404
    assert response.json() == {
        "detail": {"code": "not_found", "message": "Program not found"}
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_plan_standard_without_fee_rejected(memberships_client, db_session):
    from services.memberships_service.app.main import app

    program, waiver = await _seed_reference(db_session)

    with override_auth(app, make_admin_user()):
        response = await memberships_client.post(
            "/membership-plans", json=_plan_body(program.id, waiver.id, monthly_fee=None)
        )

    assert response.status_code == 422


# ---------------------------------------------------------------------------
# Member memberships
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_add_membership(memberships_client, db_session):
    member = MemberFactory.create()
    plan = MembershipPlanFactory.create()
    db_session.add_all([member, plan])
    await db_session.commit()

    response = await memberships_client.post(
        "/member-memberships",
        json={"member_id": member.id, "membership_plan_id": plan.id},
    )

    assert response.status_code == 201, response.text
    assert response.json()["id"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_add_membership_twice_conflicts(memberships_client, db_session):
    member = MemberFactory.create()
    plan = MembershipPlanFactory.create()
    db_session.add_all([member, plan])
    await db_session.commit()
    body = {"member_id": member.id, "membership_plan_id": plan.id}

    await memberships_client.post("/member-memberships", json=body)
    response = await memberships_client.post("/member-memberships", json=body)

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "already_member"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_change_membership(memberships_client, db_session):
    member = MemberFactory.create()
    old_plan = MembershipPlanFactory.create()
    new_plan = MembershipPlanFactory.create(name="Competition Team")
    db_session.add_all([member, old_plan, new_plan])
    await db_session.commit()
    db_session.add(MemberMembershipFactory.create(member.id, old_plan.id))
    await db_session.commit()

    response = await memberships_client.post(
        "/member-memberships/change",
        json={"member_id": member.id, "new_membership_plan_id": new_plan.id},
    )

    assert response.status_code == 200, response.text
    assert response.json()["id"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_change_membership_unknown_member(memberships_client):
    response = await memberships_client.post(
        "/member-memberships/change",
        json={"member_id": "nobody", "new_membership_plan_id": "plan"},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == {"code": "not_found", "message": "Member not found"}
