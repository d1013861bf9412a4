"""Unit tests for the identity/role boundary."""

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from libs.auth.dependencies import require_role
from libs.auth.models import AuthContext, OrgRole, role_satisfies
from tests.conftest import make_token


def _guarded_app(role: OrgRole) -> FastAPI:
    app = FastAPI()

    @app.get("/guarded")
    async def guarded(auth: AuthContext = Depends(require_role(role))):
        return auth.model_dump(mode="json")

    return app


async def _get(app, token=None):
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.get("/guarded", headers=headers)


# ---------------------------------------------------------------------------
# Hierarchy
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_role_hierarchy():
    assert role_satisfies("org:admin", OrgRole.FRONT_DESK) is True
    assert role_satisfies("org:academy_owner", OrgRole.ACADEMY_OWNER) is True
    assert role_satisfies("org:front_desk", OrgRole.ACADEMY_OWNER) is False
    assert role_satisfies("org:individual_member", OrgRole.MEMBER) is False
    assert role_satisfies("org:unknown", OrgRole.INDIVIDUAL_MEMBER) is False
    assert role_satisfies(None, OrgRole.INDIVIDUAL_MEMBER) is False


# ---------------------------------------------------------------------------
# require_role
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_missing_token_is_unauthorized():
    response = await _get(_guarded_app(OrgRole.FRONT_DESK))

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_bad_token_is_unauthorized():
    response = await _get(_guarded_app(OrgRole.FRONT_DESK), token="not-a-jwt")

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.unit
async def test_no_organization_is_unauthorized_even_with_role():
    token = make_token({"sub": "user_1", "org_role": "org:admin"})

    response = await _get(_guarded_app(OrgRole.FRONT_DESK), token=token)

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.unit
async def test_insufficient_role_is_forbidden():
    token = make_token({"sub": "user_1", "org_id": "org_1", "org_role": "org:member"})

    response = await _get(_guarded_app(OrgRole.FRONT_DESK), token=token)

    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_higher_role_gets_required_role_in_context():
    token = make_token({"sub": "user_1", "org_id": "org_1", "org_role": "org:admin"})

    response = await _get(_guarded_app(OrgRole.FRONT_DESK), token=token)

    assert response.status_code == 200
    assert response.json() == {
        "user_id": "user_1",
        "org_id": "org_1",
        "role": "org:front_desk",
    }
