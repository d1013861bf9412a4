"""Staff roles, invitations and updates."""

from fastapi import APIRouter, Depends, Request
from libs.auth.dependencies import guard_auth
from libs.auth.models import AuthUser
from libs.common.rate_limit import rpc_limit
from services.staff_service.identity_client import (
    IdentityProviderClient,
    get_identity_client,
)
from services.staff_service.schemas import (
    FetchRolesResult,
    InviteStaffRequest,
    InviteStaffResult,
    UpdateStaffRequest,
    UpdateStaffResult,
)
from services.staff_service.services import staff_ops

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("/roles", response_model=FetchRolesResult)
async def list_staff_roles(
    current_user: AuthUser = Depends(guard_auth),
    identity: IdentityProviderClient = Depends(get_identity_client),
):
    """Roles the caller may assign to staff."""
    return await staff_ops.fetch_staff_roles(identity, user=current_user)


@router.post("/invitations", response_model=InviteStaffResult)
@rpc_limit
async def invite_staff_member(
    request: Request,
    payload: InviteStaffRequest,
    current_user: AuthUser = Depends(guard_auth),
    identity: IdentityProviderClient = Depends(get_identity_client),
):
    return await staff_ops.invite_staff_member(
        identity, user=current_user, params=payload
    )


@router.patch("/{user_id}", response_model=UpdateStaffResult)
@rpc_limit
async def update_staff_member(
    request: Request,
    user_id: str,
    payload: UpdateStaffRequest,
    current_user: AuthUser = Depends(guard_auth),
    identity: IdentityProviderClient = Depends(get_identity_client),
):
    return await staff_ops.update_staff_member(
        identity, user=current_user, staff_user_id=user_id, params=payload
    )
