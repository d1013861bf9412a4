"""
Staff management through the identity provider.

Each operation returns a result object with ``success`` and, on failure, a
user-facing ``error``; provider failures are logged and translated, not
raised.
"""

from typing import Optional

from libs.auth.models import AuthUser, OrgRole
from libs.common.errors import ErrorKind, user_message_for
from libs.common.logging import get_logger
from services.staff_service.identity_client import IdentityProviderClient
from services.staff_service.schemas import (
    FetchRolesResult,
    InviteStaffRequest,
    InviteStaffResult,
    StaffRole,
    UpdateStaffRequest,
    UpdateStaffResult,
)

logger = get_logger(__name__)

NOT_IN_ORGANIZATION = "User is not authenticated or not part of an organization"
FETCH_ROLES_FAILED = "Failed to fetch roles. Please try again."
INVITE_FAILED = "Failed to send invitation. Please try again."
UPDATE_FAILED = "Failed to update staff member. Please try again."

INVITE_MESSAGES = {
    ErrorKind.ALREADY_MEMBER: "This email address is already a member of this organization.",
    ErrorKind.ALREADY_INVITED: "An invitation has already been sent to this email address.",
}

UPDATE_MESSAGES = {
    ErrorKind.NOT_FOUND: "Staff member not found.",
    ErrorKind.PERMISSION_DENIED: "You do not have permission to update this staff member.",
}


def _in_organization(user: AuthUser) -> bool:
    return bool(user.user_id and user.org_id)


def visible_roles(roles: list[StaffRole], org_role: Optional[str]) -> list[StaffRole]:
    """Never offer individual_member; only admins may hand out admin."""
    is_admin = org_role == OrgRole.ADMIN.value
    return [
        role
        for role in roles
        if role.key != OrgRole.INDIVIDUAL_MEMBER.value
        and (is_admin or role.key != OrgRole.ADMIN.value)
    ]


async def fetch_staff_roles(
    identity: IdentityProviderClient, *, user: AuthUser
) -> FetchRolesResult:
    if not _in_organization(user):
        return FetchRolesResult(success=False, error=NOT_IN_ORGANIZATION)
    try:
        raw_roles = await identity.list_organization_roles()
    except Exception as e:
        logger.error("Failed to fetch roles: %s", e)
        return FetchRolesResult(success=False, error=FETCH_ROLES_FAILED)

    roles = [
        StaffRole(
            id=r["id"],
            key=r["key"],
            name=r["name"],
            description=r.get("description") or "",
        )
        for r in raw_roles
    ]
    return FetchRolesResult(success=True, roles=visible_roles(roles, user.org_role))


async def invite_staff_member(
    identity: IdentityProviderClient, *, user: AuthUser, params: InviteStaffRequest
) -> InviteStaffResult:
    """Send an organization invitation; the provider emails the invitee."""
    if not _in_organization(user):
        return InviteStaffResult(success=False, error=NOT_IN_ORGANIZATION)
    try:
        invitation = await identity.create_organization_invitation(
            user.org_id,
            inviter_user_id=user.user_id,
            email_address=params.email_address,
            role=params.role_key,
            public_metadata={
                "invitedFirstName": params.first_name,
                "invitedLastName": params.last_name,
                "invitedPhone": params.phone,
            },
        )
    except Exception as e:
        logger.error("Failed to send invitation to %s: %s", params.email_address, e)
        return InviteStaffResult(
            success=False,
            error=user_message_for(e, fallback=INVITE_FAILED, messages=INVITE_MESSAGES),
        )

    logger.info(
        "Invitation %s sent to %s as %s",
        invitation.get("id"),
        params.email_address,
        params.role_key,
    )
    return InviteStaffResult(success=True, invitation_id=invitation.get("id"))


async def update_staff_member(
    identity: IdentityProviderClient,
    *,
    user: AuthUser,
    staff_user_id: str,
    params: UpdateStaffRequest,
) -> UpdateStaffResult:
    """Change a staff member's organization role, then their profile."""
    if not _in_organization(user):
        return UpdateStaffResult(success=False, error=NOT_IN_ORGANIZATION)
    try:
        await identity.update_organization_membership(
            user.org_id, staff_user_id, role=params.role_key
        )
        await identity.update_user(
            staff_user_id,
            first_name=params.first_name,
            last_name=params.last_name,
            public_metadata={"phone": params.phone},
        )
    except Exception as e:
        logger.error("Failed to update staff member %s: %s", staff_user_id, e)
        return UpdateStaffResult(
            success=False,
            error=user_message_for(e, fallback=UPDATE_FAILED, messages=UPDATE_MESSAGES),
        )

    logger.info("Staff member %s updated to %s", staff_user_id, params.role_key)
    return UpdateStaffResult(success=True)
