import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class OrgRole(str, enum.Enum):
    """Organization roles issued by the identity provider."""

    ADMIN = "org:admin"
    ACADEMY_OWNER = "org:academy_owner"
    FRONT_DESK = "org:front_desk"
    MEMBER = "org:member"
    INDIVIDUAL_MEMBER = "org:individual_member"


# Highest privilege first. A role satisfies every role listed after it.
ROLE_HIERARCHY: tuple[OrgRole, ...] = (
    OrgRole.ADMIN,
    OrgRole.ACADEMY_OWNER,
    OrgRole.FRONT_DESK,
    OrgRole.MEMBER,
    OrgRole.INDIVIDUAL_MEMBER,
)


def role_satisfies(actual: Optional[str], required: OrgRole) -> bool:
    """True if ``actual`` ranks at or above ``required``."""
    try:
        actual_role = OrgRole(actual)
    except ValueError:
        return False
    return ROLE_HIERARCHY.index(actual_role) <= ROLE_HIERARCHY.index(required)


class AuthUser(BaseModel):
    """
    Represents an authenticated user from the identity provider's session token.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="sub")
    email: Optional[EmailStr] = None
    org_id: Optional[str] = None
    org_role: Optional[str] = None


class AuthContext(BaseModel):
    """What a role guard hands to the handler it protects."""

    user_id: str
    org_id: str
    role: OrgRole
