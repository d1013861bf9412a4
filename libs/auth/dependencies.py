from typing import Annotated, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from libs.auth.models import AuthContext, AuthUser, OrgRole, role_satisfies
from libs.common.config import get_settings
from libs.common.logging import get_logger

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthUser:
    """
    Validate the session JWT and return the authenticated user.
    """
    if token is None:
        raise _unauthorized()

    settings = get_settings()
    try:
        payload = jwt.decode(
            token.credentials,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            options={"verify_aud": False},
        )
        return AuthUser(**payload)
    except (JWTError, ValidationError):
        raise _unauthorized()


async def guard_auth(
    current_user: Annotated[AuthUser, Depends(get_current_user)],
) -> AuthUser:
    """
    Require a signed-in user acting within an organization.
    """
    if not current_user.user_id or not current_user.org_id:
        raise _unauthorized()
    return current_user


def require_role(role: OrgRole) -> Callable:
    """
    Build a dependency that admits callers whose organization role ranks at
    or above ``role``. Authentication is checked first, so an anonymous caller
    gets 401 rather than 403.
    """

    async def _guard(
        current_user: Annotated[AuthUser, Depends(guard_auth)],
    ) -> AuthContext:
        if not role_satisfies(current_user.org_role, role):
            logger.warning(
                "User %s with role %s denied %s access",
                current_user.user_id,
                current_user.org_role,
                role.value,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return AuthContext(
            user_id=current_user.user_id,
            org_id=current_user.org_id,
            role=role,
        )

    return _guard
