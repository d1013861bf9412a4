from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser, OrgRole
from libs.common.config import get_settings

TEST_ORG_ID = "org_test"


def make_user(
    user_id: str = "user_front_desk",
    role: Optional[OrgRole] = OrgRole.FRONT_DESK,
    org_id: Optional[str] = TEST_ORG_ID,
    email: str = "staff@example.com",
) -> AuthUser:
    return AuthUser(
        user_id=user_id,
        email=email,
        org_id=org_id,
        org_role=role.value if role else None,
    )


def make_admin_user(**kwargs) -> AuthUser:
    kwargs.setdefault("user_id", "user_admin")
    return make_user(role=OrgRole.ADMIN, **kwargs)


@contextmanager
def override_auth(app, user: AuthUser):
    """Temporarily sign ``user`` in on ``app``."""
    previous = app.dependency_overrides.get(get_current_user)
    app.dependency_overrides[get_current_user] = lambda: user
    try:
        yield user
    finally:
        if previous is None:
            app.dependency_overrides.pop(get_current_user, None)
        else:
            app.dependency_overrides[get_current_user] = previous


def make_token(claims: dict, *, expires_in: int = 3600) -> str:
    """Sign a session token the way the identity provider would."""
    settings = get_settings()
    payload = {
        **claims,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)
