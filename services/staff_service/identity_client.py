"""Client for the identity provider's backend API (organizations, users, roles).

The provider reports failures as ``{"errors": [{"message", "long_message",
"code"}]}``; they are raised as ``IdentityProviderError`` carrying the most
descriptive message, since callers translate failures by message text.
"""

from typing import Any, Dict, List, Optional

import httpx

from libs.common.config import get_settings
from libs.common.logging import get_logger
from libs.common.service_client import ServiceClient

logger = get_logger(__name__)


class IdentityProviderError(Exception):
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


def _error_from_response(exc: httpx.HTTPStatusError) -> IdentityProviderError:
    message = exc.response.reason_phrase or "Identity provider request failed"
    code = None
    try:
        body = exc.response.json()
    except ValueError:
        body = None
    errors = body.get("errors") if isinstance(body, dict) else None
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        first = errors[0]
        message = first.get("long_message") or first.get("message") or message
        code = first.get("code")
    return IdentityProviderError(message, status_code=exc.response.status_code, code=code)


class IdentityProviderClient(ServiceClient):
    def __init__(self, base_url: Optional[str] = None, **kwargs: Any):
        settings = get_settings()
        kwargs.setdefault("token", settings.IDENTITY_PROVIDER_SECRET_KEY)
        super().__init__(base_url or settings.IDENTITY_PROVIDER_URL, **kwargs)

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._request(method, path, **kwargs)
        except httpx.HTTPStatusError as exc:
            raise _error_from_response(exc) from exc
        return response.json()

    async def list_organization_roles(self) -> List[Dict[str, Any]]:
        body = await self._call("GET", "/organization_roles", params={"limit": 100})
        return body.get("data", [])

    async def create_organization_invitation(
        self,
        organization_id: str,
        *,
        inviter_user_id: str,
        email_address: str,
        role: str,
        public_metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self._call(
            "POST",
            f"/organizations/{organization_id}/invitations",
            json={
                "inviter_user_id": inviter_user_id,
                "email_address": email_address,
                "role": role,
                "public_metadata": public_metadata or {},
            },
        )

    async def update_organization_membership(
        self, organization_id: str, user_id: str, *, role: str
    ) -> Dict[str, Any]:
        return await self._call(
            "PATCH",
            f"/organizations/{organization_id}/memberships/{user_id}",
            json={"role": role},
        )

    async def update_user(
        self,
        user_id: str,
        *,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        public_metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if first_name is not None:
            body["first_name"] = first_name
        if last_name is not None:
            body["last_name"] = last_name
        if public_metadata is not None:
            body["public_metadata"] = public_metadata
        return await self._call("PATCH", f"/users/{user_id}", json=body)


def get_identity_client() -> IdentityProviderClient:
    """FastAPI dependency; overridden in tests."""
    return IdentityProviderClient(calling_service="staff")
