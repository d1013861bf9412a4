"""RPC client the wizard and the member pages use to reach memberships_service."""

from typing import Any, Optional

import httpx

from libs.common.config import get_settings
from libs.common.errors import ErrorKind, ServiceError, classify_error_message
from libs.common.logging import get_logger
from libs.common.service_client import ServiceClient
from services.memberships_service.wizard.data import WizardData
from services.memberships_service.wizard.reference import (
    FetchResult,
    PlanOption,
    ProgramOption,
    WaiverTemplateOption,
)

logger = get_logger(__name__)


def service_error_from_response(exc: httpx.HTTPStatusError) -> ServiceError:
    """Rebuild the ``ServiceError`` a service sent as ``{"detail": {...}}``."""
    try:
        body = exc.response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None

    if isinstance(detail, dict):
        message = str(detail.get("message") or "")
        try:
            kind = ErrorKind(detail.get("code"))
        except ValueError:
            kind = classify_error_message(message)
        return ServiceError(kind, message)

    message = str(detail) if detail else exc.response.reason_phrase
    return ServiceError(classify_error_message(message), message)


class MembershipsClient(ServiceClient):
    """
    Listings return a ``FetchResult`` so the caller sees the failure and
    decides what to do about it. Mutations raise ``ServiceError``.
    """

    def __init__(self, base_url: Optional[str] = None, **kwargs: Any):
        super().__init__(base_url or get_settings().MEMBERSHIPS_SERVICE_URL, **kwargs)

    async def _fetch(self, path: str, key: str, model) -> FetchResult:
        try:
            body = await self.get(path)
            return FetchResult(value=[model.model_validate(item) for item in body[key]])
        except Exception as exc:
            logger.warning("Fetching %s failed: %s", path, exc)
            return FetchResult(error=exc)

    async def list_active_programs(self) -> FetchResult[list[ProgramOption]]:
        return await self._fetch("/programs/active", "programs", ProgramOption)

    async def list_active_waiver_templates(self) -> FetchResult[list[WaiverTemplateOption]]:
        return await self._fetch("/waivers/templates/active", "templates", WaiverTemplateOption)

    async def list_membership_plans(self) -> FetchResult[list[PlanOption]]:
        return await self._fetch("/membership-plans", "plans", PlanOption)

    async def _mutate(self, path: str, payload: dict[str, Any]) -> str:
        try:
            body = await self.post(path, json=payload)
        except httpx.HTTPStatusError as exc:
            raise service_error_from_response(exc) from exc
        return body["id"]

    async def create_membership(self, data: WizardData) -> str:
        """Create a membership plan from wizard data; returns the new plan id."""
        return await self._mutate("/membership-plans", data.to_payload())

    async def add_membership(self, member_id: str, membership_plan_id: str) -> str:
        return await self._mutate(
            "/member-memberships",
            {"member_id": member_id, "membership_plan_id": membership_plan_id},
        )

    async def change_membership(self, member_id: str, new_membership_plan_id: str) -> str:
        return await self._mutate(
            "/member-memberships/change",
            {"member_id": member_id, "new_membership_plan_id": new_membership_plan_id},
        )
