"""Reusable async HTTP client for calls between academy services.

Cross-service calls go through ``ServiceClient`` instead of importing another
service's models or querying its tables directly.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from libs.common.config import get_settings
from libs.common.logging import get_logger, get_request_id

logger = get_logger(__name__)


class ServiceClient:
    """Base client for making HTTP requests to a service.

    ``transport`` is passed straight to ``httpx.AsyncClient``; tests use it to
    route requests to an in-process ASGI app.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        calling_service: Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout if timeout is not None else get_settings().SERVICE_TIMEOUT
        self.transport = transport
        self.calling_service = calling_service

    def _headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        merged: Dict[str, str] = {}
        if self.token:
            merged["Authorization"] = f"Bearer {self.token}"
        request_id = get_request_id()
        if request_id:
            merged["X-Request-ID"] = request_id
        if self.calling_service:
            merged["X-Caller-Service"] = self.calling_service
        merged.update(headers or {})
        return merged

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and raise ``httpx.HTTPStatusError`` on 4xx/5xx."""
        headers = self._headers(kwargs.pop("headers", None))
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.request(method, path, headers=headers, **kwargs)
        response.raise_for_status()
        return response

    async def get(self, path: str, params: Optional[Dict] = None) -> Any:
        """Make GET request to service."""
        response = await self._request("GET", path, params=params)
        return response.json()

    async def post(self, path: str, json: Any = None) -> Any:
        """Make POST request to service."""
        response = await self._request("POST", path, json=json)
        return response.json()

    async def patch(self, path: str, json: Any = None) -> Any:
        """Make PATCH request to service."""
        response = await self._request("PATCH", path, json=json)
        return response.json()
