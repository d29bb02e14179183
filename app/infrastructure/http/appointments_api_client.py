import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from ...application.ports.appointments_repo import AppointmentRecord
from ...application.ports.appointments_source import AppointmentsByDateSource

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


class AppointmentsApiError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class AppointmentsApiClient(AppointmentsByDateSource):
    """Async client for a deployed appointments API.

    Pass a shared `aiohttp.ClientSession` when issuing many calls (the date
    range aggregator does); otherwise a session is opened per request.
    """

    def __init__(self, base_url: str, session: Optional[aiohttp.ClientSession] = None, timeout_seconds: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def _url(self, tenant_id: str, *parts: str) -> str:
        path = "/".join(quote(p, safe="") for p in ("tenants", tenant_id, "appointments") + parts)
        return f"{self.base_url}/{path}"

    async def _handle_response(self, response) -> Dict[str, Any]:
        try:
            body = await response.json(content_type=None) or {}
        except ValueError:
            body = {}
        if response.status >= 400:
            message = body.get("message") or DEFAULT_ERROR_MESSAGE
            logger.error(f"Appointments API returned {response.status}: {message}")
            raise AppointmentsApiError(message, status=response.status)
        return body

    async def _request(self, method: str, url: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = payload
        if self.session is not None:
            async with self.session.request(method, url, **kwargs) as response:
                return await self._handle_response(response)
        async with aiohttp.ClientSession() as session:
            async with session.request(method, url, **kwargs) as response:
                return await self._handle_response(response)

    async def get_appointments_by_date(self, tenant_id: str, date: str) -> Dict[str, Any]:
        return await self._request("GET", self._url(tenant_id, date))

    async def create_appointment(self, tenant_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", self._url(tenant_id), data)

    async def edit_appointment(self, tenant_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", self._url(tenant_id), data)

    async def delete_appointment(self, tenant_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("DELETE", self._url(tenant_id), data)

    async def get_by_date(self, tenant_id: str, date: str) -> List[AppointmentRecord]:
        body = await self.get_appointments_by_date(tenant_id, date)
        items = (body.get("data") or {}).get("Items") or []
        return [AppointmentRecord.from_item(item) for item in items]
