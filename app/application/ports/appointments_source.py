from typing import List, Protocol

from .appointments_repo import AppointmentRecord


class AppointmentsByDateSource(Protocol):
    """Anything that can answer the single-day query asynchronously."""

    async def get_by_date(self, tenant_id: str, date: str) -> List[AppointmentRecord]:
        ...
