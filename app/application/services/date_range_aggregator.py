"""Multi-day appointment retrieval composed from single-day queries.

The store only answers "appointments for tenant T on day D", so a window is
fetched as one concurrent query per calendar day. The result is best effort:
a day whose query fails contributes nothing and the remaining days are still
returned. Callers that need to know which days failed use `query_dates`.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from ...constants import DATE_FORMAT, ERROR_MESSAGES
from ...exceptions import BadRequestError
from ..ports.appointments_repo import AppointmentRecord
from ..ports.appointments_source import AppointmentsByDateSource
from .appointments_service import AppointmentsService, require_tenant

logger = logging.getLogger(__name__)


def generate_date_range(start_date: str, end_date: str, max_days: Optional[int] = None) -> List[str]:
    """Every YYYY-MM-DD from start_date to end_date inclusive; empty if start is after end.

    Windows longer than `max_days` are rejected before any date is built.
    """
    try:
        start = datetime.strptime(start_date, DATE_FORMAT).date()
        end = datetime.strptime(end_date, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise BadRequestError(ERROR_MESSAGES["INVALID_DATE"])
    span = (end - start).days + 1
    if max_days is not None and span > max_days:
        raise BadRequestError(ERROR_MESSAGES["DATE_RANGE_TOO_LARGE"])
    return [(start + timedelta(days=offset)).strftime(DATE_FORMAT) for offset in range(span)]


def dedupe_records(records: Iterable[AppointmentRecord]) -> List[AppointmentRecord]:
    """Drop repeated PK+SK pairs, keeping the first occurrence."""
    seen = set()
    unique = []
    for record in records:
        key = record.composite_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


@dataclass
class DateQueryResult:
    date: str
    records: List[AppointmentRecord] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ServiceDateSource(AppointmentsByDateSource):
    """Runs the synchronous service query path on a worker thread."""
    service: AppointmentsService

    async def get_by_date(self, tenant_id: str, date: str) -> List[AppointmentRecord]:
        return await asyncio.to_thread(self.service.get_by_date, tenant_id, date)


@dataclass
class DateRangeAggregator:
    source: AppointmentsByDateSource
    max_range_days: Optional[int] = None

    async def _query(self, tenant_id: str, date: str) -> DateQueryResult:
        try:
            records = await self.source.get_by_date(tenant_id, date)
        except Exception as e:
            logger.warning(f"Appointment query for tenant {tenant_id} on {date} failed: {e}")
            return DateQueryResult(date=date, error=e)
        return DateQueryResult(date=date, records=list(records))

    async def query_dates(self, tenant_id: str, dates: List[str]) -> List[DateQueryResult]:
        """One settled result per date, in the order of `dates`."""
        require_tenant(tenant_id)
        return list(await asyncio.gather(*(self._query(tenant_id, d) for d in dates)))

    async def get_appointments_for_date_range(self, tenant_id: str, start_date: str, end_date: str) -> List[AppointmentRecord]:
        require_tenant(tenant_id)
        dates = generate_date_range(start_date, end_date, self.max_range_days)
        results = await self.query_dates(tenant_id, dates)
        failed = [r.date for r in results if not r.ok]
        if failed:
            logger.warning(f"{len(failed)} of {len(dates)} date queries failed for tenant {tenant_id}; returning partial results")
        return dedupe_records(record for r in results if r.ok for record in r.records)
