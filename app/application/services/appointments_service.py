import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...constants import AppointmentStatus, DATE_FORMAT, ERROR_MESSAGES, TIMESTAMP_FORMAT
from ...exceptions import BadRequestError
from ...schemas.appointments.appointment import AppointmentCreate, AppointmentDelete, AppointmentEdit
from ..keys import KEY_DELIMITER, appointment_date_of, build_primary_key, build_tenant_date_key
from ..ports.appointments_repo import AppointmentPatch, AppointmentRecord, AppointmentsRepository

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@#]+@[^\s@#]+\.[^\s@#]+$")
VALID_STATUSES = [s.value for s in AppointmentStatus]


def require_tenant(tenant_id: Optional[str]) -> str:
    if not tenant_id or not tenant_id.strip():
        raise BadRequestError(ERROR_MESSAGES["MISSING_TENANT_ID"])
    # "#" separates key segments, so it cannot appear inside one
    if KEY_DELIMITER in tenant_id:
        raise BadRequestError(ERROR_MESSAGES["INVALID_TENANT_ID"])
    return tenant_id


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _parse_timestamp(value: str) -> datetime:
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        raise BadRequestError(ERROR_MESSAGES["INVALID_TIMESTAMP"])


def _check_key_email(email: str) -> None:
    if KEY_DELIMITER in email:
        raise BadRequestError(ERROR_MESSAGES["INVALID_EMAIL"])


def _check_status(status: str) -> None:
    if status not in VALID_STATUSES:
        raise BadRequestError(ERROR_MESSAGES["INVALID_STATUS"])


@dataclass
class AppointmentsService:
    repo: AppointmentsRepository

    def create(self, tenant_id: str, data: AppointmentCreate) -> Dict[str, Any]:
        require_tenant(tenant_id)
        required = [data.customerEmail, data.customerName, data.phone, data.startTime, data.endTime, data.status, data.notes]
        if any(_blank(v) for v in required):
            raise BadRequestError(ERROR_MESSAGES["MISSING_REQUIRED_FIELDS"])
        if not EMAIL_PATTERN.match(data.customerEmail):
            raise BadRequestError(ERROR_MESSAGES["INVALID_EMAIL"])
        _check_status(data.status)
        if _parse_timestamp(data.endTime) <= _parse_timestamp(data.startTime):
            raise BadRequestError(ERROR_MESSAGES["END_BEFORE_START"])

        appointment_date = appointment_date_of(data.startTime)
        key = build_primary_key(tenant_id, data.customerEmail, data.startTime)
        record = AppointmentRecord(
            pk=key["PK"],
            sk=key["SK"],
            tenant_id=tenant_id,
            tenant_date_key=build_tenant_date_key(tenant_id, appointment_date),
            customer_email=data.customerEmail,
            customer_name=data.customerName,
            phone=data.phone,
            start_time=data.startTime,
            end_time=data.endTime,
            appointment_date=appointment_date,
            status=data.status,
            notes=data.notes,
            location=data.location,
        )
        return self.repo.create(record)

    def edit(self, tenant_id: str, data: AppointmentEdit) -> AppointmentRecord:
        require_tenant(tenant_id)
        if _blank(data.customerEmail) or _blank(data.startTime):
            raise BadRequestError(ERROR_MESSAGES["MISSING_REQUIRED_FIELDS"])
        _check_key_email(data.customerEmail)
        start = _parse_timestamp(data.startTime)
        if data.status:
            _check_status(data.status)
        if data.endTime is not None and _parse_timestamp(data.endTime) <= start:
            raise BadRequestError(ERROR_MESSAGES["END_BEFORE_START"])

        patch = AppointmentPatch(
            end_time=data.endTime,
            status=data.status,
            notes=data.notes,
            location=data.location,
        )
        return self.repo.update(tenant_id, data.customerEmail, data.startTime, patch)

    def delete(self, tenant_id: str, data: AppointmentDelete) -> Dict[str, Any]:
        require_tenant(tenant_id)
        if _blank(data.customerEmail) or _blank(data.startTime):
            raise BadRequestError(ERROR_MESSAGES["MISSING_REQUIRED_FIELDS"])
        _check_key_email(data.customerEmail)
        return self.repo.delete(tenant_id, data.customerEmail, data.startTime)

    def get_by_date(self, tenant_id: str, date: str) -> List[AppointmentRecord]:
        require_tenant(tenant_id)
        try:
            datetime.strptime(date, DATE_FORMAT)
        except (TypeError, ValueError):
            raise BadRequestError(ERROR_MESSAGES["INVALID_DATE"])
        return self.repo.query_by_date(tenant_id, date)
