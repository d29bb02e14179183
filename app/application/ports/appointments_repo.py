from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from ...constants import TENANT_DATE_KEY_ATTRIBUTE


# item attribute -> dataclass field
_ITEM_FIELDS = {
    "PK": "pk",
    "SK": "sk",
    "tenantId": "tenant_id",
    TENANT_DATE_KEY_ATTRIBUTE: "tenant_date_key",
    "customerEmail": "customer_email",
    "customerName": "customer_name",
    "phone": "phone",
    "startTime": "start_time",
    "endTime": "end_time",
    "appointmentDate": "appointment_date",
    "status": "status",
    "notes": "notes",
    "location": "location",
}


@dataclass
class AppointmentRecord:
    pk: str
    sk: str
    tenant_id: Optional[str] = None
    tenant_date_key: Optional[str] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    phone: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    appointment_date: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None

    @property
    def composite_key(self) -> str:
        return f"{self.pk}#{self.sk}"

    def to_item(self) -> Dict[str, Any]:
        item: Dict[str, Any] = {}
        for attr, field_name in _ITEM_FIELDS.items():
            value = getattr(self, field_name)
            if value is not None:
                item[attr] = value
        return item

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "AppointmentRecord":
        # Records written by an update on a missing key only carry the patched fields
        values = {field_name: item.get(attr) for attr, field_name in _ITEM_FIELDS.items()}
        return cls(**values)


@dataclass
class AppointmentPatch:
    end_time: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None


class AppointmentsRepository(Protocol):
    def create(self, record: AppointmentRecord) -> Dict[str, Any]:
        ...

    def update(self, tenant_id: str, customer_email: str, start_time: str, patch: AppointmentPatch) -> AppointmentRecord:
        ...

    def delete(self, tenant_id: str, customer_email: str, start_time: str) -> Dict[str, Any]:
        ...

    def query_by_date(self, tenant_id: str, date: str) -> List[AppointmentRecord]:
        ...
