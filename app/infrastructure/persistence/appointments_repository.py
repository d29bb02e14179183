import logging
from typing import Any, Dict, List

from ...application.keys import build_primary_key, build_tenant_date_key
from ...application.ports.appointments_repo import (
    AppointmentPatch,
    AppointmentRecord,
    AppointmentsRepository,
)
from ...application.ports.storage_client import StorageClient
from ...constants import AppointmentStatus, ERROR_MESSAGES
from ...exceptions import BadRequestError

logger = logging.getLogger(__name__)


class AppointmentsRecordStore(AppointmentsRepository):
    """Single-table appointment persistence on top of an injected storage client.

    Writes are last-writer-wins: create overwrites an existing record at the
    same key and update does not check that the key exists.
    """

    def __init__(self, client: StorageClient, table_name: str, date_index_name: str):
        self.client = client
        self.table_name = table_name
        self.date_index_name = date_index_name

    def _require_tenant(self, tenant_id: str) -> None:
        if not tenant_id or not str(tenant_id).strip():
            raise BadRequestError(ERROR_MESSAGES["MISSING_TENANT_ID"])

    def create(self, record: AppointmentRecord) -> Dict[str, Any]:
        self._require_tenant(record.tenant_id)
        logger.info(f"Putting appointment {record.composite_key} into {self.table_name}")
        return self.client.put(self.table_name, record.to_item())

    def update(self, tenant_id: str, customer_email: str, start_time: str, patch: AppointmentPatch) -> AppointmentRecord:
        self._require_tenant(tenant_id)
        key = build_primary_key(tenant_id, customer_email, start_time)
        fields: Dict[str, Any] = {"status": patch.status or AppointmentStatus.PENDING.value}
        if patch.end_time is not None:
            fields["endTime"] = patch.end_time
        if patch.notes is not None:
            fields["notes"] = patch.notes
        if patch.location is not None:
            fields["location"] = patch.location
        logger.info(f"Updating appointment {key['PK']}#{key['SK']} fields={sorted(fields)}")
        attributes = self.client.update(self.table_name, key, fields)
        return AppointmentRecord.from_item(attributes)

    def delete(self, tenant_id: str, customer_email: str, start_time: str) -> Dict[str, Any]:
        self._require_tenant(tenant_id)
        key = build_primary_key(tenant_id, customer_email, start_time)
        logger.info(f"Deleting appointment {key['PK']}#{key['SK']}")
        return self.client.delete(self.table_name, key)

    def query_by_date(self, tenant_id: str, date: str) -> List[AppointmentRecord]:
        self._require_tenant(tenant_id)
        partition_value = build_tenant_date_key(tenant_id, date)
        items = self.client.query(self.table_name, self.date_index_name, partition_value)
        ordered = sorted(items, key=lambda item: item.get("SK") or "")
        return [AppointmentRecord.from_item(item) for item in ordered]
