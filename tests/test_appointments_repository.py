import pytest

from app.application.ports.appointments_repo import AppointmentPatch, AppointmentRecord
from app.exceptions import BadRequestError
from app.infrastructure.persistence.appointments_repository import AppointmentsRecordStore


def record(start_time: str, email: str = "a@x.com", tenant: str = "t1") -> AppointmentRecord:
    return AppointmentRecord(
        pk=f"TENANT#{tenant}#CUSTOMER#{email}",
        sk=f"APPOINTMENT#{start_time}",
        tenant_id=tenant,
        tenant_date_key=f"TENANT#{tenant}#DATE#{start_time[:10]}",
        customer_email=email,
        customer_name="Ada",
        phone="555",
        start_time=start_time,
        end_time=start_time[:11] + "23:59:59",
        appointment_date=start_time[:10],
        status="PENDING",
        notes="n",
    )


class UnorderedClient:
    def __init__(self, items):
        self.items = items

    def query(self, table_name, index_name, partition_value):
        return list(self.items)


def test_query_by_date_orders_by_sort_key():
    items = [record("2024-01-01T15:00:00").to_item(), record("2024-01-01T08:00:00", "b@x.com").to_item()]
    store = AppointmentsRecordStore(UnorderedClient(items), "appointments", "DateIndex")
    out = store.query_by_date("t1", "2024-01-01")
    assert [r.start_time for r in out] == ["2024-01-01T08:00:00", "2024-01-01T15:00:00"]


def test_query_uses_configured_table_and_index(storage_client):
    store = AppointmentsRecordStore(storage_client, "my-table", "MyIndex")
    assert store.query_by_date("t1", "2024-03-01") == []
    assert storage_client.calls == [("query", "my-table", "MyIndex", "TENANT#t1#DATE#2024-03-01")]


def test_create_writes_full_item(storage_client):
    store = AppointmentsRecordStore(storage_client, "appointments", "DateIndex")
    rec = record("2024-01-01T09:00:00")
    assert store.create(rec) == {"acknowledged": True}
    stored = storage_client.items[("appointments", rec.pk, rec.sk)]
    assert AppointmentRecord.from_item(stored) == rec


def test_update_sends_only_patch_fields(storage_client):
    store = AppointmentsRecordStore(storage_client, "appointments", "DateIndex")
    out = store.update("t1", "a@x.com", "2024-01-01T09:00:00", AppointmentPatch(notes="x"))
    stored = storage_client.items[("appointments", out.pk, out.sk)]
    assert stored == {
        "PK": "TENANT#t1#CUSTOMER#a@x.com",
        "SK": "APPOINTMENT#2024-01-01T09:00:00",
        "status": "PENDING",
        "notes": "x",
    }


def test_operations_require_tenant(storage_client):
    store = AppointmentsRecordStore(storage_client, "appointments", "DateIndex")
    with pytest.raises(BadRequestError):
        store.create(record("2024-01-01T09:00:00", tenant=""))
    with pytest.raises(BadRequestError):
        store.delete("", "a@x.com", "2024-01-01T09:00:00")
    with pytest.raises(BadRequestError):
        store.query_by_date(None, "2024-01-01")
    assert storage_client.calls == []


def test_storage_errors_propagate():
    class BrokenClient:
        def delete(self, table_name, key):
            raise RuntimeError("throttled")

    store = AppointmentsRecordStore(BrokenClient(), "appointments", "DateIndex")
    with pytest.raises(RuntimeError, match="throttled"):
        store.delete("t1", "a@x.com", "2024-01-01T09:00:00")
