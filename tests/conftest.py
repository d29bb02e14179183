from typing import Any, Dict, List

import pytest

from app.schemas.appointments.appointment import AppointmentCreate


class FakeStorageClient:
    """In-memory single-table engine with one date index on tenantDateKey."""

    def __init__(self):
        self.items: Dict[tuple, Dict[str, Any]] = {}
        self.calls: List[tuple] = []

    def put(self, table_name: str, item: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("put", table_name, item["PK"], item["SK"]))
        self.items[(table_name, item["PK"], item["SK"])] = dict(item)
        return {"acknowledged": True}

    def update(self, table_name: str, key: Dict[str, str], patch: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update", table_name, key["PK"], key["SK"]))
        current = self.items.get((table_name, key["PK"], key["SK"]), dict(key))
        current = {**current, **patch}
        self.items[(table_name, key["PK"], key["SK"])] = current
        return dict(current)

    def delete(self, table_name: str, key: Dict[str, str]) -> Dict[str, Any]:
        self.calls.append(("delete", table_name, key["PK"], key["SK"]))
        self.items.pop((table_name, key["PK"], key["SK"]), None)
        return {"acknowledged": True}

    def query(self, table_name: str, index_name: str, partition_value: str) -> List[Dict[str, Any]]:
        self.calls.append(("query", table_name, index_name, partition_value))
        rows = [
            dict(item) for (t, _, _), item in self.items.items()
            if t == table_name and item.get("tenantDateKey") == partition_value
        ]
        return sorted(rows, key=lambda i: i["SK"])


@pytest.fixture
def storage_client():
    return FakeStorageClient()


def appointment_payload(**overrides) -> Dict[str, Any]:
    data = {
        "customerEmail": "a@x.com",
        "customerName": "Ada Lovelace",
        "phone": "555-0100",
        "startTime": "2024-01-01T09:00:00",
        "endTime": "2024-01-01T09:30:00",
        "status": "PENDING",
        "notes": "Haircut",
        "location": "Main St",
    }
    data.update(overrides)
    return data


def make_create(**overrides) -> AppointmentCreate:
    return AppointmentCreate(**appointment_payload(**overrides))
