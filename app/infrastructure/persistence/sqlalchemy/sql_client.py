from datetime import datetime, timezone
from typing import Any, Dict, List
from sqlmodel import Session, select

from ....application.ports.storage_client import StorageClient
from ....constants import TENANT_DATE_KEY_ATTRIBUTE
from ....db.models import StoredRecord


class SqlStorageClient(StorageClient):
    """Single-table key-value semantics emulated on a relational database.

    Supports exactly one secondary index, whose partition attribute is copied
    into an indexed column on every write.
    """

    def __init__(self, engine, index_name: str = "DateIndex", index_partition_attribute: str = TENANT_DATE_KEY_ATTRIBUTE):
        self.engine = engine
        self.index_name = index_name
        self.index_partition_attribute = index_partition_attribute

    def _apply(self, row: StoredRecord, item: Dict[str, Any]) -> None:
        row.data = dict(item)
        row.index_partition = item.get(self.index_partition_attribute)
        row.updated_at = datetime.now(timezone.utc)

    def put(self, table_name: str, item: Dict[str, Any]) -> Dict[str, Any]:
        with Session(self.engine) as session:
            row = session.get(StoredRecord, (table_name, item["PK"], item["SK"]))
            if row is None:
                row = StoredRecord(table_name=table_name, pk=item["PK"], sk=item["SK"])
            self._apply(row, item)
            session.add(row)
            session.commit()
        return {"acknowledged": True}

    def update(self, table_name: str, key: Dict[str, str], patch: Dict[str, Any]) -> Dict[str, Any]:
        with Session(self.engine) as session:
            row = session.get(StoredRecord, (table_name, key["PK"], key["SK"]))
            if row is None:
                # No existence check: the key plus the patched fields become a new record
                row = StoredRecord(table_name=table_name, pk=key["PK"], sk=key["SK"])
                merged = {**key, **patch}
            else:
                merged = {**row.data, **patch}
            self._apply(row, merged)
            session.add(row)
            session.commit()
            return dict(merged)

    def delete(self, table_name: str, key: Dict[str, str]) -> Dict[str, Any]:
        with Session(self.engine) as session:
            row = session.get(StoredRecord, (table_name, key["PK"], key["SK"]))
            if row is not None:
                session.delete(row)
                session.commit()
        return {"acknowledged": True}

    def query(self, table_name: str, index_name: str, partition_value: str) -> List[Dict[str, Any]]:
        if index_name != self.index_name:
            raise ValueError(f"Unknown index: {index_name}")
        with Session(self.engine) as session:
            rows = session.exec(
                select(StoredRecord)
                .where(StoredRecord.table_name == table_name)
                .where(StoredRecord.index_partition == partition_value)
                .order_by(StoredRecord.sk)
            ).all()
            return [dict(r.data) for r in rows]
