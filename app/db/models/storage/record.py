# app/db/models/storage/record.py
from typing import Any, Dict, Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Column, JSON
from datetime import datetime, timezone

class StoredRecord(SQLModel, table=True):
    """One single-table item. `table_name` keeps logical tables apart in one SQL table."""
    __tablename__ = "kv_records"
    table_name: str = Field(primary_key=True)
    pk: str = Field(primary_key=True)
    sk: str = Field(primary_key=True)
    index_partition: Optional[str] = Field(default=None, index=True)
    data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
