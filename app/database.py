import logging
from sqlmodel import SQLModel, create_engine

from .config import Settings
from .constants import TENANT_DATE_KEY_ATTRIBUTE
from .application.ports.storage_client import StorageClient
from .infrastructure.persistence.appointments_repository import AppointmentsRecordStore
from .infrastructure.persistence.dynamodb.dynamodb_client import DynamoDBStorageClient, create_dynamodb_resource
from .infrastructure.persistence.sqlalchemy.sql_client import SqlStorageClient

logger = logging.getLogger(__name__)

def create_sql_engine(db_url: str, echo: bool = False):
    # Choose engine options based on database scheme
    engine_kwargs = {}
    if db_url.startswith("sqlite"):
        # SQLite specific connect args
        engine_kwargs.update({
            "connect_args": {"check_same_thread": False}
        })
    else:
        # Better resiliency for managed Postgres
        engine_kwargs.update({
            "pool_pre_ping": True,
            "pool_recycle": 300,
            "pool_size": 5,
            "max_overflow": 10,
        })
    return create_engine(db_url, echo=echo, **engine_kwargs)

def create_db_and_tables(engine) -> None:
    SQLModel.metadata.create_all(engine)

def create_storage_client(settings: Settings) -> StorageClient:
    """Build the storage engine client once, at process start."""
    backend = settings.STORAGE_BACKEND.strip().lower()
    if backend == "dynamodb":
        logger.info(f"Using DynamoDB storage (region={settings.AWS_REGION}, endpoint={settings.DYNAMODB_ENDPOINT_URL or 'default'})")
        resource = create_dynamodb_resource(settings.AWS_REGION, settings.DYNAMODB_ENDPOINT_URL)
        return DynamoDBStorageClient(resource, {settings.DATE_INDEX_NAME: TENANT_DATE_KEY_ATTRIBUTE})
    if backend == "sql":
        logger.info("Using SQL storage")
        engine = create_sql_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        create_db_and_tables(engine)
        return SqlStorageClient(engine, index_name=settings.DATE_INDEX_NAME)
    raise ValueError(f"Unsupported STORAGE_BACKEND: {settings.STORAGE_BACKEND}")

def create_record_store(settings: Settings, client: StorageClient = None) -> AppointmentsRecordStore:
    return AppointmentsRecordStore(
        client=client or create_storage_client(settings),
        table_name=settings.APPOINTMENTS_TABLE_NAME,
        date_index_name=settings.DATE_INDEX_NAME,
    )
