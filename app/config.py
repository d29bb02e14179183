#config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    # Application Settings
    APP_NAME: str = "Appointment Booking API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 3007))

    # Storage Settings
    STORAGE_BACKEND: str = "dynamodb"  # "dynamodb" or "sql"
    APPOINTMENTS_TABLE_NAME: str = "appointments"
    DATE_INDEX_NAME: str = "DateIndex"
    AWS_REGION: str = "us-east-1"
    # Point at DynamoDB Local, e.g. http://dynamo-local:8000
    DYNAMODB_ENDPOINT_URL: Optional[str] = None
    DATABASE_URL: str = "sqlite:///./appointments.db"

    # CORS Settings (accept comma-separated strings to avoid JSON parsing in env)
    ALLOWED_ORIGINS: str = "*"
    ALLOWED_METHODS: str = "GET,POST,PUT,DELETE,OPTIONS"
    ALLOWED_HEADERS: str = "Content-Type"

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Customer roster window, relative to today
    CUSTOMER_LOOKBACK_DAYS: int = 90
    CUSTOMER_LOOKAHEAD_DAYS: int = 30
    # Longest window, in days, a range listing or roster may span
    MAX_RANGE_DAYS: int = 366

    # Remote API client
    API_BASE_URL: str = "http://localhost:3007"
    API_TIMEOUT_SECONDS: float = 10.0

    # Helper methods for list envs
    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def allowed_methods_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_METHODS)

    @property
    def allowed_headers_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_HEADERS)

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings: Settings = get_settings()
