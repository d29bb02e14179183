# app/schemas/common.py
from pydantic import BaseModel
from typing import Any, Optional

class ErrorResponse(BaseModel):
    message: str

class MessageResponse(BaseModel):
    message: str
    data: Optional[Any] = None

class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    storage_backend: str
    timestamp: str
