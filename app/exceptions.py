from typing import Any

from fastapi import HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .constants import CORS_HEADERS, ERROR_MESSAGES

class APIException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class BadRequestError(APIException):
    """Caller-input error. Never retried and never reaches the store."""

    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)

class KeyConfigurationError(ValueError):
    """Raised when a storage key is requested with an empty component."""

def create_error_response(error_message: str) -> dict:
    """Create a standardized error response"""
    return {"message": error_message}

def create_success_response(message: str, data: Any) -> dict:
    """Create a standardized success response"""
    return {"message": message, "data": data}

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code or 500,
        content=create_error_response(str(exc.detail)),
        headers=CORS_HEADERS,
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema violations (unknown fields, wrong types, malformed JSON) are caller-input errors"""
    return JSONResponse(
        status_code=400,
        content=create_error_response(ERROR_MESSAGES["INVALID_REQUEST_BODY"]),
        headers=CORS_HEADERS,
    )
