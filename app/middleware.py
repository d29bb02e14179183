import time
import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import settings
from .constants import CORS_HEADERS
from .exceptions import create_error_response

logger = logging.getLogger(__name__)

class CorsHeadersMiddleware(BaseHTTPMiddleware):
    """Permissive CORS headers on every response, with or without an Origin header."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        # Log request (guard against missing client info)
        client_host = request.client.host if request.client else "unknown"
        logger.info(f"Request: {request.method} {request.url.path} from {client_host}")

        # Process request
        response = await call_next(request)

        # Calculate duration
        duration = time.time() - start_time

        # Log response
        logger.info(f"Response: {response.status_code} in {duration:.3f}s")

        return response

class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.error(f"Unhandled error: {str(e)}", exc_info=True)
            message = str(e) if settings.DEBUG else "Internal server error"
            return JSONResponse(
                status_code=500,
                content=create_error_response(message),
                headers=CORS_HEADERS,
            )
