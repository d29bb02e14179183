from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from datetime import datetime, timezone
import logging

# Load environment variables as early as possible
load_dotenv()

from .config import settings
from .database import create_record_store
from .exceptions import http_exception_handler, validation_exception_handler
from .middleware import CorsHeadersMiddleware, ErrorHandlingMiddleware, LoggingMiddleware
from .routers import appointments_router, customers_router
from .schemas.common.common import HealthResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the storage client is built once and shared by every request
    logger.info(f"Starting {settings.APP_NAME} with {settings.STORAGE_BACKEND} storage...")
    if getattr(app.state, "record_store", None) is None:
        app.state.record_store = create_record_store(settings)
    logger.info(f"Record store ready (table={settings.APPOINTMENTS_TABLE_NAME}, index={settings.DATE_INDEX_NAME})")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")

# Initialize FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url=("/docs" if settings.DOCS_ENABLED else None),
    redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
    openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
)

# Add custom exception handlers
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Add middleware
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)

# Preflight handling; simple responses get their headers from CorsHeadersMiddleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=False,
    allow_methods=settings.allowed_methods_list,
    allow_headers=settings.allowed_headers_list,
)
app.add_middleware(CorsHeadersMiddleware)

app.include_router(appointments_router.router)
app.include_router(customers_router.router)

# Health check endpoint
@app.get("/health", response_model=HealthResponse)
def health_check():
    return {
        "status": "healthy" if getattr(app.state, "record_store", None) is not None else "starting",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "storage_backend": settings.STORAGE_BACKEND,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

# ------------------------
# Run with correct PORT in local/production
# ------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=1,
        log_level=settings.LOG_LEVEL.lower()
    )
