# app/constants.py
from enum import Enum


class AppointmentStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


ERROR_MESSAGES = {
    "MISSING_TENANT_ID": "Missing tenantId",
    "MISSING_REQUIRED_FIELDS": "Missing required fields",
    "INVALID_EMAIL": "Invalid email format",
    "INVALID_STATUS": "Invalid status",
    "INVALID_TIMESTAMP": "Invalid timestamp format. Use YYYY-MM-DDTHH:MM:SS",
    "END_BEFORE_START": "End time must be after start time",
    "INVALID_DATE": "Invalid date format. Use YYYY-MM-DD",
    "DATE_RANGE_TOO_LARGE": "Date range is too large",
    "INVALID_TENANT_ID": "tenantId must not contain #",
    "INVALID_REQUEST_BODY": "Invalid request body",
}

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
}

DATE_FORMAT = "%Y-%m-%d"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Attribute holding the date index partition value on every stored item
TENANT_DATE_KEY_ATTRIBUTE = "tenantDateKey"
