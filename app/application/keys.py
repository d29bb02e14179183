"""Storage key construction for the single-table appointment layout.

Primary key:  PK = TENANT#{tenantId}#CUSTOMER#{customerEmail}
              SK = APPOINTMENT#{startTime}
Date index:   tenantDateKey = TENANT#{tenantId}#DATE#{YYYY-MM-DD}

All functions are pure string builders; none of them touch a store.
"""
from typing import Any, Dict, Mapping

from ..exceptions import KeyConfigurationError

KEY_DELIMITER = "#"
TENANT_PREFIX = "TENANT"
CUSTOMER_PREFIX = "CUSTOMER"
DATE_PREFIX = "DATE"
APPOINTMENT_PREFIX = "APPOINTMENT"


def build_customer_key(tenant_id: str, customer_email: str) -> str:
    if not tenant_id:
        raise KeyConfigurationError("tenant_id is required to build a customer key")
    if not customer_email:
        raise KeyConfigurationError("customer_email is required to build a customer key")
    return f"{TENANT_PREFIX}#{tenant_id}#{CUSTOMER_PREFIX}#{customer_email}"


def build_appointment_sort_key(start_time: str) -> str:
    # ISO-8601 timestamps are zero padded, so lexical order is chronological
    if not start_time:
        raise KeyConfigurationError("start_time is required to build an appointment sort key")
    return f"{APPOINTMENT_PREFIX}#{start_time}"


def build_tenant_date_key(tenant_id: str, date: str) -> str:
    if not tenant_id:
        raise KeyConfigurationError("tenant_id is required to build a tenant date key")
    return f"{TENANT_PREFIX}#{tenant_id}#{DATE_PREFIX}#{date}"


def build_primary_key(tenant_id: str, customer_email: str, start_time: str) -> Dict[str, str]:
    return {
        "PK": build_customer_key(tenant_id, customer_email),
        "SK": build_appointment_sort_key(start_time),
    }


def appointment_date_of(start_time: str) -> str:
    """Date portion (first 10 characters) of a YYYY-MM-DDTHH:MM:SS timestamp."""
    return start_time[:10]


def composite_key(item: Mapping[str, Any]) -> str:
    return f"{item.get('PK')}{KEY_DELIMITER}{item.get('SK')}"
