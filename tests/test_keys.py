import pytest

from app.application.keys import (
    appointment_date_of,
    build_appointment_sort_key,
    build_customer_key,
    build_primary_key,
    build_tenant_date_key,
    composite_key,
)
from app.exceptions import KeyConfigurationError


def test_customer_key_format():
    assert build_customer_key("t1", "a@x.com") == "TENANT#t1#CUSTOMER#a@x.com"


@pytest.mark.parametrize("tenant_id, email", [("", "a@x.com"), ("t1", ""), (None, "a@x.com")])
def test_customer_key_rejects_empty_parts(tenant_id, email):
    with pytest.raises(KeyConfigurationError):
        build_customer_key(tenant_id, email)


def test_sort_key_keeps_chronological_order():
    times = ["2024-01-10T09:00:00", "2024-01-02T17:30:00", "2023-12-31T23:59:59", "2024-01-02T08:05:00"]
    keys = [build_appointment_sort_key(t) for t in times]
    assert sorted(keys) == [build_appointment_sort_key(t) for t in sorted(times)]
    assert keys[0] == "APPOINTMENT#2024-01-10T09:00:00"


def test_tenant_date_key_concatenates_without_validation():
    assert build_tenant_date_key("t1", "2024-01-01") == "TENANT#t1#DATE#2024-01-01"
    assert build_tenant_date_key("t1", "not-a-date") == "TENANT#t1#DATE#not-a-date"


def test_tenant_date_key_requires_tenant():
    with pytest.raises(KeyConfigurationError):
        build_tenant_date_key("", "2024-01-01")


def test_primary_key_and_composite_key():
    key = build_primary_key("t1", "a@x.com", "2024-01-01T09:00:00")
    assert key == {"PK": "TENANT#t1#CUSTOMER#a@x.com", "SK": "APPOINTMENT#2024-01-01T09:00:00"}
    assert composite_key(key) == "TENANT#t1#CUSTOMER#a@x.com#APPOINTMENT#2024-01-01T09:00:00"


def test_appointment_date_is_first_ten_characters():
    assert appointment_date_of("2024-02-29T23:00:00") == "2024-02-29"
