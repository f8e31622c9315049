"""Document Ids — verifies generation and validation of 24-hex identifiers.

Tests:
    - new_object_id() yields 24 lowercase hex chars, unique per call
    - ids generated later never sort before earlier ones
    - is_valid_object_id() accepts exactly 24 hex chars, nothing looser
    - normalize_object_id() lowers id strings and leaves other values alone
"""

import pytest

from order_api.core.domain_types import (
    CallerIdentity, UserId, is_valid_object_id, new_object_id,
    normalize_object_id,
)


def test_new_object_id_is_24_hex_chars():
    oid = new_object_id()
    assert len(oid) == 24
    assert int(oid, 16) >= 0
    assert oid == oid.lower()


def test_new_object_id_is_unique():
    ids = {new_object_id() for _ in range(1000)}
    assert len(ids) == 1000


def test_new_object_id_timestamp_prefix_is_monotonic():
    first, second = new_object_id(), new_object_id()
    assert second[:8] >= first[:8]


def test_generated_ids_are_valid():
    assert is_valid_object_id(new_object_id())


@pytest.mark.parametrize("value", [
    "507f1f77bcf86cd799439011",
    "507F1F77BCF86CD799439011",
])
def test_valid_object_ids(value):
    assert is_valid_object_id(value)


@pytest.mark.parametrize("value", [
    "",
    "abc",
    "507f1f77bcf86cd79943901",
    "507f1f77bcf86cd7994390111",
    "507f1f77bcf86cd79943901z",
    "507f1f77bcf86cd799439011\n",
    None,
    12345,
])
def test_invalid_object_ids(value):
    assert not is_valid_object_id(value)


def test_caller_identity_is_immutable():
    user = CallerIdentity(id=UserId("user-1"))
    with pytest.raises(AttributeError):
        user.id = UserId("user-2")


def test_normalize_object_id_lowers_hex():
    assert normalize_object_id("507F1F77BCF86CD799439011") == "507f1f77bcf86cd799439011"
    assert normalize_object_id("507f1f77bcf86cd799439011") == "507f1f77bcf86cd799439011"


@pytest.mark.parametrize("value", [None, 12345, ["507F1F77BCF86CD799439011"]])
def test_normalize_object_id_passes_non_strings_through(value):
    assert normalize_object_id(value) == value
