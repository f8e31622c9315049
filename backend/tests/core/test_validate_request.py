"""Request Validation — verifies schema checks for create/update payloads and list filters.

Tests:
    - Non-object payloads are rejected without raising
    - Messages name the failing wire field
    - Query keys outside the document fields are rejected
    - $and/$or are always allowed at the top of a query
"""

from order_api.core.validate_request import (
    validate_filter_with_schema, validate_params_with_schema,
)
from order_api.models.order_item import OrderItem
from order_api.schemas.order_item import (
    OrderItemCreate, OrderItemFindFilter, OrderItemUpdate,
)

FIELDS = frozenset(OrderItem.DOCUMENT_FIELDS)


def test_params_valid_payload():
    result = validate_params_with_schema({"name": "Widget", "quantity": 2}, OrderItemCreate)
    assert result.is_valid
    assert result.value.name == "Widget"
    assert result.message == ""


def test_params_missing_required_field():
    result = validate_params_with_schema({"quantity": 2}, OrderItemCreate)
    assert not result.is_valid
    assert "name" in result.message


def test_params_reports_camel_case_location():
    result = validate_params_with_schema({"orderId": "nope"}, OrderItemUpdate)
    assert not result.is_valid
    assert result.message.startswith("orderId:")


def test_params_reports_every_failing_field():
    result = validate_params_with_schema(
        {"quantity": -1, "price": -5}, OrderItemUpdate,
    )
    assert "quantity" in result.message
    assert "price" in result.message
    assert "; " in result.message


def test_params_non_object_payload():
    for payload in (None, [], "text", 3):
        result = validate_params_with_schema(payload, OrderItemCreate)
        assert not result.is_valid
        assert result.message == "payload must be an object"


def test_filter_accepts_known_query_keys():
    result = validate_filter_with_schema(
        {"query": {"name": "Widget", "isDeleted": False}}, OrderItemFindFilter, FIELDS,
    )
    assert result.is_valid
    assert result.value.query == {"name": "Widget", "isDeleted": False}


def test_filter_rejects_unknown_query_key():
    result = validate_filter_with_schema(
        {"query": {"colour": "red"}}, OrderItemFindFilter, FIELDS,
    )
    assert not result.is_valid
    assert result.message == '"query.colour" is not allowed'


def test_filter_allows_logical_operators():
    result = validate_filter_with_schema(
        {"query": {"$or": [{"name": "a"}, {"name": "b"}]}}, OrderItemFindFilter, FIELDS,
    )
    assert result.is_valid


def test_filter_without_document_fields_skips_key_check():
    result = validate_filter_with_schema(
        {"where": {"colour": "red"}}, OrderItemFindFilter,
    )
    assert result.is_valid


def test_filter_reads_is_count_only():
    result = validate_filter_with_schema(
        {"query": {}, "isCountOnly": True}, OrderItemFindFilter, FIELDS,
    )
    assert result.value.is_count_only is True


def test_filter_rejects_bad_options():
    result = validate_filter_with_schema(
        {"options": {"page": 0}}, OrderItemFindFilter, FIELDS,
    )
    assert not result.is_valid
    assert "options.page" in result.message
