"""OrderItem Schemas — verifies camelCase aliases, required fields and bounds.

Tests:
    - Wire keys are camelCase; model_dump() yields snake_case attribute names
    - Unknown keys are ignored
    - name is required on create only
    - Ids must be 24-hex and come out lowercase; numeric fields are non-negative
    - addedBy/updatedBy are at most 64 chars
"""

import pytest
from pydantic import ValidationError

from order_api.schemas.order_item import (
    ListOptions, OrderItemCreate, OrderItemDocument, OrderItemFindFilter,
    OrderItemUpdate,
)

ORDER_ID = "507f1f77bcf86cd799439011"


def test_create_parses_camel_case_keys():
    item = OrderItemCreate.model_validate({
        "name": "Widget", "orderId": ORDER_ID, "totalPrice": 9.5, "isActive": False,
    })
    assert item.order_id == ORDER_ID
    assert item.total_price == 9.5
    assert item.is_active is False


def test_create_requires_name():
    with pytest.raises(ValidationError):
        OrderItemCreate.model_validate({"quantity": 1})


def test_update_does_not_require_name():
    assert OrderItemUpdate.model_validate({"quantity": 1}).name is None


def test_unknown_keys_are_ignored():
    item = OrderItemUpdate.model_validate({"colour": "red", "quantity": 1})
    assert "colour" not in item.model_dump()


def test_dump_uses_attribute_names():
    item = OrderItemDocument.model_validate({"_id": ORDER_ID, "productId": ORDER_ID})
    assert item.model_dump(exclude_unset=True) == {"id": ORDER_ID, "product_id": ORDER_ID}


@pytest.mark.parametrize("payload", [
    {"orderId": "not-an-id"},
    {"quantity": -1},
    {"price": -0.01},
    {"name": ""},
    {"status": "x" * 33},
])
def test_update_rejects_out_of_range_values(payload):
    with pytest.raises(ValidationError):
        OrderItemUpdate.model_validate(payload)


def test_document_rejects_malformed_id():
    with pytest.raises(ValidationError):
        OrderItemDocument.model_validate({"_id": "123"})


def test_list_options_sort_directions():
    assert ListOptions.model_validate({"sort": {"name": -1}}).sort == {"name": -1}
    assert ListOptions.model_validate({"sort": "-name"}).sort == "-name"
    with pytest.raises(ValidationError):
        ListOptions.model_validate({"sort": {"name": 2}})


def test_find_filter_defaults():
    parsed = OrderItemFindFilter.model_validate({})
    assert parsed.query is None
    assert parsed.options is None
    assert parsed.is_count_only is False


def test_ids_are_lowered():
    upper = ORDER_ID.upper()
    item = OrderItemDocument.model_validate({
        "_id": upper, "orderId": upper, "productId": upper,
    })
    assert item.model_dump(exclude_unset=True) == {
        "id": ORDER_ID, "order_id": ORDER_ID, "product_id": ORDER_ID,
    }


def test_stamps_longer_than_column_are_rejected():
    assert OrderItemDocument.model_validate({"addedBy": "u" * 64}).added_by == "u" * 64
    with pytest.raises(ValidationError):
        OrderItemDocument.model_validate({"addedBy": "u" * 65})
    with pytest.raises(ValidationError):
        OrderItemDocument.model_validate({"updatedBy": "u" * 65})
