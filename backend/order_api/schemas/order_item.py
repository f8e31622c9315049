"""OrderItem Schemas — request and document validation at the API and store boundaries.

Invariants:
    - Wire keys are camelCase (orderId, isDeleted, addedBy); python names are snake_case
    - model_dump() yields ORM attribute names directly
    - Unknown keys are ignored, never rejected
    - Ids (_id, orderId, productId) are accepted in either case and come out lowercase
    - Only OrderItemCreate requires a field (name); everything else is optional

Design Decisions:
    - One field set (OrderItemFields) shared by create, update and document schemas
    - OrderItemDocument adds _id: the store accepts caller-chosen ids, requests never need them
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from order_api.core.domain_types import (
    MAX_USER_ID_LENGTH, OBJECT_ID_PATTERN, normalize_object_id,
)


class OrderItemFields(BaseModel):
    """Every writable OrderItem field, all optional."""
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")

    name: str | None = Field(None, min_length=1, max_length=200)
    order_id: str | None = Field(None, pattern=OBJECT_ID_PATTERN)
    product_id: str | None = Field(None, pattern=OBJECT_ID_PATTERN)
    quantity: int | None = Field(None, ge=0)
    price: float | None = Field(None, ge=0)
    discount: float | None = Field(None, ge=0)
    total_price: float | None = Field(None, ge=0)
    status: str | None = Field(None, max_length=32)
    note: str | None = Field(None, max_length=2000)
    is_active: bool | None = None
    is_deleted: bool | None = None
    added_by: str | None = Field(None, max_length=MAX_USER_ID_LENGTH)
    updated_by: str | None = Field(None, max_length=MAX_USER_ID_LENGTH)

    @field_validator("order_id", "product_id")
    @classmethod
    def lowercase_ids(cls, v: str | None) -> str | None:
        return normalize_object_id(v)


class OrderItemCreate(OrderItemFields):
    """Create keys — name is mandatory."""
    name: str = Field(min_length=1, max_length=200)


class OrderItemUpdate(OrderItemFields):
    """Update keys — partial and full updates share them."""


class OrderItemDocument(OrderItemFields):
    """Stored document shape, validated by the repository on every write."""
    id: str | None = Field(None, alias="_id", pattern=OBJECT_ID_PATTERN)

    @field_validator("id")
    @classmethod
    def lowercase_id(cls, v: str | None) -> str | None:
        return normalize_object_id(v)


# --- Find filter ---------------------------------------------------------------

SortDirection = Literal[1, -1, "asc", "desc", "ascending", "descending"]


class ListOptions(BaseModel):
    """Pagination and projection options for list queries."""
    model_config = ConfigDict(extra="ignore")

    page: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1)
    pagination: bool | None = None
    populate: Any = None
    sort: dict[str, SortDirection] | str | None = None
    select: list[str] | str | None = None


class OrderItemFindFilter(BaseModel):
    """Body of list and count requests."""
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")

    query: dict[str, Any] | None = None
    where: dict[str, Any] | None = None
    options: ListOptions | None = None
    is_count_only: bool = False
