"""OrderItem ORM — persists one OrderItem document per row.

Invariants:
    - id is a 24-hex document id (generated when the caller does not supply one),
      stored lowercase like order_id/product_id (ObjectIdString)
    - name is non-nullable; is_active/is_deleted default to True/False
    - created_at set on insert, updated_at refreshed on every update
    - DOCUMENT_FIELDS is the single wire-name → attribute mapping for this table

Design Decisions:
    - Flat columns over a JSON blob: filters and sorts map to indexed columns
    - order_id/product_id stored as plain ids, no foreign keys (other resources live elsewhere)
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from order_api.core.domain_types import MAX_USER_ID_LENGTH, new_object_id
from order_api.db.base import Base
from order_api.db.types import ObjectIdString


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderItem(Base):
    """A single line of an order."""
    __tablename__ = "order_items"

    DOCUMENT_FIELDS = {
        "_id": "id",
        "name": "name",
        "orderId": "order_id",
        "productId": "product_id",
        "quantity": "quantity",
        "price": "price",
        "discount": "discount",
        "totalPrice": "total_price",
        "status": "status",
        "note": "note",
        "isActive": "is_active",
        "isDeleted": "is_deleted",
        "addedBy": "added_by",
        "updatedBy": "updated_by",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }

    id: Mapped[str] = mapped_column(
        ObjectIdString, primary_key=True, default=new_object_id,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    order_id: Mapped[str | None] = mapped_column(
        ObjectIdString, nullable=True, index=True,
    )
    product_id: Mapped[str | None] = mapped_column(
        ObjectIdString, nullable=True, index=True,
    )
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    discount: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[str | None] = mapped_column(
        String(32), nullable=True, index=True,
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True,
    )
    added_by: Mapped[str | None] = mapped_column(String(MAX_USER_ID_LENGTH), nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(MAX_USER_ID_LENGTH), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    def to_document(self) -> dict:
        """Wire representation, timestamps as ISO-8601 strings."""
        document = {}
        for key, attr in self.DOCUMENT_FIELDS.items():
            value = getattr(self, attr)
            if isinstance(value, datetime):
                value = value.isoformat()
            document[key] = value
        return document
