"""Column Types — storage-level normalization shared by all models.

Invariants:
    - ObjectIdString stores and compares document ids in lowercase hex
    - Every bound value (insert, update, filter, IN list) goes through the same lowering
"""

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from order_api.core.domain_types import normalize_object_id


class ObjectIdString(TypeDecorator):
    """24-char hex id column, case-insensitive on the way in."""

    impl = String(24)
    cache_ok = True

    @property
    def python_type(self) -> type:
        return str

    def process_bind_param(self, value, dialect):
        return normalize_object_id(value)
