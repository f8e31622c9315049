"""ORM Models — SQLAlchemy declarative models for all persisted resources.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model exposes DOCUMENT_FIELDS and to_document() for the document repository
"""

from order_api.models.order_item import OrderItem  # noqa: F401
