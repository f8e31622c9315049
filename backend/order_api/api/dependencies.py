"""Request Dependencies — caller identity and the OrderItem handler wiring.

Invariants:
    - Caller identity comes from the gateway header named in settings.identity_header
    - Missing, blank or over-long (> MAX_USER_ID_LENGTH) identity raises
      UnauthenticatedError before any handler runs
    - One repository (and one DB session) per request

Design Decisions:
    - Header identity over in-process token verification: authentication is the
      gateway's job, this service only trusts the resolved user id
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from order_api.config import get_settings
from order_api.core.domain_types import MAX_USER_ID_LENGTH, CallerIdentity, UserId
from order_api.core.errors import UnauthenticatedError
from order_api.infrastructure.database import get_db
from order_api.infrastructure.document_repository import SqlDocumentRepository
from order_api.models.order_item import OrderItem
from order_api.schemas.order_item import OrderItemDocument
from order_api.services.order_item_controller import OrderItemController


async def get_current_user(request: Request) -> CallerIdentity:
    """Resolve the authenticated caller or raise 401."""
    header = get_settings().identity_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id or len(user_id) > MAX_USER_ID_LENGTH:
        raise UnauthenticatedError()
    return CallerIdentity(id=UserId(user_id))


def get_order_item_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlDocumentRepository[OrderItem]:
    settings = get_settings()
    return SqlDocumentRepository(
        db, OrderItem, OrderItemDocument,
        default_page_limit=settings.default_page_limit,
        max_page_limit=settings.max_page_limit,
    )


def get_order_item_controller(
    repository: SqlDocumentRepository[OrderItem] = Depends(get_order_item_repository),
) -> OrderItemController:
    return OrderItemController(repository)
