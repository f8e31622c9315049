"""OrderItem Controller — the twelve request handlers of the OrderItem resource.

Invariants:
    - Every handler returns an ApiResponse and never raises
    - Every handler makes at most one repository call
    - Request-shape checks (ids, data, id format) run before the repository is touched
    - addedBy is the caller on create and bulk insert; updatedBy is the caller on every update
    - Client-supplied addedBy/updatedBy never reach the store on updates
    - Store validation/duplicate errors get dedicated responses only on create,
      bulk insert and full update; elsewhere they are a generic failure
    - delete one, delete many, soft delete one and soft delete many fail bare (no message)

Design Decisions:
    - InvalidQueryError (bad filter, sort or projection) is a request-shape error on every
      path and maps to invalid param, never to a 500
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from order_api.core import response_envelope as envelope
from order_api.core.domain_types import CallerIdentity, is_valid_object_id
from order_api.core.errors import (
    DocumentValidationError, DuplicateKeyError, InvalidQueryError,
)
from order_api.core.repository_protocols import DocumentRepository
from order_api.core.response_envelope import ApiResponse
from order_api.core.validate_request import (
    validate_filter_with_schema, validate_params_with_schema,
)
from order_api.schemas.order_item import (
    OrderItemCreate, OrderItemFindFilter, OrderItemUpdate,
)

logger = logging.getLogger(__name__)

RESOURCE = "OrderItem"
_SERVER_STAMPED = frozenset({"addedBy", "updatedBy"})

Body = Mapping[str, Any] | None


def _ids_from(body: Body) -> list | None:
    """Return the non-empty ids list of a by-ids request, else None."""
    ids = body.get("ids") if isinstance(body, Mapping) else None
    if not isinstance(ids, list) or not ids:
        return None
    return ids


def _update_payload(body: Body, user: CallerIdentity) -> dict[str, Any]:
    """Strip client stamps, then stamp updatedBy from the caller."""
    data = {k: v for k, v in (body or {}).items() if k not in _SERVER_STAMPED}
    data["updatedBy"] = user.id
    return data


def _insert_payload(item: Mapping[str, Any], user: CallerIdentity) -> dict[str, Any]:
    data = {k: v for k, v in item.items() if k not in _SERVER_STAMPED}
    data["addedBy"] = user.id
    return data


class OrderItemController:
    """Validate → one repository call → one response envelope."""

    def __init__(self, repository: DocumentRepository):
        self.repository = repository

    # ─── Collection operations ───────────────────────────────────

    async def add_order_item(self, body: Body, user: CallerIdentity) -> ApiResponse:
        """Create one OrderItem."""
        try:
            validation = validate_params_with_schema(body, OrderItemCreate)
            if not validation.is_valid:
                return envelope.invalid_param(
                    f"Invalid values in parameters, {validation.message}",
                )
            result = await self.repository.create_document(
                _insert_payload(body, user),
            )
            return envelope.ok(result)
        except Exception as e:
            return self._write_failure(e, "create", user)

    async def find_all_order_item(self, body: Body, user: CallerIdentity) -> ApiResponse:
        """List OrderItems by query and options, or count them when isCountOnly is set."""
        try:
            validation = validate_filter_with_schema(
                body, OrderItemFindFilter, self.repository.document_fields,
            )
            if not validation.is_valid:
                return envelope.invalid_param(validation.message)
            request: OrderItemFindFilter = validation.value
            query = dict(request.query or {})

            if request.is_count_only:
                total = await self.repository.count_document(query)
                return envelope.ok({"totalRecords": total})

            options = (
                request.options.model_dump(exclude_none=True)
                if request.options else {}
            )
            result = await self.repository.get_all_documents(query, options)
            if result and result["data"]:
                return envelope.ok(result)
            return envelope.record_not_found()
        except Exception as e:
            return self._failure(e, "list", user)

    async def get_order_item_count(self, body: Body, user: CallerIdentity) -> ApiResponse:
        """Count OrderItems matching `where`."""
        try:
            validation = validate_filter_with_schema(body, OrderItemFindFilter)
            if not validation.is_valid:
                return envelope.invalid_param(validation.message)
            where = dict(validation.value.where or {})
            total = await self.repository.count_document(where)
            return envelope.ok({"totalRecords": total})
        except Exception as e:
            return self._failure(e, "count", user)

    async def soft_delete_many_order_item(
        self, body: Body, user: CallerIdentity,
    ) -> ApiResponse:
        """Flag every listed id as deleted."""
        try:
            ids = _ids_from(body)
            if ids is None:
                return envelope.bad_request()
            result = await self.repository.bulk_update(
                {"_id": {"$in": ids}}, {"isDeleted": True},
            )
            if not result:
                return envelope.record_not_found()
            return envelope.ok(result)
        except Exception as e:
            return self._failure(e, "soft_delete_many", user, include_message=False)

    async def bulk_insert_order_item(self, body: Body, user: CallerIdentity) -> ApiResponse:
        """Insert every element of `data`, each stamped with addedBy."""
        try:
            data = body.get("data") if isinstance(body, Mapping) else None
            if (
                not isinstance(data, Sequence) or isinstance(data, str)
                or not data
                or not all(isinstance(item, Mapping) for item in data)
            ):
                return envelope.bad_request()
            result = await self.repository.bulk_insert(
                [_insert_payload(item, user) for item in data],
            )
            return envelope.ok(result)
        except Exception as e:
            return self._write_failure(e, "bulk_insert", user)

    async def bulk_update_order_item(self, body: Body, user: CallerIdentity) -> ApiResponse:
        """Apply `data` to every OrderItem matching `filter`."""
        try:
            if not isinstance(body, Mapping) or not isinstance(body.get("data"), Mapping):
                return envelope.bad_request()
            filter = body.get("filter")
            filter = dict(filter) if isinstance(filter, Mapping) else {}
            result = await self.repository.bulk_update(
                filter, _update_payload(body["data"], user),
            )
            if not result:
                return envelope.record_not_found()
            return envelope.ok(result)
        except Exception as e:
            return self._failure(e, "bulk_update", user)

    async def delete_many_order_item(self, body: Body, user: CallerIdentity) -> ApiResponse:
        """Hard-delete every listed id."""
        try:
            ids = _ids_from(body)
            if ids is None:
                return envelope.bad_request()
            result = await self.repository.delete_many({"_id": {"$in": ids}})
            return envelope.ok(result)
        except Exception as e:
            return self._failure(e, "delete_many", user, include_message=False)

    # ─── Single-document operations ──────────────────────────────

    async def soft_delete_order_item(self, id: str, user: CallerIdentity) -> ApiResponse:
        try:
            result = await self.repository.find_one_and_update_document(
                {"_id": id}, {"isDeleted": True},
            )
            if not result:
                return envelope.record_not_found()
            return envelope.ok(result)
        except Exception as e:
            return self._failure(
                e, "soft_delete", user, document_id=id, include_message=False,
            )

    async def partial_update_order_item(
        self, id: str, body: Body, user: CallerIdentity,
    ) -> ApiResponse:
        try:
            data = _update_payload(body, user)
            validation = validate_params_with_schema(data, OrderItemUpdate)
            if not validation.is_valid:
                return envelope.invalid_param(
                    f"Invalid values in parameters, {validation.message}",
                )
            result = await self.repository.find_one_and_update_document(
                {"_id": id}, data,
            )
            if not result:
                return envelope.record_not_found()
            return envelope.ok(result)
        except Exception as e:
            return self._failure(e, "partial_update", user, document_id=id)

    async def update_order_item(
        self, id: str, body: Body, user: CallerIdentity,
    ) -> ApiResponse:
        try:
            data = _update_payload(body, user)
            validation = validate_params_with_schema(data, OrderItemUpdate)
            if not validation.is_valid:
                return envelope.invalid_param(
                    f"Invalid values in parameters, {validation.message}",
                )
            result = await self.repository.find_one_and_update_document(
                {"_id": id}, data,
            )
            if not result:
                return envelope.record_not_found()
            return envelope.ok(result)
        except Exception as e:
            return self._write_failure(e, "update", user, document_id=id)

    async def get_order_item(self, id: str, user: CallerIdentity) -> ApiResponse:
        try:
            if not is_valid_object_id(id):
                return envelope.invalid_object_id()
            result = await self.repository.get_single_document({"_id": id}, {})
            if result:
                return envelope.ok(result)
            return envelope.record_not_found()
        except Exception as e:
            return self._failure(e, "get", user, document_id=id)

    async def delete_order_item(self, id: str, user: CallerIdentity) -> ApiResponse:
        try:
            result = await self.repository.find_one_and_delete_document({"_id": id})
            if result:
                return envelope.ok(result)
            return envelope.record_not_found()
        except Exception as e:
            return self._failure(
                e, "delete", user, document_id=id, include_message=False,
            )

    # ─── Error mapping ───────────────────────────────────────────

    def _write_failure(
        self, error: Exception, operation: str, user: CallerIdentity,
        document_id: str | None = None,
    ) -> ApiResponse:
        """Failure mapping for writes that surface store validation and duplicates."""
        extra = _log_extra(operation, user, document_id)
        if isinstance(error, DocumentValidationError):
            logger.warning(
                f"{RESOURCE} {operation} rejected by store: {error.message}",
                extra={**extra, "error_code": error.code},
            )
            return envelope.validation_error(
                f"Invalid Data, Validation Failed at {error.message}",
            )
        if isinstance(error, DuplicateKeyError):
            logger.warning(
                f"{RESOURCE} {operation} hit a duplicate key",
                extra={**extra, "error_code": error.code},
            )
            return envelope.is_duplicate()
        return self._failure(error, operation, user, document_id=document_id)

    def _failure(
        self, error: Exception, operation: str, user: CallerIdentity,
        document_id: str | None = None, include_message: bool = True,
    ) -> ApiResponse:
        extra = _log_extra(operation, user, document_id)
        if isinstance(error, InvalidQueryError):
            logger.warning(
                f"{RESOURCE} {operation} rejected query: {error.message}",
                extra={**extra, "error_code": error.code},
            )
            return envelope.invalid_param(error.message)
        logger.error(
            f"{RESOURCE} {operation} failed: {error}",
            exc_info=True, extra=extra,
        )
        return envelope.failure_response(str(error) if include_message else None)


def _log_extra(
    operation: str, user: CallerIdentity, document_id: str | None,
) -> dict[str, Any]:
    return {
        "resource": RESOURCE,
        "operation": operation,
        "user_id": user.id,
        "document_id": document_id,
    }
