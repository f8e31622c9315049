"""Document Repository — SQLAlchemy implementation of DocumentRepository for any document model.

Invariants:
    - Each public method is one transaction: commit on success, rollback on any store error
    - Every write is validated against the document schema before reaching the database
    - Non-nullable columns without a default are required on insert and never null on update
    - _id is immutable: an update payload carrying _id raises DocumentValidationError
    - IntegrityError maps to DuplicateKeyError (unique violation) or DocumentValidationError
    - Every store error carries an ErrorContext naming the resource, the operation and,
      for single-document operations, the _id
    - No match returns None (single/bulk updates, single deletes, single reads)

Design Decisions:
    - Generic over the ORM model: the model supplies DOCUMENT_FIELDS and to_document(),
      the pydantic schema supplies types, the repository supplies everything else
    - Documents built after flush and before commit: defaults are populated, no refresh round-trip
    - populate_existing on every entity select: bulk statements bypass the identity map
"""

import logging
from collections.abc import Mapping, Sequence
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Generic, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from order_api.core.domain_types import normalize_object_id
from order_api.core.errors import (
    DocumentValidationError, DuplicateKeyError, ErrorContext, InvalidQueryError,
)
from order_api.core.query_options import (
    build_paginator, parse_select, parse_sort, resolve_page_request,
)
from order_api.core.repository_protocols import Document, DocumentPage, Filter
from order_api.core.validate_request import format_validation_errors
from order_api.db.base import Base
from order_api.infrastructure.query_filter import build_filter_clauses

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    """PostgreSQL reports SQLSTATE 23505; SQLite has no SQLSTATE, only the message."""
    orig = exc.orig
    sqlstate = (
        getattr(orig, "sqlstate", None)
        or getattr(orig, "pgcode", None)
        or getattr(getattr(orig, "__cause__", None), "sqlstate", None)
    )
    if sqlstate:
        return sqlstate == _UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(orig)


def _document_id(filter: Filter) -> str | None:
    """The _id a single-document filter targets, when it names one directly."""
    value = filter.get("_id") if isinstance(filter, Mapping) else None
    return normalize_object_id(value) if isinstance(value, str) else None


class SqlDocumentRepository(Generic[ModelT]):
    """Document-store operations over one SQLAlchemy model."""

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelT],
        document_schema: type[BaseModel],
        *,
        default_page_limit: int = 10,
        max_page_limit: int = 500,
    ):
        self.db = db
        self.model = model
        self.document_schema = document_schema
        self.default_page_limit = default_page_limit
        self.max_page_limit = max_page_limit
        self._attributes: dict[str, str] = dict(model.DOCUMENT_FIELDS)
        self._columns = {
            key: getattr(model, attr) for key, attr in self._attributes.items()
        }
        self._wire_names = {attr: key for key, attr in self._attributes.items()}

    @property
    def document_fields(self) -> frozenset[str]:
        return frozenset(self._attributes)

    @property
    def resource(self) -> str:
        return self.model.__name__

    # ─── Writes ──────────────────────────────────────────────────

    async def create_document(self, data: Mapping[str, Any]) -> Document:
        entity = self.model(**self._validate_insert(data, "create"))
        async with self._transaction("create"):
            self.db.add(entity)
            await self.db.flush()
            document = entity.to_document()
        return document

    async def bulk_insert(
        self, documents: Sequence[Mapping[str, Any]],
    ) -> list[Document]:
        entities = [
            self.model(**self._validate_insert(d, "bulk_insert")) for d in documents
        ]
        async with self._transaction("bulk_insert"):
            self.db.add_all(entities)
            await self.db.flush()
            inserted = [entity.to_document() for entity in entities]
        return inserted

    async def bulk_update(
        self, filter: Filter, data: Mapping[str, Any],
    ) -> dict[str, int] | None:
        values = self._validate_update(data, "bulk_update")
        stmt = update(self.model).values(**values)
        clauses = self._where(filter)
        if clauses:
            stmt = stmt.where(*clauses)
        async with self._transaction("bulk_update"):
            result = await self.db.execute(
                stmt.execution_options(synchronize_session=False),
            )
        if not result.rowcount:
            return None
        return {"matchedCount": result.rowcount, "modifiedCount": result.rowcount}

    async def find_one_and_update_document(
        self, filter: Filter, data: Mapping[str, Any], *, return_new: bool = True,
    ) -> Document | None:
        document_id = _document_id(filter)
        values = self._validate_update(data, "find_one_and_update", document_id)
        async with self._transaction("find_one_and_update", document_id):
            entity = await self._find_one(filter, for_update=True)
            if entity is None:
                return None
            before = entity.to_document()
            for attr, value in values.items():
                setattr(entity, attr, value)
            entity.updated_at = datetime.now(timezone.utc)
            await self.db.flush()
            after = entity.to_document()
        return after if return_new else before

    async def find_one_and_delete_document(self, filter: Filter) -> Document | None:
        async with self._transaction("find_one_and_delete", _document_id(filter)):
            entity = await self._find_one(filter, for_update=True)
            if entity is None:
                return None
            document = entity.to_document()
            await self.db.delete(entity)
            await self.db.flush()
        return document

    async def delete_many(self, filter: Filter) -> dict[str, int]:
        stmt = delete(self.model)
        clauses = self._where(filter)
        if clauses:
            stmt = stmt.where(*clauses)
        async with self._transaction("delete_many"):
            result = await self.db.execute(
                stmt.execution_options(synchronize_session=False),
            )
        return {"deletedCount": result.rowcount or 0}

    # ─── Reads ───────────────────────────────────────────────────

    async def get_single_document(
        self, filter: Filter, options: Mapping[str, Any] | None = None,
    ) -> Document | None:
        projection = parse_select((options or {}).get("select"))
        entity = await self._find_one(filter)
        if entity is None:
            return None
        document = entity.to_document()
        return projection.apply(document) if projection else document

    async def count_document(self, where: Filter) -> int:
        stmt = select(func.count()).select_from(self.model)
        clauses = self._where(where)
        if clauses:
            stmt = stmt.where(*clauses)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def get_all_documents(
        self, query: Filter, options: Mapping[str, Any],
    ) -> DocumentPage:
        page = resolve_page_request(
            options, self.default_page_limit, self.max_page_limit,
        )
        projection = parse_select(options.get("select"))
        order_by = self._order_by(options.get("sort"))
        clauses = self._where(query)

        total = await self.count_document(query)
        stmt = select(self.model).execution_options(populate_existing=True)
        if clauses:
            stmt = stmt.where(*clauses)
        stmt = stmt.order_by(*order_by)
        if page.paginate:
            stmt = stmt.offset(page.offset).limit(page.limit)

        result = await self.db.execute(stmt)
        documents = [entity.to_document() for entity in result.scalars().all()]
        if projection:
            documents = [projection.apply(d) for d in documents]
        return {"data": documents, "paginator": build_paginator(total, page)}

    # ─── Helpers ─────────────────────────────────────────────────

    def _context(self, operation: str, document_id: str | None = None) -> ErrorContext:
        return ErrorContext(
            resource=self.resource, operation=operation, document_id=document_id,
        )

    @asynccontextmanager
    async def _transaction(
        self, operation: str, document_id: str | None = None,
    ) -> AsyncGenerator[None, None]:
        """Commit on success; rollback and translate integrity errors on failure."""
        try:
            yield
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            context = self._context(operation, document_id)
            if _is_unique_violation(e):
                logger.warning(
                    f"Duplicate key on {self.resource} {operation}",
                    extra={
                        "resource": self.resource, "operation": operation,
                        "document_id": document_id,
                    },
                )
                raise DuplicateKeyError(context=context) from e
            raise DocumentValidationError(str(e.orig), context) from e
        except Exception:
            await self.db.rollback()
            raise

    async def _find_one(self, filter: Filter, *, for_update: bool = False):
        stmt = select(self.model).execution_options(populate_existing=True)
        clauses = self._where(filter)
        if clauses:
            stmt = stmt.where(*clauses)
        stmt = stmt.order_by(*self._order_by(None)).limit(1)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalars().first()

    def _where(self, filter: Filter | None) -> list:
        return build_filter_clauses(self._columns, filter or {})

    def _order_by(self, sort: Any) -> list:
        keys = parse_sort(sort)
        order_by = []
        for field, descending in keys:
            column = self._columns.get(field)
            if column is None:
                raise InvalidQueryError(f"Unknown sort field '{field}'")
            order_by.append(column.desc() if descending else column.asc())
        if not keys:
            order_by.append(self._columns["createdAt"].asc())
        order_by.append(self._columns["_id"].asc())
        return order_by

    def _validate(self, data: Mapping[str, Any], context: ErrorContext) -> dict[str, Any]:
        if not isinstance(data, Mapping):
            raise DocumentValidationError("document must be an object", context)
        try:
            parsed = self.document_schema.model_validate(data)
        except ValidationError as e:
            raise DocumentValidationError(format_validation_errors(e), context) from e
        values = parsed.model_dump(exclude_unset=True)
        self._check_not_null(values, context)
        return values

    def _validate_insert(self, data: Mapping[str, Any], operation: str) -> dict[str, Any]:
        context = self._context(operation)
        values = self._validate(data, context)
        if values.get("id") is None:
            values.pop("id", None)
        missing = [
            self._wire_names[column.key]
            for column in self.model.__table__.columns
            if not column.nullable
            and not column.primary_key
            and column.default is None
            and column.server_default is None
            and column.key not in values
        ]
        if missing:
            raise DocumentValidationError(
                "; ".join(f"Path `{name}` is required." for name in missing),
                context,
            )
        return values

    def _validate_update(
        self, data: Mapping[str, Any], operation: str, document_id: str | None = None,
    ) -> dict[str, Any]:
        context = self._context(operation, document_id)
        if isinstance(data, Mapping) and "_id" in data:
            raise DocumentValidationError(
                "Performing an update on the path '_id' would modify the immutable field '_id'",
                context,
            )
        return self._validate(data, context)

    def _check_not_null(self, values: dict[str, Any], context: ErrorContext) -> None:
        table = self.model.__table__
        nulls = [
            self._wire_names[attr]
            for attr, value in values.items()
            if value is None
            and attr in table.columns
            and not table.columns[attr].nullable
            and not table.columns[attr].primary_key
        ]
        if nulls:
            raise DocumentValidationError(
                "; ".join(f"Path `{name}` cannot be null." for name in nulls),
                context,
            )
