"""Boundary Protocols — contracts between the request handlers and the document store.

Invariants:
    - Handlers depend on DocumentRepository only, never on SQLAlchemy
    - Documents cross the boundary as plain dicts keyed by wire names (_id, addedBy, ...)
    - "No match" is None (or an empty page), never an exception
    - Store failures are typed: DocumentValidationError, DuplicateKeyError, InvalidQueryError

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypedDict

Document = dict[str, Any]
Filter = Mapping[str, Any]


class Paginator(TypedDict):
    itemCount: int
    perPage: int
    pageCount: int
    currentPage: int
    slNo: int
    hasPrevPage: bool
    hasNextPage: bool
    prev: int | None
    next: int | None


class DocumentPage(TypedDict):
    data: list[Document]
    paginator: Paginator


class DocumentRepository(Protocol):
    """Contract for one resource's document persistence — implemented by infrastructure."""

    @property
    def document_fields(self) -> frozenset[str]: ...

    async def create_document(self, data: Mapping[str, Any]) -> Document: ...
    async def get_all_documents(
        self, query: Filter, options: Mapping[str, Any],
    ) -> DocumentPage: ...
    async def count_document(self, where: Filter) -> int: ...
    async def bulk_update(
        self, filter: Filter, data: Mapping[str, Any],
    ) -> dict[str, int] | None: ...
    async def bulk_insert(
        self, documents: Sequence[Mapping[str, Any]],
    ) -> list[Document]: ...
    async def delete_many(self, filter: Filter) -> dict[str, int]: ...
    async def find_one_and_update_document(
        self, filter: Filter, data: Mapping[str, Any], *, return_new: bool = True,
    ) -> Document | None: ...
    async def find_one_and_delete_document(self, filter: Filter) -> Document | None: ...
    async def get_single_document(
        self, filter: Filter, options: Mapping[str, Any] | None = None,
    ) -> Document | None: ...
