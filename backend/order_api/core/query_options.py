"""Query Options — pure parsing of page/limit/sort/select and paginator metadata.

Invariants:
    - page and limit are positive ints; limit is clamped to the configured maximum
    - pagination=False returns every match on one page (limit is None)
    - Paginator keys: itemCount, perPage, pageCount, currentPage, slNo,
      hasPrevPage, hasNextPage, prev, next
    - pageCount is never 0 (an empty result still has one page)
    - Projections always keep _id unless excluded explicitly
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from order_api.core.errors import InvalidQueryError

_ASCENDING = {1, "1", "asc", "ascending"}
_DESCENDING = {-1, "-1", "desc", "descending"}


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int | None
    paginate: bool = True

    @property
    def offset(self) -> int:
        if not self.paginate or self.limit is None:
            return 0
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Projection:
    fields: frozenset[str]
    exclude: bool = False

    def apply(self, document: dict) -> dict:
        if self.exclude:
            return {k: v for k, v in document.items() if k not in self.fields}
        return {
            k: v for k, v in document.items()
            if k in self.fields or k == "_id"
        }


def _positive_int(value: Any, default: int, name: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQueryError(f"options.{name} must be an integer")
    if value < 1:
        raise InvalidQueryError(f"options.{name} must be greater than or equal to 1")
    return value


def resolve_page_request(
    options: Mapping[str, Any], default_limit: int, max_limit: int,
) -> PageRequest:
    """Turn raw list options into a PageRequest."""
    if options.get("pagination") is False:
        return PageRequest(page=1, limit=None, paginate=False)
    page = _positive_int(options.get("page"), 1, "page")
    limit = _positive_int(options.get("limit"), default_limit, "limit")
    return PageRequest(page=page, limit=min(limit, max_limit))


def build_paginator(total: int, request: PageRequest) -> dict:
    """Paginator metadata for one page of results."""
    if not request.paginate or request.limit is None:
        return {
            "itemCount": total,
            "perPage": total,
            "pageCount": 1,
            "currentPage": 1,
            "slNo": 1,
            "hasPrevPage": False,
            "hasNextPage": False,
            "prev": None,
            "next": None,
        }
    page_count = math.ceil(total / request.limit) or 1
    has_prev = request.page > 1
    has_next = request.page < page_count
    return {
        "itemCount": total,
        "perPage": request.limit,
        "pageCount": page_count,
        "currentPage": request.page,
        "slNo": request.offset + 1,
        "hasPrevPage": has_prev,
        "hasNextPage": has_next,
        "prev": request.page - 1 if has_prev else None,
        "next": request.page + 1 if has_next else None,
    }


def parse_sort(sort: Any) -> list[tuple[str, bool]]:
    """Return (field, descending) pairs from a dict or a "-a b" string."""
    if sort is None or sort == "":
        return []
    if isinstance(sort, str):
        keys = []
        for token in sort.split():
            if token.startswith("-"):
                keys.append((token[1:], True))
            else:
                keys.append((token.lstrip("+"), False))
        return keys
    if isinstance(sort, Mapping):
        keys = []
        for field, direction in sort.items():
            if not isinstance(direction, (int, str)):
                direction = repr(direction)
            if direction in _ASCENDING:
                keys.append((field, False))
            elif direction in _DESCENDING:
                keys.append((field, True))
            else:
                raise InvalidQueryError(
                    f"Invalid sort direction for '{field}': {direction!r}",
                )
        return keys
    raise InvalidQueryError("options.sort must be an object or a string")


def parse_select(select: Any) -> Projection | None:
    """Return a Projection from a list or a space-separated string."""
    if select is None:
        return None
    if isinstance(select, str):
        names = select.split()
    elif isinstance(select, (list, tuple)) and all(isinstance(n, str) for n in select):
        names = list(select)
    else:
        raise InvalidQueryError("options.select must be a list of field names or a string")
    if not names:
        return None
    excluded = [n[1:] for n in names if n.startswith("-")]
    included = [n for n in names if not n.startswith("-")]
    if excluded and included:
        raise InvalidQueryError("Projection cannot mix inclusion and exclusion")
    return Projection(frozenset(excluded or included), exclude=bool(excluded))
