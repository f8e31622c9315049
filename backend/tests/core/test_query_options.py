"""Query Options — verifies page resolution, paginator metadata, sort and select parsing.

Tests:
    - Defaults, clamping and pagination=False in resolve_page_request
    - Paginator arithmetic (pageCount, slNo, prev/next)
    - Sort accepts dicts and "-field" strings; rejects unknown directions
    - Select rejects mixed inclusion/exclusion and keeps _id on inclusion
"""

import pytest

from order_api.core.errors import InvalidQueryError
from order_api.core.query_options import (
    PageRequest, build_paginator, parse_select, parse_sort, resolve_page_request,
)


# --- resolve_page_request ------------------------------------------------------

def test_page_request_defaults():
    page = resolve_page_request({}, default_limit=10, max_limit=500)
    assert page == PageRequest(page=1, limit=10)
    assert page.offset == 0


def test_page_request_offset():
    page = resolve_page_request({"page": 3, "limit": 20}, 10, 500)
    assert page.offset == 40


def test_page_request_clamps_limit():
    page = resolve_page_request({"limit": 10_000}, 10, 500)
    assert page.limit == 500


def test_pagination_false_returns_everything():
    page = resolve_page_request({"pagination": False, "limit": 5}, 10, 500)
    assert page.paginate is False
    assert page.limit is None
    assert page.offset == 0


@pytest.mark.parametrize("options", [
    {"page": 0}, {"limit": -1}, {"page": "2"}, {"limit": True},
])
def test_page_request_rejects_bad_values(options):
    with pytest.raises(InvalidQueryError):
        resolve_page_request(options, 10, 500)


# --- build_paginator -----------------------------------------------------------

def test_paginator_middle_page():
    paginator = build_paginator(25, PageRequest(page=2, limit=10))
    assert paginator == {
        "itemCount": 25,
        "perPage": 10,
        "pageCount": 3,
        "currentPage": 2,
        "slNo": 11,
        "hasPrevPage": True,
        "hasNextPage": True,
        "prev": 1,
        "next": 3,
    }


def test_paginator_empty_result_has_one_page():
    paginator = build_paginator(0, PageRequest(page=1, limit=10))
    assert paginator["pageCount"] == 1
    assert paginator["hasNextPage"] is False
    assert paginator["prev"] is None


def test_paginator_unpaginated():
    paginator = build_paginator(7, PageRequest(page=1, limit=None, paginate=False))
    assert paginator["perPage"] == 7
    assert paginator["pageCount"] == 1


# --- parse_sort / parse_select -------------------------------------------------

def test_sort_from_dict():
    assert parse_sort({"quantity": -1, "name": "asc"}) == [
        ("quantity", True), ("name", False),
    ]


def test_sort_from_string():
    assert parse_sort("-createdAt name") == [("createdAt", True), ("name", False)]


def test_sort_empty():
    assert parse_sort(None) == []
    assert parse_sort("") == []


def test_sort_rejects_unknown_direction():
    with pytest.raises(InvalidQueryError):
        parse_sort({"name": 2})
    with pytest.raises(InvalidQueryError):
        parse_sort({"name": ["asc"]})


def test_select_inclusion_keeps_id():
    projection = parse_select(["name"])
    document = {"_id": "x", "name": "Widget", "price": 3.0}
    assert projection.apply(document) == {"_id": "x", "name": "Widget"}


def test_select_exclusion_from_string():
    projection = parse_select("-price -note")
    assert projection.exclude
    assert projection.apply({"_id": "x", "price": 1, "note": "n"}) == {"_id": "x"}


def test_select_rejects_mixed_projection():
    with pytest.raises(InvalidQueryError):
        parse_select(["name", "-price"])


def test_select_none_or_empty():
    assert parse_select(None) is None
    assert parse_select([]) is None
