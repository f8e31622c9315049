"""Document Filter Translation — document-store query objects to SQLAlchemy clauses.

Invariants:
    - Top-level keys are wire field names or $and/$or; anything else raises InvalidQueryError
    - Field operators: $eq $ne $gt $gte $lt $lte $in $nin $exists
    - null semantics follow the document store: {f: null} and $in [null] match NULL,
      $ne/$nin match NULL unless null is the excluded value
    - Values are coerced to the column's python type; mismatches raise InvalidQueryError
"""

import operator
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from order_api.core.errors import InvalidQueryError

_COMPARISONS = {
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
}


def build_filter_clauses(
    columns: Mapping[str, Any], query: Any,
) -> list[ColumnElement[bool]]:
    """Translate one filter object into a list of AND-ed clauses."""
    if not isinstance(query, Mapping):
        raise InvalidQueryError("Filter must be an object")
    clauses = []
    for key, value in query.items():
        if key in ("$and", "$or"):
            clauses.append(_logical(columns, key, value))
        elif key.startswith("$"):
            raise InvalidQueryError(f"Unsupported operator '{key}'")
        else:
            column = columns.get(key)
            if column is None:
                raise InvalidQueryError(f"Unknown field '{key}'")
            clauses.extend(_field_clauses(column, key, value))
    return clauses


def _logical(columns: Mapping[str, Any], key: str, value: Any) -> ColumnElement[bool]:
    if not isinstance(value, list) or not value:
        raise InvalidQueryError(f"{key} must be a non-empty array")
    groups = [and_(true(), *build_filter_clauses(columns, item)) for item in value]
    return or_(*groups) if key == "$or" else and_(*groups)


def _is_operator_object(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and bool(value)
        and all(isinstance(k, str) and k.startswith("$") for k in value)
    )


def _field_clauses(column, key: str, value: Any) -> list[ColumnElement[bool]]:
    if not _is_operator_object(value):
        return [_equals(column, key, value)]

    clauses = []
    for op, operand in value.items():
        if op == "$eq":
            clauses.append(_equals(column, key, operand))
        elif op == "$ne":
            clauses.append(_not_equals(column, key, operand))
        elif op in _COMPARISONS:
            if operand is None:
                raise InvalidQueryError(f"{op} on '{key}' requires a value")
            clauses.append(_COMPARISONS[op](column, _coerce(column, key, operand)))
        elif op in ("$in", "$nin"):
            clauses.append(_membership(column, key, op, operand))
        elif op == "$exists":
            clauses.append(column.is_not(None) if operand else column.is_(None))
        else:
            raise InvalidQueryError(f"Unsupported operator '{op}' on '{key}'")
    return clauses


def _equals(column, key: str, value: Any) -> ColumnElement[bool]:
    if value is None:
        return column.is_(None)
    return column == _coerce(column, key, value)


def _not_equals(column, key: str, value: Any) -> ColumnElement[bool]:
    if value is None:
        return column.is_not(None)
    return or_(column != _coerce(column, key, value), column.is_(None))


def _membership(column, key: str, op: str, operand: Any) -> ColumnElement[bool]:
    if not isinstance(operand, list):
        raise InvalidQueryError(f"{op} on '{key}' requires an array")
    values = [_coerce(column, key, v) for v in operand if v is not None]
    has_null = len(values) != len(operand)
    if op == "$in":
        clause = column.in_(values)
        return or_(clause, column.is_(None)) if has_null else clause
    if has_null:
        return and_(column.not_in(values), column.is_not(None))
    return or_(column.not_in(values), column.is_(None))


def _coerce(column, key: str, value: Any) -> Any:
    """Match a JSON value to the column's python type."""
    if isinstance(value, (Mapping, list)):
        raise InvalidQueryError(f"Invalid value for '{key}': {value!r}")
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value

    if python_type is datetime and isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise InvalidQueryError(f"Invalid date for '{key}': {value!r}")
    if python_type is bool:
        if isinstance(value, bool):
            return value
    elif python_type in (int, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
    elif isinstance(value, python_type):
        return value
    raise InvalidQueryError(f"Invalid value for '{key}': {value!r}")
