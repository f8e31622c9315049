"""Request Validation — schema checks that run before any store access.

Invariants:
    - Never raises: every outcome is a ValidationResult
    - message lists every failing field as "<loc>: <reason>", joined by "; "
    - value holds the parsed model only when is_valid is True
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

_LOGICAL_OPERATORS = frozenset({"$and", "$or"})


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str = ""
    value: Any = None


def format_validation_errors(exc: ValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    return "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc']) or 'value'}: {err['msg']}"
        for err in exc.errors()
    )


def validate_params_with_schema(
    payload: Any, schema: type[BaseModel],
) -> ValidationResult:
    """Validate a create/update payload against a schema."""
    if not isinstance(payload, Mapping):
        return ValidationResult(False, "payload must be an object")
    try:
        value = schema.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(False, format_validation_errors(e))
    return ValidationResult(True, value=value)


def validate_filter_with_schema(
    payload: Any,
    filter_schema: type[BaseModel],
    document_fields: Iterable[str] | None = None,
) -> ValidationResult:
    """Validate a list/count body; optionally restrict query keys to document fields."""
    if not isinstance(payload, Mapping):
        return ValidationResult(False, "payload must be an object")
    try:
        value = filter_schema.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(False, format_validation_errors(e))

    query = payload.get("query")
    if document_fields is not None and isinstance(query, Mapping):
        allowed = set(document_fields) | _LOGICAL_OPERATORS
        unknown = [key for key in query if key not in allowed]
        if unknown:
            return ValidationResult(
                False,
                "; ".join(f'"query.{key}" is not allowed' for key in unknown),
            )
    return ValidationResult(True, value=value)
