"""Response Envelope — the fixed set of outcome shapes every handler funnels into.

Invariants:
    - Every body is {"status", "message", "data"}
    - Each constructor maps to exactly one (http_status, status) pair
    - Pure values: no FastAPI import, rendering happens in api/responses.py
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResponseStatus(str, Enum):
    """Envelope status strings seen by clients."""
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    BAD_REQUEST = "BAD_REQUEST"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"


@dataclass(frozen=True)
class ApiResponse:
    """One handler outcome, ready to be rendered."""
    http_status: int
    status: ResponseStatus
    message: str
    data: Any = None

    def to_body(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "data": self.data,
        }


def ok(data: Any = None) -> ApiResponse:
    return ApiResponse(
        200, ResponseStatus.SUCCESS,
        "Your request is successfully executed", data,
    )


def record_not_found() -> ApiResponse:
    return ApiResponse(
        404, ResponseStatus.RECORD_NOT_FOUND,
        "Record(s) not found with specified criteria.",
    )


def bad_request() -> ApiResponse:
    return ApiResponse(
        400, ResponseStatus.BAD_REQUEST,
        "Request parameters are invalid or missing.",
    )


def invalid_object_id() -> ApiResponse:
    return ApiResponse(400, ResponseStatus.BAD_REQUEST, "Invalid ObjectId.")


def invalid_param(message: str) -> ApiResponse:
    """Request payload failed schema validation."""
    return ApiResponse(422, ResponseStatus.VALIDATION_ERROR, message)


def validation_error(message: str) -> ApiResponse:
    """Store rejected the document."""
    return ApiResponse(422, ResponseStatus.VALIDATION_ERROR, message)


def is_duplicate() -> ApiResponse:
    return ApiResponse(409, ResponseStatus.CONFLICT, "Data duplication found.")


def failure_response(data: Any = None) -> ApiResponse:
    return ApiResponse(
        500, ResponseStatus.FAILURE, "Internal server error.", data,
    )
