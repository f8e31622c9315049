"""Response Envelope — verifies each constructor's status code, status string and message.

Tests:
    - Every constructor maps to one (http_status, status) pair
    - to_body() always has exactly status/message/data
    - Typed errors render the same envelope shape
"""

import pytest

from order_api.core import response_envelope as envelope
from order_api.core.errors import (
    DuplicateKeyError, InvalidQueryError, UnauthenticatedError,
)
from order_api.core.response_envelope import ResponseStatus


@pytest.mark.parametrize("response, http_status, status, message", [
    (envelope.ok({"a": 1}), 200, ResponseStatus.SUCCESS,
     "Your request is successfully executed"),
    (envelope.record_not_found(), 404, ResponseStatus.RECORD_NOT_FOUND,
     "Record(s) not found with specified criteria."),
    (envelope.bad_request(), 400, ResponseStatus.BAD_REQUEST,
     "Request parameters are invalid or missing."),
    (envelope.invalid_object_id(), 400, ResponseStatus.BAD_REQUEST,
     "Invalid ObjectId."),
    (envelope.invalid_param("bad"), 422, ResponseStatus.VALIDATION_ERROR, "bad"),
    (envelope.validation_error("worse"), 422, ResponseStatus.VALIDATION_ERROR, "worse"),
    (envelope.is_duplicate(), 409, ResponseStatus.CONFLICT,
     "Data duplication found."),
    (envelope.failure_response(), 500, ResponseStatus.FAILURE,
     "Internal server error."),
])
def test_constructor_mapping(response, http_status, status, message):
    assert response.http_status == http_status
    assert response.status == status
    assert response.message == message


def test_to_body_shape():
    body = envelope.ok({"_id": "x"}).to_body()
    assert body == {
        "status": "SUCCESS",
        "message": "Your request is successfully executed",
        "data": {"_id": "x"},
    }


def test_failure_without_message_has_null_data():
    assert envelope.failure_response().to_body()["data"] is None


def test_failure_with_message_carries_it_as_data():
    assert envelope.failure_response("boom").to_body()["data"] == "boom"


def test_unauthenticated_error_envelope():
    exc = UnauthenticatedError()
    body = exc.to_response()
    assert exc.http_status == 401
    assert body["status"] == "UNAUTHORIZED"
    assert body["message"] == "You are not authorized to access the request."
    assert body["data"]["code"] == "UNAUTHORIZED"


def test_store_errors_carry_their_status():
    assert DuplicateKeyError().http_status == 409
    assert DuplicateKeyError().to_response()["status"] == "CONFLICT"
    assert InvalidQueryError("nope").to_response()["message"] == "nope"
