"""Error Handlers — global exception handlers for the OrderItem API.

Invariants:
    - OrderApiError → its own envelope and HTTP status, logged with its ErrorContext
    - RequestValidationError (malformed JSON, non-object body) → 400 BAD_REQUEST envelope
    - Exception (catch-all) → 500 FAILURE envelope, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (OrderApiError), validation (Pydantic), catch-all (Exception)
    - Handlers already convert store errors to envelopes; these cover what escapes them
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from order_api.core.errors import OrderApiError, ErrorSeverity
from order_api.core.response_envelope import bad_request, failure_response

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(OrderApiError)
    async def order_api_error_handler(request: Request, exc: OrderApiError):
        """Handle all OrderItem API domain/infrastructure errors."""
        level = (
            logging.WARNING if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)
            else logging.ERROR
        )
        logger.log(
            level, f"OrderApiError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "resource": exc.context.resource,
                "operation": exc.context.operation,
                "document_id": exc.context.document_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        body = bad_request().to_body()
        body["data"] = _validation_details(exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=body,
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True, extra={"path": request.url.path},
        )
        response = failure_response()
        return JSONResponse(
            status_code=response.http_status, content=response.to_body(),
        )


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
