"""Envelope rendering — ApiResponse to JSONResponse."""

from fastapi.responses import JSONResponse

from order_api.core.response_envelope import ApiResponse


def render(response: ApiResponse) -> JSONResponse:
    return JSONResponse(
        status_code=response.http_status, content=response.to_body(),
    )
