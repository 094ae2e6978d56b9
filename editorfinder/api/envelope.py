"""Response envelope helpers: ``{data, success, error?, timestamp}``."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from editorfinder.models.common import ApiEnvelope


def envelope(data: Any, *, success: bool = True, error: str | None = None) -> dict[str, Any]:
    return jsonable_encoder(
        ApiEnvelope(data=data, success=success, error=error),
        exclude_none=True,
    )


def envelope_response(
    data: Any,
    *,
    status_code: int = 200,
    success: bool = True,
    error: str | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope(data, success=success, error=error),
    )


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return envelope_response(
        {"message": message}, status_code=status_code, success=False, error=error,
    )
