from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

_BY_STATUS: dict[int, tuple[type[ApiError], str]] = {
    400: (ValidationError, "VALIDATION_ERROR"),
    401: (AuthError, "UNAUTHORIZED"),
    403: (PermissionError, "FORBIDDEN"),
    404: (NotFoundError, "NOT_FOUND"),
    409: (ConflictError, "CONFLICT"),
    422: (ValidationError, "VALIDATION_ERROR"),
    429: (RateLimitError, "RATE_LIMITED"),
}


def _classify(status_code: int) -> tuple[type[ApiError], str]:
    if status_code >= 500:
        return ServerError, "SERVER_ERROR"
    return _BY_STATUS.get(status_code, (ApiError, "HTTP_ERROR"))


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    body = dict(payload or {})
    error_cls, fallback_code = _classify(status_code)
    # the store API reports failures as {"message": ..., "error": ...}
    code = body.get("code") or body.get("error") or fallback_code
    server_trace = body.get("trace_id")
    return error_cls(
        code=str(code),
        message=str(body.get("message") or "Request failed"),
        details=body.get("details"),
        trace_id=str(server_trace) if server_trace is not None else trace_id,
        status_code=status_code,
        raw_payload=body,
    )
