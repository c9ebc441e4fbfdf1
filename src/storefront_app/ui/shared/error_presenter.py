from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from storefront_sdk.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    ServerError,
    TransportError,
    ValidationError,
)


@dataclass(frozen=True)
class PresentedError:
    category: str
    user_message: str
    safe_to_retry: bool
    code: str
    details: dict[str, Any]


class ErrorPresenter:
    """Maps client failures to consistent display payloads."""

    _CATEGORY_MESSAGES = {
        "validation": "Some product fields are invalid. Check them and save again.",
        "unauthenticated": "Please sign in again to continue.",
        "permission_denied": "Only staff accounts can change the store.",
        "conflict": "The product changed on the server. Reload and try again.",
        "not_found": "That product no longer exists.",
        "transport": "The store is unreachable right now. Please retry.",
        "server": "Service error. Try again shortly.",
        "unknown": "Something went wrong. Please try again.",
    }

    # order matters: subclasses before their bases
    _CATEGORY_BY_TYPE: tuple[tuple[type[ApiError], str], ...] = (
        (TransportError, "transport"),
        (AuthError, "unauthenticated"),
        (PermissionError, "permission_denied"),
        (NotFoundError, "not_found"),
        (ValidationError, "validation"),
        (ConflictError, "conflict"),
        (ServerError, "server"),
    )

    def present(self, exc: Exception, *, action: str, allow_retry: bool = False) -> PresentedError:
        category = self._categorize(exc)
        code = str(getattr(exc, "code", None) or "UNKNOWN").upper()
        safe_to_retry = allow_retry and category in {"transport", "server"}
        technical = {
            "code": code,
            "trace_id": getattr(exc, "trace_id", None),
            "action": action,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "raw_details": getattr(exc, "details", None),
        }
        return PresentedError(
            category=category,
            user_message=self._CATEGORY_MESSAGES[category],
            safe_to_retry=safe_to_retry,
            code=code,
            details=technical,
        )

    def _categorize(self, exc: Exception) -> str:
        for error_type, category in self._CATEGORY_BY_TYPE:
            if isinstance(exc, error_type):
                return category
        return "unknown"
