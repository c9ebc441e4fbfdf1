from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from storefront_sdk.exceptions import ApiError
from storefront_sdk.ui_errors import to_user_facing_error


@dataclass
class NotificationCenter:
    messages: list[dict[str, Any]] = field(default_factory=list)

    def push(self, *, level: str, title: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
        payload = {
            "level": level,
            "title": title,
            "message": message,
            "details": details or {},
        }
        self.messages.append(payload)
        return payload

    def report_error(self, exc: ApiError, action: str) -> dict[str, Any]:
        user_facing = to_user_facing_error(exc)
        return self.push(
            level="error",
            title=action,
            message=user_facing.message,
            details={
                "code": user_facing.code,
                "technical": user_facing.details,
                "trace_id": user_facing.trace_id,
            },
        )

    def errors(self) -> list[dict[str, Any]]:
        return [message for message in self.messages if message["level"] == "error"]

    def clear(self) -> None:
        self.messages.clear()

    def render(self) -> dict[str, Any]:
        return {"count": len(self.messages), "messages": list(self.messages)}
