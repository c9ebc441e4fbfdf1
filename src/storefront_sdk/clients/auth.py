from __future__ import annotations

from ..exceptions import AuthError
from ..http_client import unwrap_data
from ..models import TokenResponse
from .base import BaseClient


class AuthClient(BaseClient):
    def login(self, email: str, password: str) -> TokenResponse:
        payload = {"email": email, "password": password}
        data = self.http.request("POST", "/login", json_body=payload, module="auth", operation="login")
        return _token_from(unwrap_data(data), data)

    def employee_login(self, email: str, password: str) -> TokenResponse:
        payload = {"email": email, "password": password}
        data = self.http.request(
            "POST", "/employee/login", json_body=payload, module="auth", operation="employee_login"
        )
        return _token_from(unwrap_data(data), data)


def _token_from(body: object, raw: object) -> TokenResponse:
    if not isinstance(body, dict) or not body.get("token"):
        raise AuthError(
            code="TOKEN_MISSING",
            message="Login response did not include a token",
            details=None,
            trace_id=None,
            status_code=401,
            raw_payload=raw,
        )
    return TokenResponse.model_validate(body)
