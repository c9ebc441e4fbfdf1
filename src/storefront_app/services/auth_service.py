from __future__ import annotations

import logging

from storefront_sdk import ApiSession
from storefront_sdk.models import TokenResponse, UserResponse

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def has_active_session(self) -> bool:
        return bool(self.session.token)

    @property
    def current_user(self) -> UserResponse | None:
        return self.session.user

    def is_admin(self) -> bool:
        user = self.session.user
        return bool(user and user.is_staff)

    def login(self, email: str, password: str, *, employee: bool = False) -> TokenResponse:
        logger.info("login_attempt", extra={"email": email, "employee": employee})
        client = self.session.auth_client()
        try:
            if employee:
                token = client.employee_login(email, password)
            else:
                token = client.login(email, password)
        except Exception:
            logger.exception("login_failure", extra={"email": email})
            raise
        self.session.establish(token)
        logger.info("login_success", extra={"email": email, "trace_id": token.trace_id})
        return token

    def logout(self) -> None:
        logger.info("logout")
        self.session.clear()
