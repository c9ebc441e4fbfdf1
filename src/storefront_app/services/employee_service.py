from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from storefront_sdk import ApiSession, to_user_facing_error
from storefront_sdk.exceptions import ApiError
from storefront_sdk.models import Employee, EmployeeCreate, EmployeeUpdate

from ..logging_setup import log_json
from ..shop.catalog_cache import ErrorChannel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeServiceError(RuntimeError):
    message: str
    details: str | None = None
    trace_id: str | None = None

    def __str__(self) -> str:
        return self.message


class EmployeeService:
    """Employee roster for the admin screens, kept in step with the server."""

    def __init__(self, session: ApiSession, *, on_error: ErrorChannel | None = None) -> None:
        self.session = session
        self.on_error = on_error
        self.employees: list[Employee] = []
        self.loaded = False

    def fetch(self) -> list[Employee]:
        self.loaded = False
        try:
            self.employees = self.session.employees_client().list_employees()
        except ApiError as exc:
            logger.warning("employees_fetch_failed", extra={"code": exc.code, "trace_id": exc.trace_id})
            if self.on_error:
                self.on_error(exc, "fetch_employees")
        self.loaded = True
        return list(self.employees)

    def create(self, employee: EmployeeCreate | Mapping[str, Any]) -> Employee:
        created = self._call("create_employee", None, lambda client: client.create_employee(employee))
        self.employees = [*self.employees, created]
        return created

    def update(self, employee_id: int, changes: EmployeeUpdate | Mapping[str, Any]) -> Employee:
        updated = self._call(
            "update_employee", employee_id, lambda client: client.update_employee(employee_id, changes)
        )
        self.employees = [updated if item.id == employee_id else item for item in self.employees]
        return updated

    def update_password(self, employee_id: int, password: str) -> None:
        if not password:
            raise EmployeeServiceError(message="Password must not be empty", details="CLIENT_VALIDATION")
        self._call("update_password", employee_id, lambda client: client.update_password(employee_id, password))

    def delete(self, employee_id: int) -> None:
        self._call("delete_employee", employee_id, lambda client: client.delete_employee(employee_id))
        self.employees = [item for item in self.employees if item.id != employee_id]

    def _call(self, action: str, employee_id: int | None, call: Callable[[Any], Any]) -> Any:
        try:
            result = call(self.session.employees_client())
        except Exception as exc:
            log_json(logger, {"module": "employees", "action": action, "employee_id": employee_id, "outcome": "error"})
            raise self._normalize_error(exc) from exc
        log_json(logger, {"module": "employees", "action": action, "employee_id": employee_id, "outcome": "success"})
        return result

    @staticmethod
    def _normalize_error(exc: Exception) -> EmployeeServiceError:
        if isinstance(exc, EmployeeServiceError):
            return exc
        if isinstance(exc, ApiError):
            user_facing = to_user_facing_error(exc)
            return EmployeeServiceError(
                message=user_facing.message,
                details=user_facing.details,
                trace_id=user_facing.trace_id,
            )
        return EmployeeServiceError(message=str(exc) or "Unexpected employee client error")
