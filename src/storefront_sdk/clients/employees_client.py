from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import BaseModel

from ..http_client import unwrap_data, unwrap_rows
from ..models import Employee, EmployeeCreate, EmployeeUpdate
from .base import BaseClient

EMPLOYEE_PATH = "/employee"


def _body(payload: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    return dict(payload)


@dataclass
class EmployeesClient(BaseClient):
    def list_employees(self) -> list[Employee]:
        payload = self._request(
            "GET", EMPLOYEE_PATH, use_get_cache=False, module="employees", operation="list_employees"
        )
        return [Employee.model_validate(row) for row in unwrap_rows(payload)]

    def create_employee(self, employee: EmployeeCreate | Mapping[str, Any]) -> Employee:
        payload = self._request(
            "POST",
            EMPLOYEE_PATH,
            json_body=_body(employee),
            module="employees",
            operation="create_employee",
            invalidate_paths=[EMPLOYEE_PATH],
        )
        return self._employee(payload)

    def update_employee(self, employee_id: int, changes: EmployeeUpdate | Mapping[str, Any]) -> Employee:
        payload = self._request(
            "PATCH",
            f"{EMPLOYEE_PATH}/{employee_id}",
            json_body=_body(changes),
            module="employees",
            operation="update_employee",
            invalidate_paths=[EMPLOYEE_PATH],
        )
        return self._employee(payload)

    def update_password(self, employee_id: int, password: str) -> Any:
        payload = self._request(
            "PATCH",
            f"{EMPLOYEE_PATH}/{employee_id}/password",
            json_body={"password": password},
            module="employees",
            operation="update_password",
        )
        return unwrap_data(payload)

    def delete_employee(self, employee_id: int) -> None:
        self._request(
            "DELETE",
            f"{EMPLOYEE_PATH}/{employee_id}",
            module="employees",
            operation="delete_employee",
            invalidate_paths=[EMPLOYEE_PATH],
        )

    @staticmethod
    def _employee(payload: Any) -> Employee:
        data = unwrap_data(payload)
        if not isinstance(data, dict):
            raise ValueError("Expected employee response to be a JSON object")
        return Employee.model_validate(data)
