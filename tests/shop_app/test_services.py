from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import pytest

from storefront_sdk.exceptions import ConflictError, ServerError
from storefront_sdk.models import CustomerReportRow, Employee, TokenResponse, UserResponse

from storefront_app.services.auth_service import AuthService
from storefront_app.services.employee_service import EmployeeService, EmployeeServiceError
from storefront_app.services.report_service import ReportService


def _api_error(cls, code: str = "FAILED", message: str = "failed"):
    return cls(code=code, message=message, details=None, trace_id="trace-x", status_code=500)


@dataclass
class FakeAuthClient:
    role: str = "CUSTOMER"
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    def login(self, email: str, password: str) -> TokenResponse:
        self.calls.append("login")
        return self._token(email)

    def employee_login(self, email: str, password: str) -> TokenResponse:
        self.calls.append("employee_login")
        return self._token(email)

    def _token(self, email: str) -> TokenResponse:
        if self.error:
            raise self.error
        return TokenResponse(token="tok", user=UserResponse(id=1, email=email, role=self.role))


@dataclass
class FakeEmployeesClient:
    rows: list[Employee] = field(default_factory=list)
    error: Exception | None = None

    def _check(self) -> None:
        if self.error:
            raise self.error

    def list_employees(self) -> list[Employee]:
        self._check()
        return list(self.rows)

    def create_employee(self, employee) -> Employee:
        self._check()
        return Employee(id=9, **dict(employee))

    def update_employee(self, employee_id: int, changes) -> Employee:
        self._check()
        return Employee(id=employee_id, **dict(changes))

    def update_password(self, employee_id: int, password: str) -> None:
        self._check()

    def delete_employee(self, employee_id: int) -> None:
        self._check()


@dataclass
class FakeReportsClient:
    rows: list[CustomerReportRow] = field(default_factory=list)
    error: Exception | None = None
    ranges: list[tuple] = field(default_factory=list)

    def customer_report(self, start_at=None, end_at=None) -> list[CustomerReportRow]:
        self.ranges.append((start_at, end_at))
        if self.error:
            raise self.error
        return list(self.rows)


class FakeSession:
    def __init__(self, auth=None, employees=None, reports=None) -> None:
        self.token: str | None = None
        self.user: UserResponse | None = None
        self._auth = auth or FakeAuthClient()
        self._employees = employees or FakeEmployeesClient()
        self._reports = reports or FakeReportsClient()

    def auth_client(self) -> FakeAuthClient:
        return self._auth

    def employees_client(self) -> FakeEmployeesClient:
        return self._employees

    def reports_client(self) -> FakeReportsClient:
        return self._reports

    def establish(self, token: TokenResponse) -> None:
        self.token = token.token
        self.user = token.user

    def clear(self) -> None:
        self.token = None
        self.user = None


@pytest.mark.parametrize(("role", "admin"), [("MANAGER", True), ("STAFF", True), ("CUSTOMER", False)])
def test_login_routes_by_role(role: str, admin: bool) -> None:
    session = FakeSession(auth=FakeAuthClient(role=role))
    service = AuthService(session)

    service.login("user@shop.test", "pw")

    assert service.has_active_session()
    assert service.is_admin() is admin


def test_employee_login_and_logout() -> None:
    auth = FakeAuthClient(role="STAFF")
    service = AuthService(FakeSession(auth=auth))

    service.login("staff@shop.test", "pw", employee=True)
    service.logout()

    assert auth.calls == ["employee_login"]
    assert not service.has_active_session()
    assert service.current_user is None


def test_login_failure_leaves_session_empty() -> None:
    session = FakeSession(auth=FakeAuthClient(error=_api_error(ServerError)))

    with pytest.raises(ServerError):
        AuthService(session).login("user@shop.test", "pw")

    assert session.token is None


def test_employee_fetch_failure_is_reported() -> None:
    reported: list[str] = []
    service = EmployeeService(
        FakeSession(employees=FakeEmployeesClient(error=_api_error(ServerError))),
        on_error=lambda exc, action: reported.append(action),
    )

    assert service.fetch() == []
    assert service.loaded
    assert reported == ["fetch_employees"]


def test_employee_mutations_track_local_list() -> None:
    employees = FakeEmployeesClient(rows=[Employee(id=1, first_name="Ada")])
    service = EmployeeService(FakeSession(employees=employees))
    service.fetch()

    service.create({"first_name": "Lin"})
    service.update(1, {"first_name": "Ada L."})
    service.delete(9)

    assert [(item.id, item.first_name) for item in service.employees] == [(1, "Ada L.")]


def test_employee_mutation_failure_is_normalized() -> None:
    employees = FakeEmployeesClient(error=_api_error(ConflictError, "EMAIL_TAKEN", "Email already used"))
    service = EmployeeService(FakeSession(employees=employees))

    with pytest.raises(EmployeeServiceError) as excinfo:
        service.create({"email": "dup@shop.test"})

    assert str(excinfo.value) == "Email already used"
    assert excinfo.value.trace_id == "trace-x"
    assert "EMAIL_TAKEN" in excinfo.value.details


def test_update_password_requires_value() -> None:
    service = EmployeeService(FakeSession())

    with pytest.raises(EmployeeServiceError):
        service.update_password(1, "")


def test_report_service_loads_rows() -> None:
    reports = FakeReportsClient(rows=[CustomerReportRow(customer_id=1, customer_email="a@b.c")])
    service = ReportService(FakeSession(reports=reports))

    rows = service.load_customer_report(date(2025, 4, 1), date(2025, 4, 30))

    assert [row.customer_id for row in rows] == [1]
    assert reports.ranges == [(date(2025, 4, 1), date(2025, 4, 30))]
    assert service.loaded
    assert service.error is None


def test_report_service_failure_is_reported() -> None:
    reported: list[str] = []
    service = ReportService(
        FakeSession(reports=FakeReportsClient(error=_api_error(ServerError, message="report down"))),
        on_error=lambda exc, action: reported.append(action),
    )

    assert service.load_customer_report() == []
    assert service.error == "report down"
    assert reported == ["fetch_customer_report"]
