from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront_sdk import ApiSession, ClientConfig, load_config, to_user_facing_error
from storefront_sdk.exceptions import ApiError

from ..logging_setup import configure_logging
from ..services.auth_service import AuthService
from ..services.employee_service import EmployeeService
from ..services.report_service import ReportService
from ..shop.context import ShopContext
from ..ui.customer_report_view import CustomerReportView
from ..ui.inventory_editor import InventoryEditor
from .navigation import ADMIN_SECTIONS, DEFAULT_SECTION, find_section
from .state import AppState, Route

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    route: Route
    error_message: str | None = None


class StorefrontBootstrap:
    def __init__(self, config: ClientConfig | None = None, session: ApiSession | None = None) -> None:
        configure_logging()
        self.config = config or load_config()
        self.session = session or ApiSession(self.config)
        self.state = AppState()
        self.auth_service = AuthService(self.session)
        self.shop = ShopContext(self.session)
        self.employee_service = EmployeeService(self.session, on_error=self.shop.notifications.report_error)
        self.report_service = ReportService(self.session, on_error=self.shop.notifications.report_error)
        self.inventory_editor = InventoryEditor(self.shop)
        self.report_view = CustomerReportView()

    def start(self) -> BootstrapResult:
        """Restore the cart and catalog, then route by the stored session.

        Guests shop without logging in; only the admin route needs a staff session.
        """
        self._load_shop()
        if not self.auth_service.has_active_session():
            self._navigate(Route.SHOP, "Browsing as guest")
            return BootstrapResult(route=self.state.route)
        return self._route_authenticated()

    def login(self, email: str, password: str, *, employee: bool = False) -> BootstrapResult:
        try:
            self.auth_service.login(email, password, employee=employee)
        except Exception as exc:
            self.state.error_message = self._friendly_error(exc)
            self._navigate(Route.LOGIN, "Authentication failed")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
        self._load_shop()
        return self._route_authenticated()

    def logout(self) -> BootstrapResult:
        self.auth_service.logout()
        self.state.user = None
        self.state.admin_section = None
        self._navigate(Route.LOGIN, "Session cleared")
        return BootstrapResult(route=self.state.route)

    def open_section(self, key: str) -> str:
        if self.state.route is not Route.ADMIN:
            raise PermissionError("Admin sections require a staff session")
        section = find_section(key)
        if section is None:
            raise KeyError(key)
        self.state.admin_section = section.key
        if section.key == "product":
            self.inventory_editor.reset()
        elif section.key == "employees":
            self.employee_service.fetch()
        elif section.key == "customer_report":
            self.report_view.rows = self.report_service.load_customer_report()
        elif section.key == "category":
            self.shop.load_categories()
        logger.info("admin_section_opened", extra={"section": section.key})
        return section.key

    def admin_sections(self) -> list[str]:
        return [section.label for section in ADMIN_SECTIONS]

    def _load_shop(self) -> None:
        self.shop.init()
        self.shop.load_categories()

    def _route_authenticated(self) -> BootstrapResult:
        self.state.user = self.session.user
        self.state.error_message = None
        if self.auth_service.is_admin():
            self._navigate(Route.ADMIN, "Authenticated")
            self.open_section(DEFAULT_SECTION)
        else:
            self._navigate(Route.SHOP, "Authenticated")
        return BootstrapResult(route=self.state.route)

    @staticmethod
    def _friendly_error(exc: Exception) -> str:
        if isinstance(exc, ApiError):
            return to_user_facing_error(exc).message
        return str(exc) or "Unexpected client error"

    def _navigate(self, route: Route, status_message: str) -> None:
        logger.info("navigation", extra={"route": route.value})
        self.state.route = route
        self.state.status_message = status_message
