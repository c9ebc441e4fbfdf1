from __future__ import annotations

from dataclasses import dataclass

from .auth_store import AuthStore
from .cart_store import CartStore
from .clients.auth import AuthClient
from .clients.catalog_client import CatalogClient
from .clients.categories_client import CategoriesClient
from .clients.employees_client import EmployeesClient
from .clients.reports_client import ReportsClient
from .config import ClientConfig
from .http_client import HttpClient, TraceContext
from .models import SessionData, TokenResponse, UserResponse


@dataclass
class ApiSession:
    """Explicit holder for the token and stores a browser would keep globally."""

    config: ClientConfig
    auth_store: AuthStore | None = None
    cart_store: CartStore | None = None
    trace: TraceContext | None = None
    http: HttpClient | None = None
    token: str | None = None
    user: UserResponse | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore(app_name=self.config.app_name)
        self.cart_store = self.cart_store or CartStore(app_name=self.config.app_name)
        self.trace = self.trace or TraceContext()
        # one HttpClient per session so context versions are shared by every client
        self.http = self.http or HttpClient(config=self.config, trace=self.trace)
        stored = self.auth_store.load()
        if stored and not self.token:
            self.token = stored.token
            self.user = stored.user

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, access_token=self.token)

    def catalog_client(self) -> CatalogClient:
        return CatalogClient(http=self.http, access_token=self.token)

    def categories_client(self) -> CategoriesClient:
        return CategoriesClient(http=self.http, access_token=self.token)

    def employees_client(self) -> EmployeesClient:
        return EmployeesClient(http=self.http, access_token=self.token)

    def reports_client(self) -> ReportsClient:
        return ReportsClient(http=self.http, access_token=self.token)

    def establish(self, token: TokenResponse) -> None:
        self.token = token.token
        self.user = token.user
        self.auth_store.save(SessionData(token=self.token, user=self.user, env_name=self.config.env_name))

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.auth_store:
            self.auth_store.clear()
