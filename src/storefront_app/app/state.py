from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront_sdk.models import UserResponse


class Route(str, Enum):
    LOGIN = "login"
    SHOP = "shop"
    ADMIN = "admin"


@dataclass
class AppState:
    route: Route = Route.LOGIN
    error_message: str | None = None
    status_message: str = "Ready"
    user: UserResponse | None = None
    admin_section: str | None = None
