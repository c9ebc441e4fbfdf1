from .auth import AuthClient
from .catalog_client import CatalogClient
from .categories_client import CategoriesClient
from .employees_client import EmployeesClient
from .reports_client import ReportsClient

__all__ = [
    "AuthClient",
    "CatalogClient",
    "CategoriesClient",
    "EmployeesClient",
    "ReportsClient",
]
