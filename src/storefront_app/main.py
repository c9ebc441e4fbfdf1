from __future__ import annotations

from storefront_app.app.bootstrap import StorefrontBootstrap
from storefront_app.app.state import Route


def run() -> int:
    bootstrap = StorefrontBootstrap()
    result = bootstrap.start()
    if result.route is Route.ADMIN:
        print(f"Storefront admin loaded: {', '.join(bootstrap.admin_sections())}.")
        return 0
    view_state = bootstrap.shop.catalog_view_state()
    print(
        f"Storefront loaded: {len(bootstrap.shop.products())} products ({view_state.status.value}), "
        f"{bootstrap.shop.cart_quantity()} items in cart. {bootstrap.state.status_message}."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
