"""Shop Orders API package."""

from shoporders.api.errors import register_error_handlers
from shoporders.api.routes import (
    order_line_router,
    order_router,
    product_router,
    product_variant_router,
    shop_router,
)

ROUTERS = [order_router, order_line_router, shop_router, product_router, product_variant_router]

__all__ = [
    "ROUTERS",
    "order_router",
    "order_line_router",
    "shop_router",
    "product_router",
    "product_variant_router",
    "register_error_handlers",
]
