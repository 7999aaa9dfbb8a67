"""Cart management: keeps exactly one IN_CART order per shop."""

from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError

from shoporders.order.order import Order
from shoporders.shared.errors import ShopNotFound

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartRotation:
    """Outcome of a rotation: the order being placed and the shop's new cart."""

    placed: Order
    cart: Order


class CartManager:
    def __init__(self, orders, shops) -> None:
        self.orders = orders
        self.shops = shops

    def ensure_cart(self, shop) -> Order:
        """Return the shop's IN_CART order, opening one if there is none."""
        if shop.cart_id:
            try:
                cart = self.orders.get(shop.cart_id)
            except ObjectNotFoundError:
                cart = None

            if cart is not None and cart.is_cart:
                return cart

            logger.warning("Shop cart reference is stale, opening a new cart", shop_id=str(shop.id))

        return self._open_cart(shop)

    def rotate_cart(self, order: Order) -> CartRotation:
        """Give the order's shop a brand-new empty cart.

        The order being placed is returned untouched; the caller applies the
        placement itself.
        """
        shop = self._shop_of(order)
        cart = self._open_cart(shop)
        logger.info(
            "Shop cart rotated",
            shop_id=str(shop.id),
            placed_order_id=str(order.id),
            cart_id=str(cart.id),
        )
        return CartRotation(placed=order, cart=cart)

    def _open_cart(self, shop) -> Order:
        cart = Order.open_cart(shop_id=shop.id)
        shop.bind_cart(cart.id)
        self.orders.add(cart)
        self.shops.add(shop)
        return cart

    def _shop_of(self, order: Order):
        if not order.shop_id:
            raise ShopNotFound(f"Order {order.id} has no shop.")
        try:
            return self.shops.get(order.shop_id)
        except ObjectNotFoundError:
            raise ShopNotFound(f"No Shop found with ID={order.shop_id}.") from None
