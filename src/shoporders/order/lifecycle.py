"""Order lifecycle: creating orders, appending and updating lines, placing carts.

``OrderLifecycle`` receives every collaborator through its constructor; the
command handlers build one per command with ``build_lifecycle()``, which
wires in the repositories of the active domain and the active catalogue
lookup. Each public method either completes or raises on the first failure,
before anything is written.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from shoporders.catalogue.lookup import get_catalog
from shoporders.catalogue.port import CatalogLookup
from shoporders.order.builder import OrderLineBuilder, OrderLineInput
from shoporders.order.cart import CartManager
from shoporders.order.numbering import OrderNumberAllocator
from shoporders.order.order import Order
from shoporders.order.order_line import OrderLine
from shoporders.order.validation import OrderLineValidator
from shoporders.shared.errors import (
    CartNotFound,
    OrderLineNotFound,
    OrderNotFound,
    ShopNotFound,
    error_scope,
)
from shoporders.shop.shop import Shop

logger = structlog.get_logger(__name__)


class OrderLifecycle:
    def __init__(
        self,
        catalog: CatalogLookup,
        orders,
        lines,
        shops,
        carts: CartManager | None = None,
        validator: OrderLineValidator | None = None,
        builder: OrderLineBuilder | None = None,
        numbers: OrderNumberAllocator | None = None,
    ) -> None:
        self.catalog = catalog
        self.orders = orders
        self.lines = lines
        self.shops = shops
        self.carts = carts or CartManager(orders=orders, shops=shops)
        self.validator = validator or OrderLineValidator()
        self.builder = builder or OrderLineBuilder()
        self.numbers = numbers or OrderNumberAllocator(orders=orders)

    # -------------------------------------------------------------------
    # Create-direct
    # -------------------------------------------------------------------
    def create_order(self, shop_id: str, line_inputs: list[OrderLineInput], note: str | None = None) -> Order:
        """Create a PLACED order with all its lines.

        Every line is resolved and validated before anything is persisted;
        the first failing line aborts the whole order.
        """
        with error_scope("order.create"):
            shop = self._shop(shop_id)

            resolved = []
            for line_input in line_inputs:
                variant, product = self.catalog.resolve_line_source(line_input.product_variant_id)
                self.validator.validate(line_input.quantity, variant)
                resolved.append((line_input, variant, product))

            order = Order.create_placed(shop_id=shop.id, number=self.numbers.allocate(), note=note)
            built = [
                self.builder.build(line_input, variant, product, order_id=order.id, index=index)
                for index, (line_input, variant, product) in enumerate(resolved)
            ]

            self.orders.add(order)
            for line in built:
                self.lines.add(line)

        logger.info(
            "Order created",
            order_id=str(order.id),
            shop_id=str(shop.id),
            number=order.number,
            line_count=len(built),
        )
        return order

    # -------------------------------------------------------------------
    # Append-line
    # -------------------------------------------------------------------
    def add_line(self, order_id: str, product_variant_id: str, quantity: int) -> OrderLine:
        """Append a priced line to an existing order (cart or placed)."""
        with error_scope("order-line.create"):
            order = self._order(order_id)
            variant, product = self.catalog.resolve_line_source(product_variant_id)
            self.validator.validate(quantity, variant)

            # TODO: recompute the order total once order pricing is modelled
            line = self.builder.build(
                OrderLineInput(product_variant_id=product_variant_id, quantity=quantity),
                variant,
                product,
                order_id=order.id,
                index=self.lines.count_for_order(order.id),
            )
            self.lines.add(line)

        logger.info(
            "Order line added",
            order_id=str(order.id),
            order_line_id=str(line.id),
            index=line.index,
            quantity=quantity,
        )
        return line

    # -------------------------------------------------------------------
    # Update-line
    # -------------------------------------------------------------------
    def update_line(self, order_line_id: str, quantity: int) -> OrderLine:
        """Change a line's quantity, re-validated against the line's own variant.

        Snapshot fields are refreshed from the catalogue only while the order
        is still a cart.
        """
        with error_scope("order-line.update"):
            line = self.lines.find_line(order_line_id)
            if line is None:
                raise OrderLineNotFound(f"No Order Line found with ID={order_line_id}.")

            order = self._order(line.order_id)
            variant, product = self.catalog.resolve_line_source(str(line.product_variant_id))
            self.validator.validate(quantity, variant)

            line.change_quantity(quantity)
            if order.is_cart:
                self.builder.refresh(line, variant, product)
            self.lines.add(line)

        logger.info(
            "Order line updated",
            order_id=str(order.id),
            order_line_id=str(line.id),
            quantity=quantity,
            snapshot_refreshed=order.is_cart,
        )
        return line

    # -------------------------------------------------------------------
    # Place
    # -------------------------------------------------------------------
    def place_order(self, order_id: str, note: str | None = None) -> Order:
        """Place a cart order and give its shop a fresh empty cart."""
        with error_scope("order.place"):
            order = self._order(order_id)
            number = self.numbers.allocate()
            # Validates the transition before the cart is rotated
            order.place(number=number, note=note)

            rotation = self.carts.rotate_cart(order)
            self.orders.add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            number=order.number,
            shop_id=str(order.shop_id),
            new_cart_id=str(rotation.cart.id),
        )
        return order

    # -------------------------------------------------------------------
    # Carts
    # -------------------------------------------------------------------
    def open_cart(self, shop_id: str) -> Order:
        """Return the shop's cart, opening one when the shop has none."""
        with error_scope("shop.cart"):
            return self.carts.ensure_cart(self._shop(shop_id))

    def shop_cart(self, shop_id: str) -> tuple[Order, list[OrderLine]]:
        """The shop's current cart and its lines. Read-only."""
        with error_scope("shop.cart"):
            shop = self._shop(shop_id)
            if not shop.cart_id:
                raise CartNotFound(f"Shop {shop_id} has no cart.")
            try:
                cart = self.orders.get(shop.cart_id)
            except ObjectNotFoundError:
                raise CartNotFound(f"Shop {shop_id} has no cart.") from None
            if not cart.is_cart:
                raise CartNotFound(f"Shop {shop_id} has no open cart.")
            return cart, self.lines.lines_for_order(cart.id)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def order_with_lines(self, order_id: str) -> tuple[Order, list[OrderLine]]:
        with error_scope("order.find"):
            order = self._order(order_id)
            return order, self.lines.lines_for_order(order.id)

    def order_id_of_line(self, order_line_id: str) -> str | None:
        line = self.lines.find_line(order_line_id)
        return str(line.order_id) if line is not None else None

    def shop_id_of_order(self, order_id: str) -> str | None:
        try:
            return str(self.orders.get(order_id).shop_id)
        except ObjectNotFoundError:
            return None

    def _order(self, order_id) -> Order:
        try:
            return self.orders.get(order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(f"No Order found with ID={order_id}.") from None

    def _shop(self, shop_id) -> Shop:
        try:
            return self.shops.get(shop_id)
        except ObjectNotFoundError:
            raise ShopNotFound(f"No Shop found with ID={shop_id}.") from None


def build_lifecycle() -> OrderLifecycle:
    """Wire an OrderLifecycle to the active domain's repositories."""
    return OrderLifecycle(
        catalog=get_catalog(),
        orders=current_domain.repository_for(Order),
        lines=current_domain.repository_for(OrderLine),
        shops=current_domain.repository_for(Shop),
    )
