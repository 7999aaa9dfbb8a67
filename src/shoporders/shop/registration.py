"""Shop registration and cart access."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shoporders.domain import shoporders
from shoporders.order.cart import CartManager
from shoporders.order.lifecycle import build_lifecycle
from shoporders.order.order import Order
from shoporders.shop.shop import Shop


@shoporders.command(part_of="Shop")
class RegisterShop:
    name: String(required=True, max_length=255)


@shoporders.command(part_of="Shop")
class OpenShopCart:
    shop_id: Identifier(required=True)


@shoporders.command_handler(part_of=Shop)
class ShopHandler:
    @handle(RegisterShop)
    def register_shop(self, command):
        shop = Shop.register(name=command.name)
        # Opening the first cart persists the shop alongside it
        CartManager(
            orders=current_domain.repository_for(Order),
            shops=current_domain.repository_for(Shop),
        ).ensure_cart(shop)
        return str(shop.id)

    @handle(OpenShopCart)
    def open_shop_cart(self, command):
        cart = build_lifecycle().open_cart(command.shop_id)
        return str(cart.id)
