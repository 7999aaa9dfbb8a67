"""Shop aggregate: owner of exactly one standing cart order."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String

from shoporders.domain import shoporders
from shoporders.shop.events import ShopCartRebound, ShopRegistered


@shoporders.aggregate
class Shop:
    name: String(required=True, max_length=255)
    cart_id: Identifier()
    registered_at: DateTime()

    @classmethod
    def register(cls, name):
        now = datetime.now(UTC)
        shop = cls(name=name, registered_at=now)
        shop.raise_(
            ShopRegistered(
                shop_id=str(shop.id),
                name=name,
                registered_at=now,
            )
        )
        return shop

    def bind_cart(self, order_id):
        """Point the shop's cart reference at ``order_id``."""
        previous_cart_id = self.cart_id
        self.cart_id = order_id
        self.raise_(
            ShopCartRebound(
                shop_id=str(self.id),
                previous_cart_id=str(previous_cart_id) if previous_cart_id else None,
                cart_id=str(order_id),
            )
        )
