"""Domain events for the Shop aggregate."""

from protean.fields import DateTime, Identifier, String

from shoporders.domain import shoporders


@shoporders.event(part_of="Shop")
class ShopRegistered:
    """A shop was onboarded."""

    __version__ = 1

    shop_id: Identifier(required=True)
    name: String(required=True)
    registered_at: DateTime(required=True)


@shoporders.event(part_of="Shop")
class ShopCartRebound:
    """The shop's cart reference now points at a different IN_CART order."""

    __version__ = 1

    shop_id: Identifier(required=True)
    previous_cart_id: Identifier()
    cart_id: Identifier(required=True)
