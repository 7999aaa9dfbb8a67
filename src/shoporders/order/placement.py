"""Placing a cart order."""

from protean import handle
from protean.fields import Identifier, String

from shoporders.domain import shoporders
from shoporders.order.lifecycle import build_lifecycle
from shoporders.order.order import Order


@shoporders.command(part_of="Order")
class PlaceOrder:
    order_id: Identifier(required=True)
    note: String(max_length=1000)


@shoporders.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = build_lifecycle().place_order(order_id=command.order_id, note=command.note)
        return str(order.id)
