"""Order creation: a PLACED order with its lines, all or nothing."""

import json

from protean import handle
from protean.fields import Identifier, String, Text

from shoporders.domain import shoporders
from shoporders.order.builder import OrderLineInput
from shoporders.order.lifecycle import build_lifecycle
from shoporders.order.order import Order
from shoporders.shared.errors import InvalidInputError, error_scope


class InvalidOrderLines(InvalidInputError):
    code = "invalid-order-lines"
    field = "orderLines"


@shoporders.command(part_of="Order")
class CreateOrder:
    shop_id: Identifier(required=True)
    note: String(max_length=1000)
    order_lines: Text(default="[]")  # JSON: list of {product_variant_id, quantity}


def parse_order_lines(raw) -> list[OrderLineInput]:
    """Decode the JSON line list carried by ``CreateOrder``.

    Index values sent by clients are ignored; a line's index is its
    position in the list.
    """
    try:
        items = json.loads(raw) if isinstance(raw, str) else (raw or [])
    except ValueError:
        raise InvalidOrderLines("Order lines must be a JSON list.") from None

    if not isinstance(items, list):
        raise InvalidOrderLines("Order lines must be a JSON list.")

    line_inputs = []
    for item in items:
        if not isinstance(item, dict):
            raise InvalidOrderLines("Each order line must be an object.")
        quantity = item.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidOrderLines("Order line quantity must be an integer.", field="quantity")
        line_inputs.append(
            OrderLineInput(
                product_variant_id=item.get("product_variant_id"),
                quantity=quantity,
            )
        )
    return line_inputs


@shoporders.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        with error_scope("order.create"):
            line_inputs = parse_order_lines(command.order_lines)

        order = build_lifecycle().create_order(
            shop_id=command.shop_id,
            line_inputs=line_inputs,
            note=command.note,
        )
        return str(order.id)
