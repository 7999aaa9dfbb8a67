"""Order line commands: append a line, change a line's quantity."""

from protean import handle
from protean.fields import Identifier, Integer

from shoporders.domain import shoporders
from shoporders.order.lifecycle import build_lifecycle
from shoporders.order.order_line import OrderLine


@shoporders.command(part_of="OrderLine")
class CreateOrderLine:
    order_id: Identifier(required=True)
    product_variant_id: Identifier(required=True)
    quantity: Integer(required=True)


@shoporders.command(part_of="OrderLine")
class UpdateOrderLine:
    order_line_id: Identifier(required=True)
    quantity: Integer(required=True)


@shoporders.command_handler(part_of=OrderLine)
class OrderLineHandler:
    @handle(CreateOrderLine)
    def create_order_line(self, command):
        line = build_lifecycle().add_line(
            order_id=command.order_id,
            product_variant_id=command.product_variant_id,
            quantity=command.quantity,
        )
        return str(line.id)

    @handle(UpdateOrderLine)
    def update_order_line(self, command):
        line = build_lifecycle().update_line(
            order_line_id=command.order_line_id,
            quantity=command.quantity,
        )
        return str(line.id)
