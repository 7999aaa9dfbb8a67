"""Domain events for the Order and OrderLine aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from shoporders.domain import shoporders


@shoporders.event(part_of="Order")
class CartOpened:
    """A new, empty IN_CART order became the shop's standing cart."""

    __version__ = 1

    order_id: Identifier(required=True)
    shop_id: Identifier(required=True)
    opened_at: DateTime(required=True)


@shoporders.event(part_of="Order")
class OrderPlaced:
    """An order reached PLACED, either from the shop's cart or created directly."""

    __version__ = 1

    order_id: Identifier(required=True)
    shop_id: Identifier(required=True)
    number: String(required=True)
    note: Text()
    payment_status: String(required=True)
    placed_at: DateTime(required=True)


@shoporders.event(part_of="OrderLine")
class OrderLineAdded:
    """A priced line was appended to an order."""

    __version__ = 1

    order_line_id: Identifier(required=True)
    order_id: Identifier(required=True)
    index: Integer(required=True)
    product_variant_id: Identifier(required=True)
    quantity: Integer(required=True)
    unit_price: Float(required=True)
    product_price: Float(required=True)


@shoporders.event(part_of="OrderLine")
class OrderLineQuantityChanged:
    """The quantity of an existing order line changed."""

    __version__ = 1

    order_line_id: Identifier(required=True)
    order_id: Identifier(required=True)
    previous_quantity: Integer(required=True)
    new_quantity: Integer(required=True)


@shoporders.event(part_of="OrderLine")
class OrderLineSnapshotRefreshed:
    """Title and price snapshots of a cart line were re-read from the catalogue."""

    __version__ = 1

    order_line_id: Identifier(required=True)
    order_id: Identifier(required=True)
    unit_price: Float(required=True)
    product_price: Float(required=True)
