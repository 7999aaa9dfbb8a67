"""OrderLine aggregate: one priced line of an order.

Titles and prices are snapshots copied from the catalogue when the line is
built (and, while the order is still a cart, when it is updated). Later
catalogue changes never alter placed lines.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from shoporders.domain import shoporders
from shoporders.order.events import OrderLineAdded, OrderLineQuantityChanged, OrderLineSnapshotRefreshed


@shoporders.aggregate
class OrderLine:
    order_id: Identifier(required=True)
    index: Integer(required=True, min_value=0)
    product_variant_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    product_title: String(max_length=255, default="")
    product_variant_title: String(max_length=255, default="")
    product_variant_attributes: Text(default="{}")  # JSON object
    unit_price: Float(default=0.0, min_value=0.0)
    product_price: Float(default=0.0, min_value=0.0)
    applied_price_rules: Text(default="[]")  # JSON array
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        order_id,
        index,
        product_variant_id,
        quantity,
        product_title,
        product_variant_title,
        unit_price,
        product_price,
        product_variant_attributes=None,
        applied_price_rules=None,
    ):
        now = datetime.now(UTC)
        line = cls(
            order_id=order_id,
            index=index,
            product_variant_id=product_variant_id,
            quantity=quantity,
            product_title=product_title,
            product_variant_title=product_variant_title,
            product_variant_attributes=json.dumps(product_variant_attributes or {}),
            unit_price=unit_price,
            product_price=product_price,
            applied_price_rules=json.dumps(applied_price_rules or []),
            created_at=now,
            updated_at=now,
        )
        line.raise_(
            OrderLineAdded(
                order_line_id=str(line.id),
                order_id=str(order_id),
                index=index,
                product_variant_id=str(product_variant_id),
                quantity=quantity,
                unit_price=unit_price,
                product_price=product_price,
            )
        )
        return line

    def change_quantity(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous_quantity = self.quantity
        self.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            OrderLineQuantityChanged(
                order_line_id=str(self.id),
                order_id=str(self.order_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def refresh_snapshot(
        self,
        product_title,
        product_variant_title,
        unit_price,
        product_price,
        product_variant_attributes=None,
        applied_price_rules=None,
    ):
        self.product_title = product_title
        self.product_variant_title = product_variant_title
        self.product_variant_attributes = json.dumps(product_variant_attributes or {})
        self.unit_price = unit_price
        self.product_price = product_price
        self.applied_price_rules = json.dumps(applied_price_rules or [])
        self.updated_at = datetime.now(UTC)
        self.raise_(
            OrderLineSnapshotRefreshed(
                order_line_id=str(self.id),
                order_id=str(self.order_id),
                unit_price=unit_price,
                product_price=product_price,
            )
        )

    @property
    def attributes(self) -> dict:
        return json.loads(self.product_variant_attributes) if self.product_variant_attributes else {}

    @property
    def price_rules(self) -> list:
        return json.loads(self.applied_price_rules) if self.applied_price_rules else []
