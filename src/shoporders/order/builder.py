"""Builds price-snapshotted order lines from catalogue data."""

from dataclasses import dataclass

from shoporders.catalogue.port import ProductSnapshot, VariantSnapshot
from shoporders.order.order_line import OrderLine


@dataclass(frozen=True)
class OrderLineInput:
    """A requested line: which variant, how many."""

    product_variant_id: str
    quantity: int


class OrderLineBuilder:
    """Turns a validated line request into a fully populated OrderLine.

    Titles and prices are copied, not linked: later catalogue changes never
    alter lines already built.
    """

    def build(
        self,
        line_input: OrderLineInput,
        variant: VariantSnapshot,
        product: ProductSnapshot,
        order_id: str,
        index: int,
    ) -> OrderLine:
        return OrderLine.create(
            order_id=order_id,
            index=index,
            product_variant_id=line_input.product_variant_id,
            quantity=line_input.quantity,
            **self._snapshot(variant, product, line_input.quantity),
        )

    def refresh(self, line: OrderLine, variant: VariantSnapshot, product: ProductSnapshot) -> OrderLine:
        """Re-copy titles and prices onto an existing line."""
        line.refresh_snapshot(**self._snapshot(variant, product, line.quantity))
        return line

    def _snapshot(self, variant: VariantSnapshot, product: ProductSnapshot, quantity: int) -> dict:
        return {
            "product_title": product.title,
            "product_variant_title": variant.title,
            "unit_price": variant.price,
            "product_price": product.price,
            "product_variant_attributes": self.capture_attributes(variant),
            "applied_price_rules": self.applicable_price_rules(variant, product, quantity),
        }

    def capture_attributes(self, variant: VariantSnapshot) -> dict:
        """Variant attributes to record on the line. None are captured yet."""
        return {}

    def applicable_price_rules(self, variant: VariantSnapshot, product: ProductSnapshot, quantity: int) -> list:
        """Price rules applied to the line. Price-rule computation is not implemented."""
        return []
