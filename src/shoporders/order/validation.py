"""Selling-quantity and stock checks for a single order line."""

from shoporders.catalogue.port import VariantSnapshot
from shoporders.shared.errors import AboveMaximum, BelowMinimum, InsufficientStock, QuantityError


class OrderLineValidator:
    """Checks a requested quantity against a variant snapshot.

    Accepts exactly ``min_selling_quantity <= quantity <= min(max_selling_quantity,
    available_stock)``. Stock is only read, never reserved or decremented.
    """

    def violations(self, quantity: int, variant: VariantSnapshot) -> list[QuantityError]:
        """Every failed check, in evaluation order."""
        found = []
        if quantity < variant.min_selling_quantity:
            found.append(BelowMinimum(f"This product quantity should be at least {variant.min_selling_quantity}."))
        if quantity > variant.max_selling_quantity:
            found.append(AboveMaximum(f"This product quantity should be at most {variant.max_selling_quantity}."))
        if quantity > variant.available_stock:
            found.append(
                InsufficientStock(f"Only {variant.available_stock} product quantity is currently available.")
            )
        return found

    def validate(self, quantity: int, variant: VariantSnapshot) -> None:
        """Raise the first violation, if any."""
        found = self.violations(quantity, variant)
        if found:
            raise found[0]
