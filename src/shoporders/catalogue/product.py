"""Product and ProductVariant aggregates.

The ordering workflows only read these: a variant carries its own price and
selling constraints, and points at the product it belongs to. A variant whose
product reference is empty or dangling is representable but unusable for
ordering.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from shoporders.catalogue.events import (
    ProductAdded,
    ProductPriceChanged,
    ProductVariantAdded,
    VariantPriceChanged,
    VariantStockSet,
)
from shoporders.domain import shoporders


@shoporders.aggregate
class Product:
    """Product aggregate root."""

    title: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def add(cls, title, price):
        now = datetime.now(UTC)
        product = cls(title=title, price=price, created_at=now, updated_at=now)
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                title=title,
                price=price,
                added_at=now,
            )
        )
        return product

    def change_price(self, price):
        previous_price = self.price
        self.price = price
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=price,
            )
        )


@shoporders.aggregate
class ProductVariant:
    """A purchasable configuration of a Product."""

    product_id: Identifier()
    title: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    min_selling_quantity: Integer(default=1, min_value=1)
    max_selling_quantity: Integer(required=True, min_value=1)
    available_stock: Integer(default=0, min_value=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def selling_quantity_bounds_must_be_ordered(self):
        if self.min_selling_quantity > self.max_selling_quantity:
            raise ValidationError(
                {
                    "min_selling_quantity": [
                        f"Minimum selling quantity ({self.min_selling_quantity}) cannot exceed "
                        f"maximum selling quantity ({self.max_selling_quantity})"
                    ]
                }
            )

    @classmethod
    def add(
        cls,
        title,
        price,
        max_selling_quantity,
        product_id=None,
        min_selling_quantity=1,
        available_stock=0,
    ):
        now = datetime.now(UTC)
        variant = cls(
            product_id=product_id,
            title=title,
            price=price,
            min_selling_quantity=min_selling_quantity,
            max_selling_quantity=max_selling_quantity,
            available_stock=available_stock,
            created_at=now,
            updated_at=now,
        )
        variant.raise_(
            ProductVariantAdded(
                variant_id=str(variant.id),
                product_id=str(product_id) if product_id else None,
                title=title,
                price=price,
                min_selling_quantity=min_selling_quantity,
                max_selling_quantity=max_selling_quantity,
                available_stock=available_stock,
            )
        )
        return variant

    def change_price(self, price):
        previous_price = self.price
        self.price = price
        self.updated_at = datetime.now(UTC)
        self.raise_(
            VariantPriceChanged(
                variant_id=str(self.id),
                previous_price=previous_price,
                new_price=price,
            )
        )

    def set_stock(self, available_stock):
        if available_stock < 0:
            raise ValidationError({"available_stock": ["Available stock cannot be negative"]})

        previous_stock = self.available_stock
        self.available_stock = available_stock
        self.updated_at = datetime.now(UTC)
        self.raise_(
            VariantStockSet(
                variant_id=str(self.id),
                previous_stock=previous_stock,
                available_stock=available_stock,
            )
        )
