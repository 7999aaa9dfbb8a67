"""Domain events for the Product and ProductVariant aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from shoporders.domain import shoporders


@shoporders.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    title: String(required=True)
    price: Float(required=True)
    added_at: DateTime(required=True)


@shoporders.event(part_of="Product")
class ProductPriceChanged:
    """The product's reference price changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)


@shoporders.event(part_of="ProductVariant")
class ProductVariantAdded:
    """A purchasable variant was added, with its selling constraints."""

    __version__ = 1

    variant_id: Identifier(required=True)
    product_id: Identifier()
    title: String(required=True)
    price: Float(required=True)
    min_selling_quantity: Integer(required=True)
    max_selling_quantity: Integer(required=True)
    available_stock: Integer(required=True)


@shoporders.event(part_of="ProductVariant")
class VariantPriceChanged:
    """The variant's selling price changed.

    Existing order lines keep their snapshotted prices.
    """

    __version__ = 1

    variant_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)


@shoporders.event(part_of="ProductVariant")
class VariantStockSet:
    """The variant's available stock was set to a new level."""

    __version__ = 1

    variant_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    available_stock: Integer(required=True)
