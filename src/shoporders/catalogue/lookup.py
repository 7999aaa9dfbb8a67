"""Repository-backed catalogue lookup and the active-lookup registry.

Provides get_catalog() / set_catalog() to swap implementations:
- RepositoryCatalogLookup reading the Product and ProductVariant repositories
  of the active domain (default)
- any other CatalogLookup, e.g. a fake in tests
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from shoporders.catalogue.port import CatalogLookup, ProductSnapshot, VariantSnapshot
from shoporders.catalogue.product import Product, ProductVariant
from shoporders.shared.errors import InvalidIdentifier, ProductNotFound, ProductVariantNotFound

MAX_IDENTIFIER_LENGTH = 255


def _check_identifier(value, field):
    if not isinstance(value, str) or not value.strip() or len(value) > MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifier(f"'{value}' is not a valid identifier.", field=field)


class RepositoryCatalogLookup(CatalogLookup):
    """Reads variants and products straight from their repositories."""

    def __init__(self, variants, products) -> None:
        self.variants = variants
        self.products = products

    def resolve_variant(self, variant_id: str) -> VariantSnapshot:
        _check_identifier(variant_id, "productVariant")
        try:
            variant = self.variants.get(variant_id)
        except ObjectNotFoundError:
            raise ProductVariantNotFound(f"No Product Variant found with ID={variant_id}.") from None

        return VariantSnapshot(
            id=str(variant.id),
            product_id=str(variant.product_id) if variant.product_id else None,
            title=variant.title,
            price=variant.price,
            min_selling_quantity=variant.min_selling_quantity,
            max_selling_quantity=variant.max_selling_quantity,
            available_stock=variant.available_stock,
        )

    def resolve_product(self, product_id: str) -> ProductSnapshot:
        _check_identifier(product_id, "product")
        try:
            product = self.products.get(product_id)
        except ObjectNotFoundError:
            raise ProductNotFound(f"No Product found with ID={product_id}.") from None

        return ProductSnapshot(id=str(product.id), title=product.title, price=product.price)


_current_catalog: CatalogLookup | None = None


def get_catalog() -> CatalogLookup:
    """Return the active catalogue lookup. Defaults to the repository adapter."""
    if _current_catalog is not None:
        return _current_catalog
    return RepositoryCatalogLookup(
        variants=current_domain.repository_for(ProductVariant),
        products=current_domain.repository_for(Product),
    )


def set_catalog(catalog: CatalogLookup) -> None:
    """Override the active catalogue lookup (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to the repository-backed lookup."""
    global _current_catalog
    _current_catalog = None
