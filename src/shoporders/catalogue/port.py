"""Catalog lookup port (abstract interface).

Defines the read-only contract the ordering workflows use to resolve a
product variant and its product. The default adapter reads the local
repositories; tests and other deployments can swap in their own adapter via
``shoporders.catalogue.lookup.set_catalog``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from shoporders.shared.errors import ProductNotFound, VariantHasNoProduct


@dataclass(frozen=True)
class VariantSnapshot:
    """Selling constraints and price of a variant at the moment it was read."""

    id: str
    product_id: str | None
    title: str
    price: float
    min_selling_quantity: int
    max_selling_quantity: int
    available_stock: int

    @property
    def max_orderable_quantity(self) -> int:
        return min(self.max_selling_quantity, self.available_stock)


@dataclass(frozen=True)
class ProductSnapshot:
    """Title and price of a product at the moment it was read."""

    id: str
    title: str
    price: float


class CatalogLookup(ABC):
    """Abstract catalogue lookup."""

    @abstractmethod
    def resolve_variant(self, variant_id: str) -> VariantSnapshot:
        """Return the variant, or raise ``ProductVariantNotFound``."""
        ...

    @abstractmethod
    def resolve_product(self, product_id: str) -> ProductSnapshot:
        """Return the product, or raise ``ProductNotFound``."""
        ...

    def resolve_line_source(self, variant_id: str) -> tuple[VariantSnapshot, ProductSnapshot]:
        """Resolve a variant together with the product it belongs to.

        A variant whose product reference is empty or does not resolve is
        rejected with ``VariantHasNoProduct`` rather than ``ProductNotFound``.
        """
        variant = self.resolve_variant(variant_id)
        if not variant.product_id:
            raise VariantHasNoProduct("The Product Variant has no product.")

        try:
            product = self.resolve_product(variant.product_id)
        except ProductNotFound:
            raise VariantHasNoProduct("The Product Variant has no product.") from None

        return variant, product
