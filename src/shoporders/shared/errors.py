"""Business rejections raised by the ordering workflows.

Every rejection carries a stable, machine-matchable ``error_id`` namespaced by
the operation that raised it, e.g.
``order-line.create.error.quantity-less-than-min-selling-quantity``. The API
layer renders them as::

    [{"messages": [{"id": "...", "message": "...", "field": "..."}]}]
"""

from contextlib import contextmanager


class ShopOrdersError(Exception):
    """Base class for all client-facing rejections."""

    code = "error"
    status_code = 400
    field: str | None = None

    def __init__(self, message: str, field: str | None = None, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if field is not None:
            self.field = field
        self.operation = operation

    @property
    def error_id(self) -> str:
        if self.operation:
            return f"{self.operation}.error.{self.code}"
        return self.code

    def to_payload(self) -> list[dict]:
        message = {"id": self.error_id, "message": self.message}
        if self.field:
            message["field"] = self.field
        return [{"messages": [message]}]


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------
class NotFoundError(ShopOrdersError):
    status_code = 404


class OrderNotFound(NotFoundError):
    code = "order-not-found"
    field = "order"


class OrderLineNotFound(NotFoundError):
    code = "order-line-not-found"
    field = "id"


class CartNotFound(NotFoundError):
    code = "cart-not-found"
    field = "shop"


class ProductVariantNotFound(NotFoundError):
    code = "product-variant-not-found"
    field = "productVariant"


class ProductNotFound(NotFoundError):
    code = "product-not-found"
    field = "product"


class VariantHasNoProduct(NotFoundError):
    """The variant exists but its product reference is empty or dangling."""

    code = "product-not-found"
    field = "productVariant"


# ---------------------------------------------------------------------------
# Invalid input
# ---------------------------------------------------------------------------
class InvalidInputError(ShopOrdersError):
    status_code = 400


class InvalidIdentifier(InvalidInputError):
    code = "invalid-identifier"


class QuantityError(InvalidInputError):
    field = "quantity"


class BelowMinimum(QuantityError):
    code = "quantity-less-than-min-selling-quantity"


class AboveMaximum(QuantityError):
    code = "quantity-more-than-max-selling-quantity"


class InsufficientStock(QuantityError):
    code = "quantity-more-than-available-stock"


# ---------------------------------------------------------------------------
# Business rules
# ---------------------------------------------------------------------------
class BusinessRuleError(ShopOrdersError):
    status_code = 422


class ShopNotFound(BusinessRuleError):
    code = "shop-not-found"
    field = "shop"


class OrderAlreadyPlaced(BusinessRuleError):
    code = "order-already-placed"


class OrderNumberUnavailable(BusinessRuleError):
    code = "order-number-unavailable"


@contextmanager
def error_scope(operation: str):
    """Stamp ``operation`` on any rejection raised inside the block."""
    try:
        yield
    except ShopOrdersError as exc:
        if exc.operation is None:
            exc.operation = operation
        raise
