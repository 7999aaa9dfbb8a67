"""Order aggregate: a shop's standing cart or a placed order.

State Machine:
    IN_CART → PLACED

Each shop has exactly one IN_CART order at a time (see CartManager). Orders
can also be created directly in PLACED. Post-placement fulfillment states
are handled elsewhere.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from shoporders.domain import shoporders
from shoporders.order.events import CartOpened, OrderPlaced
from shoporders.shared.errors import OrderAlreadyPlaced


class OrderStatus(Enum):
    IN_CART = "IN_CART"
    PLACED = "PLACED"


class PaymentStatus(Enum):
    PENDING = "PENDING"


@shoporders.aggregate
class Order:
    shop_id: Identifier(required=True)
    number: String(max_length=16)
    note: Text()
    current_status: String(choices=OrderStatus, default=OrderStatus.IN_CART.value)
    payment_status: String(choices=PaymentStatus)
    created_at: DateTime()
    placed_at: DateTime()

    @invariant.post
    def placed_order_must_have_number(self):
        if self.current_status == OrderStatus.PLACED.value and not self.number:
            raise ValidationError({"number": ["A placed order must have an order number"]})

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def open_cart(cls, shop_id):
        """Create an empty IN_CART order for a shop."""
        now = datetime.now(UTC)
        order = cls(
            shop_id=shop_id,
            current_status=OrderStatus.IN_CART.value,
            created_at=now,
        )
        order.raise_(
            CartOpened(
                order_id=str(order.id),
                shop_id=str(shop_id),
                opened_at=now,
            )
        )
        return order

    @classmethod
    def create_placed(cls, shop_id, number, note=None):
        """Create an order that skips the cart and starts out PLACED."""
        now = datetime.now(UTC)
        order = cls(
            shop_id=shop_id,
            number=number,
            note=note,
            current_status=OrderStatus.PLACED.value,
            payment_status=PaymentStatus.PENDING.value,
            created_at=now,
            placed_at=now,
        )
        order._raise_placed()
        return order

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    @property
    def is_cart(self) -> bool:
        return self.current_status == OrderStatus.IN_CART.value

    def place(self, number, note=None):
        """Transition the cart to PLACED. ``note`` replaces the existing one only when given."""
        if not self.is_cart:
            raise OrderAlreadyPlaced(f"Order {self.number or self.id} has already been placed.")

        self.number = number
        self.current_status = OrderStatus.PLACED.value
        self.payment_status = PaymentStatus.PENDING.value
        if note is not None:
            self.note = note
        self.placed_at = datetime.now(UTC)
        self._raise_placed()

    def _raise_placed(self):
        self.raise_(
            OrderPlaced(
                order_id=str(self.id),
                shop_id=str(self.shop_id),
                number=self.number,
                note=self.note,
                payment_status=self.payment_status,
                placed_at=self.placed_at,
            )
        )
