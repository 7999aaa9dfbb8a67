"""Order number allocation.

Numbers look like ``OD4821``: a prefix followed by random digits. Every
candidate is checked against persisted orders; when a width keeps colliding
the allocator widens to the next one (4, then 5, then 6 digits).
"""

import os
import random

import structlog

from shoporders.shared.errors import OrderNumberUnavailable

logger = structlog.get_logger(__name__)

ORDER_NUMBER_PREFIX = os.getenv("ORDER_NUMBER_PREFIX", "OD")
ORDER_NUMBER_ATTEMPTS = int(os.getenv("ORDER_NUMBER_ATTEMPTS", "25"))
ORDER_NUMBER_WIDTHS = (4, 5, 6)


class OrderNumberAllocator:
    def __init__(
        self,
        orders,
        prefix: str = ORDER_NUMBER_PREFIX,
        attempts: int = ORDER_NUMBER_ATTEMPTS,
        widths: tuple[int, ...] = ORDER_NUMBER_WIDTHS,
        rng: random.Random | None = None,
    ) -> None:
        self.orders = orders
        self.prefix = prefix
        self.attempts = attempts
        self.widths = widths
        self.rng = rng or random.SystemRandom()

    def allocate(self) -> str:
        for width in self.widths:
            for _ in range(self.attempts):
                number = f"{self.prefix}{self.rng.randrange(10**width):0{width}d}"
                if self.orders.find_by_number(number) is None:
                    return number

            logger.warning("Order number width crowded, widening", width=width, attempts=self.attempts)

        raise OrderNumberUnavailable("Could not allocate a unique order number.")
