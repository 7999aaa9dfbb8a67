"""Custom repositories for the Order and OrderLine aggregates."""

from protean.exceptions import ObjectNotFoundError

from shoporders.domain import shoporders
from shoporders.order.order import Order, OrderStatus
from shoporders.order.order_line import OrderLine

LINES_PAGE_SIZE = 100


@shoporders.repository(part_of=Order)
class OrderRepository:
    def find_by_number(self, number: str) -> Order | None:
        """Return the order carrying ``number``, if any."""
        results = self._dao.query.filter(number=number).all().items
        return results[0] if results else None

    def carts_for_shop(self, shop_id: str) -> list[Order]:
        """All IN_CART orders of a shop. More than one means the cart invariant was broken."""
        return self._dao.query.filter(shop_id=str(shop_id), current_status=OrderStatus.IN_CART.value).limit(None).all().items


@shoporders.repository(part_of=OrderLine)
class OrderLineRepository:
    def count_for_order(self, order_id: str) -> int:
        return self._dao.query.filter(order_id=str(order_id)).all().total

    def lines_for_order(self, order_id: str) -> list[OrderLine]:
        """Every line of an order in index order, read page by page."""
        query = self._dao.query.filter(order_id=str(order_id)).order_by("index").limit(LINES_PAGE_SIZE)
        lines = []
        while True:
            page = query.offset(len(lines)).all()
            lines.extend(page.items)
            if not page.has_next or not page.items:
                return lines

    def find_line(self, order_line_id: str) -> OrderLine | None:
        try:
            return self.get(order_line_id)
        except ObjectNotFoundError:
            return None
