"""Application tests for appending lines and changing their quantity."""

import json

import pytest
from protean.utils.globals import current_domain
from shoporders.catalogue.management import (
    AddProductVariant,
    ChangeProductPrice,
    ChangeVariantPrice,
    SetVariantStock,
)
from shoporders.order.creation import CreateOrder
from shoporders.order.lines import CreateOrderLine, UpdateOrderLine
from shoporders.order.order_line import OrderLine
from shoporders.shared.errors import (
    AboveMaximum,
    BelowMinimum,
    InsufficientStock,
    OrderLineNotFound,
    OrderNotFound,
)


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _placed_order(shop_id):
    return _process(CreateOrder(shop_id=shop_id, order_lines=json.dumps([])))


def _add_line(order_id, variant_id, quantity):
    line_id = _process(CreateOrderLine(order_id=order_id, product_variant_id=variant_id, quantity=quantity))
    return current_domain.repository_for(OrderLine).get(line_id)


class TestWorkedExample:
    """V1: min 2, max 10, stock 5, price 100. P1: price 90."""

    def test_quantity_three_on_placed_order(self, shop_id, variant_id):
        line = _add_line(_placed_order(shop_id), variant_id, 3)
        assert (line.quantity, line.unit_price, line.product_price) == (3, 100.0, 90.0)

    def test_quantity_six_exceeds_stock(self, shop_id, variant_id):
        with pytest.raises(InsufficientStock) as exc:
            _add_line(_placed_order(shop_id), variant_id, 6)
        assert exc.value.error_id == "order-line.create.error.quantity-more-than-available-stock"

    def test_quantity_one_below_minimum(self, shop_id, variant_id):
        with pytest.raises(BelowMinimum) as exc:
            _add_line(_placed_order(shop_id), variant_id, 1)
        assert exc.value.error_id == "order-line.create.error.quantity-less-than-min-selling-quantity"


class TestAppendLine:
    def test_appends_to_cart_with_live_catalogue_values(self, cart_id, product_id, variant_id):
        _process(ChangeVariantPrice(variant_id=variant_id, price=105.0))
        _process(ChangeProductPrice(product_id=product_id, price=95.0))

        line = _add_line(cart_id, variant_id, 2)

        assert line.unit_price == 105.0
        assert line.product_price == 95.0
        assert line.product_title == "Classic Tee"
        assert line.product_variant_title == "Large / Blue"

    def test_index_is_current_line_count(self, cart_id, variant_id):
        lines = [_add_line(cart_id, variant_id, 2) for _ in range(3)]
        assert [line.index for line in lines] == [0, 1, 2]

    def test_index_continues_after_create(self, shop_id, variant_id):
        order_id = _process(
            CreateOrder(
                shop_id=shop_id,
                order_lines=json.dumps([{"product_variant_id": variant_id, "quantity": 2}] * 2),
            )
        )
        assert _add_line(order_id, variant_id, 2).index == 2

    def test_unknown_order(self, variant_id):
        with pytest.raises(OrderNotFound) as exc:
            _add_line("missing-order", variant_id, 2)
        assert exc.value.error_id == "order-line.create.error.order-not-found"
        assert exc.value.field == "order"

    def test_nothing_persisted_on_rejection(self, cart_id, variant_id):
        _process(SetVariantStock(variant_id=variant_id, available_stock=100))
        with pytest.raises(AboveMaximum):
            _add_line(cart_id, variant_id, 11)
        assert current_domain.repository_for(OrderLine).lines_for_order(cart_id) == []


class TestUpdateLine:
    def test_cart_line_refreshes_snapshot(self, cart_id, product_id, variant_id):
        line = _add_line(cart_id, variant_id, 2)
        _process(ChangeVariantPrice(variant_id=variant_id, price=120.0))
        _process(ChangeProductPrice(product_id=product_id, price=99.0))

        _process(UpdateOrderLine(order_line_id=line.id, quantity=4))

        updated = current_domain.repository_for(OrderLine).get(line.id)
        assert updated.quantity == 4
        assert updated.unit_price == 120.0
        assert updated.product_price == 99.0

    def test_placed_line_keeps_snapshot(self, shop_id, product_id, variant_id):
        line = _add_line(_placed_order(shop_id), variant_id, 2)
        _process(ChangeVariantPrice(variant_id=variant_id, price=120.0))
        _process(ChangeProductPrice(product_id=product_id, price=99.0))

        _process(UpdateOrderLine(order_line_id=line.id, quantity=4))

        updated = current_domain.repository_for(OrderLine).get(line.id)
        assert updated.quantity == 4
        assert updated.unit_price == 100.0
        assert updated.product_price == 90.0
        assert updated.product_title == "Classic Tee"

    def test_revalidated_against_own_variant(self, cart_id, variant_id):
        line = _add_line(cart_id, variant_id, 2)
        with pytest.raises(InsufficientStock) as exc:
            _process(UpdateOrderLine(order_line_id=line.id, quantity=6))
        assert exc.value.error_id == "order-line.update.error.quantity-more-than-available-stock"
        assert current_domain.repository_for(OrderLine).get(line.id).quantity == 2

    def test_unknown_line(self):
        with pytest.raises(OrderLineNotFound) as exc:
            _process(UpdateOrderLine(order_line_id="missing-line", quantity=2))
        assert exc.value.error_id == "order-line.update.error.order-line-not-found"

    def test_line_keeps_its_variant(self, cart_id, product_id, variant_id):
        other_variant = _process(
            AddProductVariant(
                product_id=product_id,
                title="Small",
                price=50.0,
                max_selling_quantity=99,
                available_stock=99,
            )
        )
        line = _add_line(cart_id, variant_id, 2)

        _process(UpdateOrderLine(order_line_id=line.id, quantity=3))

        updated = current_domain.repository_for(OrderLine).get(line.id)
        assert updated.product_variant_id == variant_id
        assert updated.product_variant_id != other_variant
