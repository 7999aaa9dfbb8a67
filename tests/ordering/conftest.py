"""Shared fixtures for the ordering tests: a shop with its cart and the V1 catalogue."""

import pytest
from protean.utils.globals import current_domain
from shoporders.catalogue.management import AddProduct, AddProductVariant
from shoporders.shop.registration import RegisterShop
from shoporders.shop.shop import Shop


def _process(command):
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def product_id():
    """P1: price 90."""
    return _process(AddProduct(title="Classic Tee", price=90.0))


@pytest.fixture()
def variant_id(product_id):
    """V1: min 2, max 10, stock 5, price 100."""
    return _process(
        AddProductVariant(
            product_id=product_id,
            title="Large / Blue",
            price=100.0,
            min_selling_quantity=2,
            max_selling_quantity=10,
            available_stock=5,
        )
    )


@pytest.fixture()
def shop_id():
    return _process(RegisterShop(name="Corner Store"))


@pytest.fixture()
def cart_id(shop_id):
    return current_domain.repository_for(Shop).get(shop_id).cart_id


@pytest.fixture()
def bulk_variant_id(product_id):
    """A variant with stock for hundreds of single-unit lines."""
    return _process(
        AddProductVariant(
            product_id=product_id,
            title="Bulk",
            price=5.0,
            min_selling_quantity=1,
            max_selling_quantity=1000,
            available_stock=100000,
        )
    )
