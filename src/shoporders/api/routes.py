"""FastAPI endpoints for the Shop Orders domain.

Mutations go through ``dispatch`` with the lock keys of every entity the
command touches. Responses are read back after the command's unit of work
has committed.
"""

from fastapi import APIRouter

from shoporders.api.schemas import (
    AddProductRequest,
    AddProductVariantRequest,
    CartResponse,
    ChangePriceRequest,
    CreateOrderLineRequest,
    CreateOrderRequest,
    OrderLineEnvelope,
    OrderLineResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductVariantIdResponse,
    RegisterShopRequest,
    SetStockRequest,
    ShopResponse,
    StatusResponse,
    UpdateOrderLineRequest,
)
from shoporders.catalogue.management import (
    AddProduct,
    AddProductVariant,
    ChangeProductPrice,
    ChangeVariantPrice,
    SetVariantStock,
)
from shoporders.order.creation import CreateOrder
from shoporders.order.lifecycle import build_lifecycle
from shoporders.order.lines import CreateOrderLine, UpdateOrderLine
from shoporders.order.locks import ORDER_NUMBER_KEY, dispatch, order_key, order_line_key, shop_key
from shoporders.order.placement import PlaceOrder
from shoporders.shop.registration import OpenShopCart, RegisterShop

order_router = APIRouter(prefix="/orders", tags=["orders"])
order_line_router = APIRouter(prefix="/order-lines", tags=["order-lines"])
shop_router = APIRouter(prefix="/shops", tags=["shops"])
product_router = APIRouter(prefix="/products", tags=["products"])
product_variant_router = APIRouter(prefix="/product-variants", tags=["product-variants"])


def _order_response(order_id: str) -> OrderResponse:
    order, lines = build_lifecycle().order_with_lines(order_id)
    return OrderResponse.from_order(order, lines)


def _order_line_envelope(order_line_id: str) -> OrderLineEnvelope:
    line = build_lifecycle().lines.find_line(order_line_id)
    return OrderLineEnvelope(order_line=OrderLineResponse.from_line(line))


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    command = CreateOrder(
        shop_id=body.shop,
        note=body.note,
        order_lines=body.order_lines_json(),
    )
    order_id = dispatch(command, ORDER_NUMBER_KEY, shop_key(body.shop))
    return _order_response(order_id)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(order_id)


@order_router.post("/{order_id}/place", response_model=OrderResponse)
async def place_order(order_id: str, body: PlaceOrderRequest | None = None) -> OrderResponse:
    note = body.note if body else None
    shop_id = build_lifecycle().shop_id_of_order(order_id)
    dispatch(
        PlaceOrder(order_id=order_id, note=note),
        ORDER_NUMBER_KEY,
        order_key(order_id),
        shop_key(shop_id) if shop_id else None,
    )
    return _order_response(order_id)


# --- Order line endpoints ---


@order_line_router.post("", status_code=201, response_model=OrderLineEnvelope)
async def create_order_line(body: CreateOrderLineRequest) -> OrderLineEnvelope:
    command = CreateOrderLine(
        order_id=body.order,
        product_variant_id=body.product_variant,
        quantity=body.quantity,
    )
    order_line_id = dispatch(command, order_key(body.order))
    return _order_line_envelope(order_line_id)


@order_line_router.put("/{order_line_id}", response_model=OrderLineEnvelope)
async def update_order_line(order_line_id: str, body: UpdateOrderLineRequest) -> OrderLineEnvelope:
    order_id = build_lifecycle().order_id_of_line(order_line_id)
    dispatch(
        UpdateOrderLine(order_line_id=order_line_id, quantity=body.quantity),
        order_line_key(order_line_id),
        order_key(order_id) if order_id else None,
    )
    return _order_line_envelope(order_line_id)


# --- Shop endpoints ---


@shop_router.post("", status_code=201, response_model=ShopResponse)
async def register_shop(body: RegisterShopRequest) -> ShopResponse:
    shop_id = dispatch(RegisterShop(name=body.name))
    cart, _ = build_lifecycle().shop_cart(shop_id)
    return ShopResponse(shop_id=shop_id, cart_id=str(cart.id))


@shop_router.get("/{shop_id}/cart", response_model=CartResponse)
async def get_shop_cart(shop_id: str) -> CartResponse:
    cart, lines = build_lifecycle().shop_cart(shop_id)
    return CartResponse.from_cart(cart, lines)


@shop_router.post("/{shop_id}/cart", response_model=CartResponse)
async def open_shop_cart(shop_id: str) -> CartResponse:
    dispatch(OpenShopCart(shop_id=shop_id), shop_key(shop_id))
    cart, lines = build_lifecycle().shop_cart(shop_id)
    return CartResponse.from_cart(cart, lines)


# --- Catalogue endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    product_id = dispatch(AddProduct(title=body.title, price=body.price))
    return ProductIdResponse(product_id=product_id)


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def change_product_price(product_id: str, body: ChangePriceRequest) -> StatusResponse:
    dispatch(ChangeProductPrice(product_id=product_id, price=body.price))
    return StatusResponse()


@product_variant_router.post("", status_code=201, response_model=ProductVariantIdResponse)
async def add_product_variant(body: AddProductVariantRequest) -> ProductVariantIdResponse:
    command = AddProductVariant(
        product_id=body.product,
        title=body.title,
        price=body.price,
        min_selling_quantity=body.min_selling_quantity,
        max_selling_quantity=body.max_selling_quantity,
        available_stock=body.available_stock,
    )
    variant_id = dispatch(command)
    return ProductVariantIdResponse(product_variant_id=variant_id)


@product_variant_router.put("/{variant_id}/price", response_model=StatusResponse)
async def change_variant_price(variant_id: str, body: ChangePriceRequest) -> StatusResponse:
    dispatch(ChangeVariantPrice(variant_id=variant_id, price=body.price))
    return StatusResponse()


@product_variant_router.put("/{variant_id}/stock", response_model=StatusResponse)
async def set_variant_stock(variant_id: str, body: SetStockRequest) -> StatusResponse:
    dispatch(SetVariantStock(variant_id=variant_id, available_stock=body.available_stock))
    return StatusResponse()
