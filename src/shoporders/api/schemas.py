"""Pydantic request/response schemas for the Shop Orders API.

JSON bodies use camelCase keys; Python attributes stay snake_case.
"""

from __future__ import annotations

import json
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Order Request Schemas ---


class OrderLineItem(CamelModel):
    index: int | None = None  # accepted for compatibility, position in the list wins
    product_variant: str
    quantity: int


class CreateOrderRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shop": "shop-001",
                    "note": "Deliver before noon",
                    "orderLines": [{"index": 0, "productVariant": "variant-001", "quantity": 3}],
                }
            ]
        },
    )

    shop: str
    note: str | None = Field(None, max_length=1000)
    order_lines: list[OrderLineItem] = Field(default_factory=list)

    def order_lines_json(self) -> str:
        return json.dumps(
            [{"product_variant_id": line.product_variant, "quantity": line.quantity} for line in self.order_lines]
        )


class PlaceOrderRequest(CamelModel):
    note: str | None = Field(None, max_length=1000)


class CreateOrderLineRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"order": "order-001", "productVariant": "variant-001", "quantity": 3}]},
    )

    order: str
    product_variant: str
    quantity: int


class UpdateOrderLineRequest(CamelModel):
    quantity: int


# --- Shop Request Schemas ---


class RegisterShopRequest(CamelModel):
    name: str = Field(..., max_length=255)


# --- Catalogue Request Schemas ---


class AddProductRequest(CamelModel):
    title: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)


class AddProductVariantRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "product": "product-001",
                    "title": "Large / Blue",
                    "price": 100.0,
                    "minSellingQuantity": 2,
                    "maxSellingQuantity": 10,
                    "availableStock": 5,
                }
            ]
        },
    )

    product: str | None = None
    title: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    min_selling_quantity: int = Field(1, ge=1)
    max_selling_quantity: int = Field(..., ge=1)
    available_stock: int = Field(0, ge=0)


class ChangePriceRequest(CamelModel):
    price: float = Field(..., ge=0)


class SetStockRequest(CamelModel):
    available_stock: int = Field(..., ge=0)


# --- Response Schemas ---


class OrderLineResponse(CamelModel):
    id: str
    order: str
    index: int
    product_variant: str
    quantity: int
    product_title: str | None = None
    product_variant_title: str | None = None
    product_variant_attributes: dict = Field(default_factory=dict)
    unit_price: float
    product_price: float
    applied_price_rules: list = Field(default_factory=list)

    @classmethod
    def from_line(cls, line) -> OrderLineResponse:
        return cls(
            id=str(line.id),
            order=str(line.order_id),
            index=line.index,
            product_variant=str(line.product_variant_id),
            quantity=line.quantity,
            product_title=line.product_title,
            product_variant_title=line.product_variant_title,
            product_variant_attributes=line.attributes,
            unit_price=line.unit_price,
            product_price=line.product_price,
            applied_price_rules=line.price_rules,
        )


class OrderResponse(CamelModel):
    id: str
    number: str | None = None
    note: str | None = None
    current_status: str
    payment_status: str | None = None
    shop: str
    created_at: datetime | None = None
    placed_at: datetime | None = None
    order_lines: list[OrderLineResponse] = Field(default_factory=list)

    @classmethod
    def from_order(cls, order, lines=()) -> OrderResponse:
        return cls(
            id=str(order.id),
            number=order.number,
            note=order.note,
            current_status=order.current_status,
            payment_status=order.payment_status,
            shop=str(order.shop_id),
            created_at=order.created_at,
            placed_at=order.placed_at,
            order_lines=[OrderLineResponse.from_line(line) for line in lines],
        )


class OrderLineEnvelope(CamelModel):
    order_line: OrderLineResponse


class CartResponse(CamelModel):
    id: str
    note: str | None = None
    items: list[OrderLineResponse] = Field(default_factory=list)

    @classmethod
    def from_cart(cls, cart, lines=()) -> CartResponse:
        return cls(
            id=str(cart.id),
            note=cart.note,
            items=[OrderLineResponse.from_line(line) for line in lines],
        )


class ShopResponse(CamelModel):
    shop_id: str
    cart_id: str


class ProductIdResponse(CamelModel):
    product_id: str


class ProductVariantIdResponse(CamelModel):
    product_variant_id: str


class StatusResponse(CamelModel):
    status: str = "ok"
