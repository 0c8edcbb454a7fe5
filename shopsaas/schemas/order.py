"""Catalog, cart and order schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shopsaas.engine.order_state import OrderStatus


class ProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    sku: str = Field(min_length=1, max_length=100)
    description: str | None = None
    price: Decimal = Field(ge=0, max_digits=19, decimal_places=2)
    stock_level: int = Field(default=0, ge=0)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    sku: str
    description: str | None
    price: Decimal
    stock_level: int
    active: bool


class CartItemRequest(BaseModel):
    """Either product_id or sku identifies the product."""

    product_id: UUID | None = None
    sku: str | None = None
    quantity: int = Field(ge=1)

    @model_validator(mode="after")
    def product_reference(self) -> "CartItemRequest":
        if not self.product_id and not self.sku:
            raise ValueError("Either product_id or sku must be provided")
        return self


class CartItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    quantity: int


class CartResponse(BaseModel):
    customer_email: str
    items: list[CartItemResponse] = Field(default_factory=list)


class CheckoutRequest(BaseModel):
    shipping_address: str | None = Field(default=None, max_length=500)


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    product_name: str
    sku: str
    price: Decimal
    quantity: int


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    customer_email: str
    status: OrderStatus
    total_price: Decimal
    shipping_address: str | None
    items: list[OrderItemResponse] = Field(default_factory=list)
    created_at: datetime


class PayOrderRequest(BaseModel):
    payment_method: str | None = None
    payment_token: str | None = None
