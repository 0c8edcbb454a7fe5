"""Cart, checkout and order endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.middleware import Principal, permission_dep
from shopsaas.auth.permissions import Permission, has_permission
from shopsaas.billing.payments import PaymentDispatcher, get_payment_dispatcher
from shopsaas.database import get_db
from shopsaas.engine.order_state import OrderStatus
from shopsaas.errors import ResourceNotFoundError
from shopsaas.models import Order
from shopsaas.schemas.order import (
    CartItemRequest,
    CartResponse,
    CheckoutRequest,
    OrderResponse,
    PayOrderRequest,
)
from shopsaas.services import orders as order_service

router = APIRouter()

Shopper = permission_dep(Permission.ORDER_PLACE)
OrderManager = permission_dep(Permission.ORDER_MANAGE)


def _visible_to(order: Order, principal: Principal) -> Order:
    """Shoppers only see their own orders; a foreign order reads as missing."""
    if order.customer_email != principal.email and not has_permission(
        principal.role, Permission.ORDER_MANAGE
    ):
        raise ResourceNotFoundError("Order", order.id)
    return order


@router.post("/cart/add", response_model=CartResponse)
async def add_to_cart(
    body: CartItemRequest,
    principal: Shopper,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    cart = await order_service.add_to_cart(
        db,
        tenant_id=principal.tenant_id,
        customer_email=principal.email,
        quantity=body.quantity,
        product_id=str(body.product_id) if body.product_id else None,
        sku=body.sku,
    )
    return CartResponse.model_validate(cart, from_attributes=True)


@router.get("/cart", response_model=CartResponse)
async def get_cart(
    principal: Shopper,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    cart = await order_service.get_cart(db, principal.tenant_id, principal.email)
    if cart is None:
        return CartResponse(customer_email=principal.email)
    return CartResponse.model_validate(cart, from_attributes=True)


@router.delete("/cart", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(
    principal: Shopper,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await order_service.clear_cart(db, principal.tenant_id, principal.email)


@router.post("/checkout", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def checkout(
    body: CheckoutRequest,
    principal: Shopper,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Place an order from the caller's cart."""
    return await order_service.place_order(
        db,
        tenant_id=principal.tenant_id,
        customer_email=principal.email,
        shipping_address=body.shipping_address,
    )


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    principal: OrderManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await order_service.list_orders(db, principal.tenant_id)


@router.get("/my", response_model=list[OrderResponse])
async def list_my_orders(
    principal: Shopper,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await order_service.list_customer_orders(db, principal.tenant_id, principal.email)


@router.get("/number/{order_number}", response_model=OrderResponse)
async def get_order_by_number(
    order_number: str,
    principal: Shopper,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    order = await order_service.get_order_by_number(db, principal.tenant_id, order_number)
    return _visible_to(order, principal)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    principal: Shopper,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    order = await order_service.get_order(db, principal.tenant_id, str(order_id))
    return _visible_to(order, principal)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: UUID,
    principal: OrderManager,
    db: Annotated[AsyncSession, Depends(get_db)],
    new_status: Annotated[OrderStatus, Query(alias="status")],
):
    """Move an order along its lifecycle; 409 when the transition is not allowed."""
    return await order_service.update_order_status(
        db, principal.tenant_id, str(order_id), new_status
    )


@router.post("/{order_id}/pay", response_model=OrderResponse)
async def pay_order(
    order_id: UUID,
    body: PayOrderRequest,
    principal: Shopper,
    db: Annotated[AsyncSession, Depends(get_db)],
    dispatcher: Annotated[PaymentDispatcher, Depends(get_payment_dispatcher)],
):
    order = await order_service.get_order(db, principal.tenant_id, str(order_id))
    _visible_to(order, principal)
    return await order_service.pay_order(
        db,
        dispatcher,
        tenant_id=principal.tenant_id,
        order_id=order.id,
        payment_method=body.payment_method,
        payment_token=body.payment_token,
    )
