"""Cart, checkout and order lifecycle."""

import logging
import uuid
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.billing.payments import PaymentDispatcher, PaymentRequest
from shopsaas.config import settings
from shopsaas.engine.order_state import OrderStatus, ensure_transition
from shopsaas.errors import (
    DuplicateResourceError,
    InsufficientStockError,
    PaymentFailedError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from shopsaas.models import Cart, CartItem, Order, OrderItem, Product
from shopsaas.services import billing as billing_service
from shopsaas.storage import repositories as repo

logger = logging.getLogger(__name__)


def generate_order_number() -> str:
    return "ORD-" + uuid.uuid4().hex[:8].upper()


async def _resolve_product(
    db: AsyncSession, tenant_id: str, product_id: str | None, sku: str | None
) -> Product:
    if product_id:
        product = await repo.get_product(db, tenant_id, product_id)
    else:
        product = await repo.get_product_by_sku(db, tenant_id, sku or "")
    if product is None or not product.active:
        raise ResourceNotFoundError("Product", product_id or sku)
    return product


# Cart


async def add_to_cart(
    db: AsyncSession,
    tenant_id: str,
    customer_email: str,
    quantity: int,
    product_id: str | None = None,
    sku: str | None = None,
) -> Cart:
    if quantity < 1:
        raise ValidationFailedError("Quantity must be at least 1", {"quantity": quantity})
    product = await _resolve_product(db, tenant_id, product_id, sku)

    cart = await repo.get_cart(db, tenant_id, customer_email)
    if cart is None:
        cart = Cart(tenant_id=tenant_id, customer_email=customer_email, items=[])
        db.add(cart)

    for item in cart.items:
        if item.product_id == product.id:
            item.quantity += quantity
            break
    else:
        cart.items.append(CartItem(product_id=product.id, quantity=quantity))

    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError("Cart already exists for this customer") from None
    return cart


async def get_cart(db: AsyncSession, tenant_id: str, customer_email: str) -> Cart | None:
    return await repo.get_cart(db, tenant_id, customer_email)


async def clear_cart(db: AsyncSession, tenant_id: str, customer_email: str) -> None:
    cart = await repo.get_cart(db, tenant_id, customer_email)
    if cart is not None:
        await db.delete(cart)
        await db.flush()


# Orders


async def place_order(
    db: AsyncSession,
    tenant_id: str,
    customer_email: str,
    shipping_address: str | None = None,
) -> Order:
    """
    Turn the customer's cart into a PENDING order.

    Each line snapshots the product's name, sku and price at checkout time and
    deducts stock. The cart is removed once the order exists.
    """
    cart = await repo.get_cart(db, tenant_id, customer_email)
    if cart is None or not cart.items:
        raise ValidationFailedError("Cart is empty")

    products = await repo.lock_products(db, tenant_id, [item.product_id for item in cart.items])

    order_items = []
    total = Decimal("0.00")
    for item in cart.items:
        product = products.get(item.product_id)
        if product is None or not product.active:
            raise ResourceNotFoundError("Product", item.product_id)
        if product.stock_level < item.quantity:
            raise InsufficientStockError(
                f"Insufficient stock for product: {product.name}",
                {
                    "product_id": product.id,
                    "requested": item.quantity,
                    "available": product.stock_level,
                },
            )
        product.stock_level -= item.quantity
        total += product.price * item.quantity
        order_items.append(
            OrderItem(
                product_id=product.id,
                product_name=product.name,
                sku=product.sku,
                price=product.price,
                quantity=item.quantity,
            )
        )

    order = Order(
        tenant_id=tenant_id,
        order_number=generate_order_number(),
        customer_email=customer_email,
        status=OrderStatus.PENDING,
        total_price=total,
        shipping_address=shipping_address,
        items=order_items,
    )
    db.add(order)
    await db.delete(cart)
    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError("Order number collision, retry checkout") from None

    logger.info(
        "Order %s placed by %s in tenant %s, total %s",
        order.order_number,
        customer_email,
        tenant_id,
        total,
    )
    return order


async def list_orders(db: AsyncSession, tenant_id: str) -> Sequence[Order]:
    return await repo.list_orders(db, tenant_id)


async def list_customer_orders(
    db: AsyncSession, tenant_id: str, customer_email: str
) -> Sequence[Order]:
    return await repo.list_orders(db, tenant_id, customer_email=customer_email)


async def get_order(db: AsyncSession, tenant_id: str, order_id: str) -> Order:
    order = await repo.get_order(db, tenant_id, order_id)
    if order is None:
        raise ResourceNotFoundError("Order", order_id)
    return order


async def get_order_by_number(db: AsyncSession, tenant_id: str, order_number: str) -> Order:
    order = await repo.get_order_by_number(db, tenant_id, order_number)
    if order is None:
        raise ResourceNotFoundError("Order", order_number)
    return order


async def _lock_order(db: AsyncSession, tenant_id: str, order_id: str) -> Order:
    order = await repo.lock_order(db, tenant_id, order_id)
    if order is None:
        raise ResourceNotFoundError("Order", order_id)
    return order


async def update_order_status(
    db: AsyncSession, tenant_id: str, order_id: str, target: OrderStatus
) -> Order:
    order = await _lock_order(db, tenant_id, order_id)
    previous = order.status
    order.status = ensure_transition(previous, target)
    await db.flush()
    logger.info("Order %s status %s -> %s", order.order_number, previous.value, target.value)
    return order


async def pay_order(
    db: AsyncSession,
    dispatcher: PaymentDispatcher,
    tenant_id: str,
    order_id: str,
    payment_method: str | None = None,
    payment_token: str | None = None,
) -> Order:
    """Charge a PENDING order through the dispatcher and mark it PAID.

    The order row stays locked until the request commits, so a concurrent
    payment or cancellation waits and then sees the new status.
    """
    order = await _lock_order(db, tenant_id, order_id)
    ensure_transition(order.status, OrderStatus.PAID)

    result = dispatcher.process(
        PaymentRequest(
            amount=order.total_price,
            currency=settings.default_currency,
            payment_method=payment_method,
            description=f"Order {order.order_number}",
            payment_token=payment_token,
        )
    )
    if not result.success:
        logger.warning("Payment for order %s failed: %s", order.order_number, result.message)
        raise PaymentFailedError(
            f"Payment failed: {result.message}",
            {"method": result.method.value, "order_number": order.order_number},
        )

    await billing_service.record_payment(
        db,
        tenant_id=tenant_id,
        amount=order.total_price,
        description=f"Order {order.order_number}",
        result=result,
        order_id=order.id,
    )
    order.status = OrderStatus.PAID
    await db.flush()
    logger.info("Order %s paid via %s", order.order_number, result.method.value)
    return order
