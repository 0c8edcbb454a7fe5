"""Database models."""

from shopsaas.models.tenant import Tenant
from shopsaas.models.user import Customer, User
from shopsaas.models.order import Cart, CartItem, Order, OrderItem, Product
from shopsaas.models.billing import (
    BillingInterval,
    Invoice,
    InvoiceStatus,
    Payment,
    PaymentStatus,
    Subscription,
    SubscriptionPlan,
    SubscriptionStatus,
)

__all__ = [
    "Tenant",
    "User",
    "Customer",
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "Invoice",
    "InvoiceStatus",
    "Payment",
    "PaymentStatus",
    "BillingInterval",
    "Subscription",
    "SubscriptionPlan",
    "SubscriptionStatus",
]
