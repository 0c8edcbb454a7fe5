"""Repository functions for tenants, users, customers, catalog, orders and billing.

Every lookup of a tenant-owned row takes the tenant id and filters on it; a
row from another tenant is indistinguishable from a missing one.
"""

from collections.abc import Sequence

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.models import (
    Cart,
    Customer,
    Invoice,
    Order,
    Payment,
    Product,
    Subscription,
    SubscriptionPlan,
    SubscriptionStatus,
    Tenant,
    User,
)


# Tenants


async def get_tenant_by_id(db: AsyncSession, tenant_id: str) -> Tenant | None:
    return await db.get(Tenant, tenant_id)


async def get_tenant_by_slug(db: AsyncSession, slug: str) -> Tenant | None:
    result = await db.execute(select(Tenant).where(Tenant.slug == slug))
    return result.scalar_one_or_none()


async def tenant_slug_exists(db: AsyncSession, slug: str) -> bool:
    return bool(await db.scalar(select(exists().where(Tenant.slug == slug))))


async def tenant_name_exists(db: AsyncSession, name: str) -> bool:
    return bool(await db.scalar(select(exists().where(Tenant.name == name))))


async def list_tenants(db: AsyncSession) -> Sequence[Tenant]:
    result = await db.execute(select(Tenant).order_by(Tenant.created_at))
    return result.scalars().all()


# Users


async def get_user_by_email(db: AsyncSession, tenant_id: str, email: str) -> User | None:
    result = await db.execute(
        select(User).where(User.tenant_id == tenant_id, User.email == email)
    )
    return result.scalar_one_or_none()


async def user_email_exists(db: AsyncSession, tenant_id: str, email: str) -> bool:
    return bool(
        await db.scalar(
            select(exists().where(User.tenant_id == tenant_id, User.email == email))
        )
    )


async def list_users_by_tenant(db: AsyncSession, tenant_id: str) -> Sequence[User]:
    result = await db.execute(
        select(User).where(User.tenant_id == tenant_id).order_by(User.created_at)
    )
    return result.scalars().all()


# Customers


async def get_customer(db: AsyncSession, tenant_id: str, customer_id: str) -> Customer | None:
    result = await db.execute(
        select(Customer).where(Customer.id == customer_id, Customer.tenant_id == tenant_id)
    )
    return result.scalar_one_or_none()


async def get_customer_by_email(
    db: AsyncSession, tenant_id: str, email: str
) -> Customer | None:
    result = await db.execute(
        select(Customer).where(Customer.tenant_id == tenant_id, Customer.email == email)
    )
    return result.scalar_one_or_none()


async def list_customers(db: AsyncSession, tenant_id: str) -> Sequence[Customer]:
    result = await db.execute(
        select(Customer).where(Customer.tenant_id == tenant_id).order_by(Customer.created_at)
    )
    return result.scalars().all()


# Catalog


async def get_product(db: AsyncSession, tenant_id: str, product_id: str) -> Product | None:
    result = await db.execute(
        select(Product).where(Product.id == product_id, Product.tenant_id == tenant_id)
    )
    return result.scalar_one_or_none()


async def get_product_by_sku(db: AsyncSession, tenant_id: str, sku: str) -> Product | None:
    result = await db.execute(
        select(Product).where(Product.tenant_id == tenant_id, Product.sku == sku)
    )
    return result.scalar_one_or_none()


async def lock_products(
    db: AsyncSession, tenant_id: str, product_ids: Sequence[str]
) -> dict[str, Product]:
    """Load products for a stock change, row-locked where the backend supports it."""
    result = await db.execute(
        select(Product)
        .where(Product.tenant_id == tenant_id, Product.id.in_(product_ids))
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return {product.id: product for product in result.scalars().all()}


async def list_products(
    db: AsyncSession, tenant_id: str, active_only: bool = True
) -> Sequence[Product]:
    query = select(Product).where(Product.tenant_id == tenant_id)
    if active_only:
        query = query.where(Product.active.is_(True))
    result = await db.execute(query.order_by(Product.name))
    return result.scalars().all()


# Carts and orders


async def get_cart(db: AsyncSession, tenant_id: str, customer_email: str) -> Cart | None:
    result = await db.execute(
        select(Cart).where(Cart.tenant_id == tenant_id, Cart.customer_email == customer_email)
    )
    return result.scalar_one_or_none()


async def get_order(db: AsyncSession, tenant_id: str, order_id: str) -> Order | None:
    result = await db.execute(
        select(Order).where(Order.id == order_id, Order.tenant_id == tenant_id)
    )
    return result.scalar_one_or_none()


async def lock_order(db: AsyncSession, tenant_id: str, order_id: str) -> Order | None:
    """Load an order for a status change, row-locked where the backend supports it.

    A copy already in the session is refreshed from the locked row.
    """
    result = await db.execute(
        select(Order)
        .where(Order.id == order_id, Order.tenant_id == tenant_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_order_by_number(
    db: AsyncSession, tenant_id: str, order_number: str
) -> Order | None:
    result = await db.execute(
        select(Order).where(Order.tenant_id == tenant_id, Order.order_number == order_number)
    )
    return result.scalar_one_or_none()


async def list_orders(
    db: AsyncSession, tenant_id: str, customer_email: str | None = None
) -> Sequence[Order]:
    query = select(Order).where(Order.tenant_id == tenant_id)
    if customer_email is not None:
        query = query.where(Order.customer_email == customer_email)
    result = await db.execute(query.order_by(Order.created_at.desc()))
    return result.scalars().all()


# Billing


async def get_invoice(db: AsyncSession, tenant_id: str, invoice_id: str) -> Invoice | None:
    result = await db.execute(
        select(Invoice).where(Invoice.id == invoice_id, Invoice.tenant_id == tenant_id)
    )
    return result.scalar_one_or_none()


async def list_invoices(db: AsyncSession, tenant_id: str) -> Sequence[Invoice]:
    result = await db.execute(
        select(Invoice).where(Invoice.tenant_id == tenant_id).order_by(Invoice.issued_at.desc())
    )
    return result.scalars().all()


async def list_payments_for_invoice(
    db: AsyncSession, tenant_id: str, invoice_id: str
) -> Sequence[Payment]:
    result = await db.execute(
        select(Payment)
        .where(Payment.tenant_id == tenant_id, Payment.invoice_id == invoice_id)
        .order_by(Payment.processed_at)
    )
    return result.scalars().all()


# Subscriptions


async def get_plan(db: AsyncSession, plan_id: str) -> SubscriptionPlan | None:
    return await db.get(SubscriptionPlan, plan_id)


async def get_plan_by_slug(db: AsyncSession, slug: str) -> SubscriptionPlan | None:
    result = await db.execute(select(SubscriptionPlan).where(SubscriptionPlan.slug == slug))
    return result.scalar_one_or_none()


async def list_active_plans(db: AsyncSession) -> Sequence[SubscriptionPlan]:
    result = await db.execute(
        select(SubscriptionPlan)
        .where(SubscriptionPlan.active.is_(True))
        .order_by(SubscriptionPlan.price)
    )
    return result.scalars().all()


async def get_subscription_by_status(
    db: AsyncSession, tenant_id: str, status: SubscriptionStatus
) -> Subscription | None:
    result = await db.execute(
        select(Subscription).where(
            Subscription.tenant_id == tenant_id, Subscription.status == status
        )
    )
    return result.scalars().first()
