"""Subscription plans and tenant subscriptions."""

import logging
from collections.abc import Sequence
from datetime import timedelta
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.billing.payments import PaymentDispatcher, PaymentRequest
from shopsaas.config import settings
from shopsaas.errors import DuplicateResourceError, PaymentFailedError, ResourceNotFoundError
from shopsaas.models import BillingInterval, Subscription, SubscriptionPlan, SubscriptionStatus
from shopsaas.models.base import utcnow
from shopsaas.services import billing as billing_service
from shopsaas.storage import repositories as repo

logger = logging.getLogger(__name__)

PERIOD_DAYS = {
    BillingInterval.MONTHLY: 30,
    BillingInterval.YEARLY: 365,
}


# Plans


async def list_plans(db: AsyncSession) -> Sequence[SubscriptionPlan]:
    return await repo.list_active_plans(db)


async def get_plan(db: AsyncSession, plan_id: str) -> SubscriptionPlan:
    plan = await repo.get_plan(db, plan_id)
    if plan is None:
        raise ResourceNotFoundError("Plan", plan_id)
    return plan


async def _flush_plan(db: AsyncSession, slug: str) -> None:
    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError(
            "Plan name or slug already exists", {"field": "slug", "value": slug}
        ) from None


async def create_plan(
    db: AsyncSession,
    name: str,
    slug: str,
    price: Decimal,
    billing_interval: BillingInterval,
    features: str | None = None,
) -> SubscriptionPlan:
    if await repo.get_plan_by_slug(db, slug) is not None:
        raise DuplicateResourceError(
            f"Plan with slug {slug} already exists", {"field": "slug", "value": slug}
        )
    plan = SubscriptionPlan(
        name=name,
        slug=slug,
        price=price,
        billing_interval=billing_interval,
        features=features,
        active=True,
    )
    db.add(plan)
    await _flush_plan(db, slug)
    logger.info("Plan created: %s (%s %s)", slug, price, billing_interval.value)
    return plan


async def update_plan(
    db: AsyncSession,
    plan_id: str,
    name: str,
    slug: str,
    price: Decimal,
    billing_interval: BillingInterval,
    features: str | None = None,
) -> SubscriptionPlan:
    plan = await get_plan(db, plan_id)
    if slug != plan.slug and await repo.get_plan_by_slug(db, slug) is not None:
        raise DuplicateResourceError(
            f"Plan with slug {slug} already exists", {"field": "slug", "value": slug}
        )
    plan.name = name
    plan.slug = slug
    plan.price = price
    plan.billing_interval = billing_interval
    plan.features = features
    await _flush_plan(db, slug)
    return plan


async def delete_plan(db: AsyncSession, plan_id: str) -> None:
    """Soft delete: the plan stays referenced by existing subscriptions."""
    plan = await get_plan(db, plan_id)
    plan.active = False
    await db.flush()
    logger.info("Plan deactivated: %s", plan.slug)


async def ensure_plan(
    db: AsyncSession,
    name: str,
    slug: str,
    price: Decimal,
    billing_interval: BillingInterval,
    features: str | None = None,
) -> SubscriptionPlan:
    """Return the plan with `slug`, creating it if missing."""
    plan = await repo.get_plan_by_slug(db, slug)
    if plan is not None:
        return plan
    return await create_plan(db, name, slug, price, billing_interval, features)


# Subscriptions


async def get_current_subscription(db: AsyncSession, tenant_id: str) -> Subscription | None:
    return await repo.get_subscription_by_status(db, tenant_id, SubscriptionStatus.ACTIVE)


async def subscribe(
    db: AsyncSession,
    dispatcher: PaymentDispatcher,
    tenant_id: str,
    plan_id: str,
    payment_method: str | None = None,
) -> Subscription:
    """
    Move the tenant onto `plan_id`.

    Paid plans are charged through the dispatcher first and leave a PAID
    invoice; free plans skip payment. Any current ACTIVE subscription is
    cancelled before the new one is written.
    """
    plan = await repo.get_plan(db, plan_id)
    if plan is None or not plan.active:
        raise ResourceNotFoundError("Plan", plan_id)

    if plan.price > 0:
        description = f"Subscription to {plan.name}"
        result = dispatcher.process(
            PaymentRequest(
                amount=plan.price,
                currency=settings.default_currency,
                payment_method=payment_method,
                description=description,
            )
        )
        if not result.success:
            logger.warning("Subscription payment for tenant %s failed: %s", tenant_id, result.message)
            raise PaymentFailedError(
                f"Payment failed: {result.message}", {"method": result.method.value}
            )
        await billing_service.record_payment(
            db, tenant_id=tenant_id, amount=plan.price, description=description, result=result
        )

    current = await get_current_subscription(db, tenant_id)
    if current is not None:
        current.status = SubscriptionStatus.CANCELED
        current.auto_renew = False
        # the partial unique index only admits one ACTIVE row per tenant
        await db.flush()

    start = utcnow()
    subscription = Subscription(
        tenant_id=tenant_id,
        plan=plan,
        plan_id=plan.id,
        status=SubscriptionStatus.ACTIVE,
        start_date=start,
        end_date=start + timedelta(days=PERIOD_DAYS[plan.billing_interval]),
        auto_renew=True,
    )
    db.add(subscription)
    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError("Tenant already has an active subscription") from None
    logger.info("Tenant %s subscribed to %s", tenant_id, plan.slug)
    return subscription


async def cancel_subscription(db: AsyncSession, tenant_id: str) -> Subscription:
    """Stop renewal; the subscription stays ACTIVE until its end date."""
    subscription = await get_current_subscription(db, tenant_id)
    if subscription is None:
        raise ResourceNotFoundError("Subscription", tenant_id)
    subscription.auto_renew = False
    await db.flush()
    logger.info("Tenant %s cancelled auto-renew on %s", tenant_id, subscription.plan.slug)
    return subscription
