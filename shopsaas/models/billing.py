"""Invoice, payment and subscription models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shopsaas.database import Base
from shopsaas.models.base import IdMixin, TenantScopedMixin, TimestampMixin


class InvoiceStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"


class BillingInterval(str, Enum):
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELED = "CANCELED"
    EXPIRED = "EXPIRED"


class Invoice(IdMixin, TimestampMixin, TenantScopedMixin, Base):
    __tablename__ = "invoices"

    order_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("orders.id"), nullable=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    status: Mapped[InvoiceStatus] = mapped_column(
        SAEnum(InvoiceStatus, native_enum=False, length=20), nullable=False
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class Payment(IdMixin, TimestampMixin, TenantScopedMixin, Base):
    """Gateway transaction against an invoice."""

    __tablename__ = "payments"

    invoice_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("invoices.id"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(PaymentStatus, native_enum=False, length=20), nullable=False
    )
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)
    transaction_id: Mapped[str | None] = mapped_column(String(100), unique=True, nullable=True)
    payment_intent_id: Mapped[str | None] = mapped_column(
        String(100), unique=True, nullable=True
    )
    failure_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    processed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SubscriptionPlan(IdMixin, TimestampMixin, Base):
    """Platform-wide plan catalogue (not tenant-owned)."""

    __tablename__ = "subscription_plans"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(63), unique=True, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    billing_interval: Mapped[BillingInterval] = mapped_column(
        SAEnum(BillingInterval, native_enum=False, length=20), nullable=False
    )
    features: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Subscription(IdMixin, TimestampMixin, TenantScopedMixin, Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        # At most one ACTIVE subscription per tenant
        Index(
            "uq_subscriptions_tenant_active",
            "tenant_id",
            unique=True,
            postgresql_where=text("status = 'ACTIVE'"),
            sqlite_where=text("status = 'ACTIVE'"),
        ),
    )

    plan_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("subscription_plans.id"), nullable=False
    )
    status: Mapped[SubscriptionStatus] = mapped_column(
        SAEnum(SubscriptionStatus, native_enum=False, length=20), nullable=False
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    auto_renew: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    plan: Mapped[SubscriptionPlan] = relationship(lazy="joined")
