"""Invoice, payment and subscription schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shopsaas.models.billing import (
    BillingInterval,
    InvoiceStatus,
    PaymentStatus,
    SubscriptionStatus,
)


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str | None
    amount: Decimal
    currency: str
    status: InvoiceStatus
    description: str
    issued_at: datetime


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    invoice_id: str
    amount: Decimal
    currency: str
    status: PaymentStatus
    payment_method: str
    transaction_id: str | None
    payment_intent_id: str | None
    failure_reason: str | None
    processed_at: datetime


class SubscriptionPlanRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=63, pattern=r"^[a-z0-9-]+$")
    price: Decimal = Field(ge=0, max_digits=19, decimal_places=2)
    billing_interval: BillingInterval
    features: str | None = None


class SubscriptionPlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    price: Decimal
    billing_interval: BillingInterval
    features: str | None


class SubscribeRequest(BaseModel):
    plan_id: UUID
    payment_method: str | None = None


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    plan: SubscriptionPlanResponse
    start_date: datetime
    end_date: datetime
    status: SubscriptionStatus
    auto_renew: bool
