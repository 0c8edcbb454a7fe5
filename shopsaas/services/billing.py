"""Invoices and payment records."""

import logging
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.billing.payments import PaymentResult
from shopsaas.config import settings
from shopsaas.errors import DuplicateResourceError, ResourceNotFoundError
from shopsaas.models import Invoice, InvoiceStatus, Payment, PaymentStatus
from shopsaas.models.base import utcnow
from shopsaas.storage import repositories as repo

logger = logging.getLogger(__name__)


async def list_invoices(db: AsyncSession, tenant_id: str) -> Sequence[Invoice]:
    return await repo.list_invoices(db, tenant_id)


async def get_invoice(db: AsyncSession, tenant_id: str, invoice_id: str) -> Invoice:
    invoice = await repo.get_invoice(db, tenant_id, invoice_id)
    if invoice is None:
        raise ResourceNotFoundError("Invoice", invoice_id)
    return invoice


async def list_payments(db: AsyncSession, tenant_id: str, invoice_id: str) -> Sequence[Payment]:
    await get_invoice(db, tenant_id, invoice_id)
    return await repo.list_payments_for_invoice(db, tenant_id, invoice_id)


async def record_payment(
    db: AsyncSession,
    tenant_id: str,
    amount: Decimal,
    description: str,
    result: PaymentResult,
    order_id: str | None = None,
    currency: str | None = None,
) -> Invoice:
    """
    Persist a successful charge.

    Creates a PAID invoice and one SUCCEEDED payment row carrying the
    handler's transaction id. Declined charges are raised by the caller and
    never reach here.
    """
    currency = currency or settings.default_currency
    now = utcnow()
    invoice = Invoice(
        tenant_id=tenant_id,
        order_id=order_id,
        amount=amount,
        currency=currency,
        status=InvoiceStatus.PAID,
        description=description,
        issued_at=now,
    )
    db.add(invoice)
    await db.flush()

    payment = Payment(
        tenant_id=tenant_id,
        invoice_id=invoice.id,
        amount=amount,
        currency=currency,
        status=PaymentStatus.SUCCEEDED,
        payment_method=result.method.value,
        transaction_id=result.transaction_id,
        processed_at=now,
    )
    db.add(payment)
    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError(
            "Payment transaction already recorded",
            {"transaction_id": result.transaction_id},
        ) from None
    logger.info(
        "Recorded payment %s for %s %s (invoice %s)",
        payment.transaction_id,
        amount,
        currency,
        invoice.id,
    )
    return invoice
