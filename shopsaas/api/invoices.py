"""Invoice and payment history."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.middleware import permission_dep
from shopsaas.auth.permissions import Permission
from shopsaas.database import get_db
from shopsaas.schemas.billing import InvoiceResponse, PaymentResponse
from shopsaas.services import billing as billing_service

router = APIRouter()

InvoiceViewer = permission_dep(Permission.INVOICE_VIEW)


@router.get("", response_model=list[InvoiceResponse])
async def list_invoices(
    principal: InvoiceViewer,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await billing_service.list_invoices(db, principal.tenant_id)


@router.get("/{invoice_id}/payments", response_model=list[PaymentResponse])
async def list_invoice_payments(
    invoice_id: UUID,
    principal: InvoiceViewer,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await billing_service.list_payments(db, principal.tenant_id, str(invoice_id))
