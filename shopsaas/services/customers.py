"""Customer (CRM) records."""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.errors import DuplicateResourceError, ResourceNotFoundError
from shopsaas.models import Customer
from shopsaas.storage import repositories as repo

logger = logging.getLogger(__name__)


async def _flush_unique(db: AsyncSession, email: str) -> None:
    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError(
            "Customer with this email already exists for this tenant",
            {"field": "email", "value": email},
        ) from None


async def create_customer(
    db: AsyncSession,
    tenant_id: str,
    first_name: str,
    last_name: str,
    email: str,
    phone: str | None = None,
) -> Customer:
    if await repo.get_customer_by_email(db, tenant_id, email) is not None:
        raise DuplicateResourceError(
            "Customer with this email already exists for this tenant",
            {"field": "email", "value": email},
        )
    customer = Customer(
        tenant_id=tenant_id,
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone,
        active=True,
    )
    db.add(customer)
    await _flush_unique(db, email)
    return customer


async def get_customer_by_email(db: AsyncSession, tenant_id: str, email: str) -> Customer:
    customer = await repo.get_customer_by_email(db, tenant_id, email)
    if customer is None:
        raise ResourceNotFoundError("Customer", email)
    return customer


async def list_customers(db: AsyncSession, tenant_id: str) -> Sequence[Customer]:
    return await repo.list_customers(db, tenant_id)


async def update_customer(
    db: AsyncSession,
    tenant_id: str,
    customer_id: str,
    first_name: str,
    last_name: str,
    email: str,
    phone: str | None = None,
) -> Customer:
    customer = await repo.get_customer(db, tenant_id, customer_id)
    if customer is None:
        raise ResourceNotFoundError("Customer", customer_id)
    if email != customer.email and await repo.get_customer_by_email(db, tenant_id, email):
        raise DuplicateResourceError(
            "Customer with this email already exists for this tenant",
            {"field": "email", "value": email},
        )
    customer.first_name = first_name
    customer.last_name = last_name
    customer.email = email
    customer.phone = phone
    await _flush_unique(db, email)
    return customer


async def delete_customer(db: AsyncSession, tenant_id: str, customer_id: str) -> None:
    customer = await repo.get_customer(db, tenant_id, customer_id)
    if customer is None:
        raise ResourceNotFoundError("Customer", customer_id)
    await db.delete(customer)
    await db.flush()
    logger.info("Customer %s deleted from tenant %s", customer_id, tenant_id)
