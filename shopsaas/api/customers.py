"""Customer records (merchant CRM)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.middleware import permission_dep
from shopsaas.auth.permissions import Permission
from shopsaas.database import get_db
from shopsaas.schemas.user import CustomerRequest, CustomerResponse
from shopsaas.services import customers as customer_service

router = APIRouter()

CustomerManager = permission_dep(Permission.CUSTOMER_MANAGE)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    body: CustomerRequest,
    principal: CustomerManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await customer_service.create_customer(
        db,
        tenant_id=principal.tenant_id,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        phone=body.phone,
    )


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    principal: CustomerManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await customer_service.list_customers(db, principal.tenant_id)


@router.get("/{email}", response_model=CustomerResponse)
async def get_customer(
    email: str,
    principal: CustomerManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await customer_service.get_customer_by_email(db, principal.tenant_id, email)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: UUID,
    body: CustomerRequest,
    principal: CustomerManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await customer_service.update_customer(
        db,
        tenant_id=principal.tenant_id,
        customer_id=str(customer_id),
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        phone=body.phone,
    )


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: UUID,
    principal: CustomerManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await customer_service.delete_customer(db, principal.tenant_id, str(customer_id))
