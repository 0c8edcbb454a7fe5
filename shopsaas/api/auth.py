"""Signup and login endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.permissions import Role
from shopsaas.auth.security import create_access_token
from shopsaas.database import get_db
from shopsaas.models import User
from shopsaas.schemas.tenant import MerchantSignupRequest, TenantResponse
from shopsaas.schemas.user import CustomerSignupRequest, LoginRequest, TokenResponse
from shopsaas.services import customers as customer_service
from shopsaas.services import tenants as tenant_service
from shopsaas.services import users as user_service
from shopsaas.storage import repositories as repo

router = APIRouter()


def _token_for(user: User) -> TokenResponse:
    token = create_access_token(
        user_id=user.id,
        email=user.email,
        tenant_id=user.tenant_id,
        role=user.role.value,
    )
    return TokenResponse(
        access_token=token, email=user.email, role=user.role, tenant_id=user.tenant_id
    )


@router.post("/register", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def register_merchant(
    body: MerchantSignupRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Open a store: creates the tenant and its merchant account together."""
    tenant, _ = await tenant_service.register_merchant(
        db,
        store_name=body.store_name,
        store_slug=body.store_slug,
        email=body.email,
        password=body.password,
        full_name=body.full_name,
    )
    return tenant


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await user_service.authenticate(db, body.tenant_slug, body.email, body.password)
    return _token_for(user)


@router.post(
    "/customer/{store_slug}/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_customer(
    store_slug: str,
    body: CustomerSignupRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Storefront signup: a CUSTOMER login plus the store's customer record."""
    tenant = await tenant_service.get_tenant_by_slug(db, store_slug)
    user = await user_service.create_user(
        db,
        tenant_id=tenant.id,
        email=body.email,
        password=body.password,
        full_name=f"{body.first_name} {body.last_name}",
        role=Role.CUSTOMER,
    )
    # the merchant may already have a CRM record for this email
    if await repo.get_customer_by_email(db, tenant.id, body.email) is None:
        await customer_service.create_customer(
            db,
            tenant_id=tenant.id,
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            phone=body.phone,
        )
    return _token_for(user)
