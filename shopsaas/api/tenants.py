"""Tenant endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.middleware import PrincipalDep
from shopsaas.database import get_db
from shopsaas.schemas.tenant import TenantCreateRequest, TenantResponse
from shopsaas.services import tenants as tenant_service

router = APIRouter()


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    body: TenantCreateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a tenant. Name and slug must be unused."""
    return await tenant_service.create_tenant(
        db, name=body.name, slug=body.slug, owner_email=body.owner_email
    )


@router.get("/my", response_model=TenantResponse)
async def get_my_tenant(
    principal: PrincipalDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await tenant_service.get_tenant_by_id(db, principal.tenant_id)


@router.get("/{slug}", response_model=TenantResponse)
async def get_tenant(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await tenant_service.get_tenant_by_slug(db, slug)


@router.get("", response_model=list[TenantResponse])
async def list_tenants(db: Annotated[AsyncSession, Depends(get_db)]):
    return await tenant_service.list_tenants(db)
