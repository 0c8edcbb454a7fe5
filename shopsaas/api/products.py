"""Catalog endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.middleware import permission_dep
from shopsaas.auth.permissions import Permission
from shopsaas.database import get_db
from shopsaas.schemas.order import ProductRequest, ProductResponse
from shopsaas.services import catalog as catalog_service

router = APIRouter()

ProductManager = permission_dep(Permission.PRODUCT_MANAGE)
ProductViewer = permission_dep(Permission.PRODUCT_VIEW)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductRequest,
    principal: ProductManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await catalog_service.create_product(
        db,
        tenant_id=principal.tenant_id,
        name=body.name,
        sku=body.sku,
        price=body.price,
        stock_level=body.stock_level,
        description=body.description,
    )


@router.get("", response_model=list[ProductResponse])
async def list_products(
    principal: ProductViewer,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await catalog_service.list_products(db, principal.tenant_id)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    principal: ProductViewer,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await catalog_service.get_product(db, principal.tenant_id, str(product_id))
