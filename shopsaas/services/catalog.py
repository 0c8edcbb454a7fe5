"""Product catalogue."""

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.errors import DuplicateResourceError, ResourceNotFoundError
from shopsaas.models import Product
from shopsaas.storage import repositories as repo


async def create_product(
    db: AsyncSession,
    tenant_id: str,
    name: str,
    sku: str,
    price: Decimal,
    stock_level: int = 0,
    description: str | None = None,
) -> Product:
    if await repo.get_product_by_sku(db, tenant_id, sku) is not None:
        raise DuplicateResourceError(
            f"Product with SKU {sku} already exists", {"field": "sku", "value": sku}
        )
    product = Product(
        tenant_id=tenant_id,
        name=name,
        sku=sku,
        price=price,
        stock_level=stock_level,
        description=description,
        active=True,
    )
    db.add(product)
    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError(f"Product with SKU {sku} already exists") from None
    return product


async def get_product(db: AsyncSession, tenant_id: str, product_id: str) -> Product:
    product = await repo.get_product(db, tenant_id, product_id)
    if product is None:
        raise ResourceNotFoundError("Product", product_id)
    return product


async def list_products(db: AsyncSession, tenant_id: str) -> Sequence[Product]:
    return await repo.list_products(db, tenant_id)
