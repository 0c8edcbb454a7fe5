"""Tenant provisioning and lookup."""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.permissions import Role
from shopsaas.errors import DuplicateResourceError, ResourceNotFoundError
from shopsaas.models import Tenant, User
from shopsaas.services import users as user_service
from shopsaas.storage import repositories as repo

logger = logging.getLogger(__name__)


async def _ensure_unique(db: AsyncSession, name: str, slug: str) -> None:
    if await repo.tenant_slug_exists(db, slug):
        raise DuplicateResourceError(
            f"Tenant with slug {slug} already exists", {"field": "slug", "value": slug}
        )
    if await repo.tenant_name_exists(db, name):
        raise DuplicateResourceError(
            f"Tenant with name {name} already exists", {"field": "name", "value": name}
        )


async def create_tenant(db: AsyncSession, name: str, slug: str, owner_email: str) -> Tenant:
    """
    Create an active tenant.
    Name/slug uniqueness is checked up front and backed by unique constraints
    for concurrent requests.
    """
    await _ensure_unique(db, name, slug)
    tenant = Tenant(name=name, slug=slug, owner_email=owner_email, active=True)
    db.add(tenant)
    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError(f"Tenant {name} / {slug} already exists") from None
    logger.info("Tenant created: %s (%s)", tenant.slug, tenant.id)
    return tenant


async def get_tenant_by_slug(db: AsyncSession, slug: str) -> Tenant:
    tenant = await repo.get_tenant_by_slug(db, slug)
    if tenant is None:
        raise ResourceNotFoundError("Tenant", slug)
    return tenant


async def get_tenant_by_id(db: AsyncSession, tenant_id: str) -> Tenant:
    tenant = await repo.get_tenant_by_id(db, tenant_id)
    if tenant is None:
        raise ResourceNotFoundError("Tenant", tenant_id)
    return tenant


async def list_tenants(db: AsyncSession) -> Sequence[Tenant]:
    return await repo.list_tenants(db)


async def register_merchant(
    db: AsyncSession,
    store_name: str,
    store_slug: str,
    email: str,
    password: str,
    full_name: str,
) -> tuple[Tenant, User]:
    """Create a store and its first merchant account in the request transaction."""
    tenant = await create_tenant(db, store_name, store_slug, email)
    user = await user_service.create_user(
        db,
        tenant_id=tenant.id,
        email=email,
        password=password,
        full_name=full_name,
        role=Role.MERCHANT,
    )
    logger.info("Merchant %s registered for %s", email, tenant.slug)
    return tenant, user
