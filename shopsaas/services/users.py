"""User accounts within a tenant."""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.permissions import Role
from shopsaas.auth.security import hash_password, verify_password
from shopsaas.errors import AuthenticationError, DuplicateResourceError, ResourceNotFoundError
from shopsaas.models import User
from shopsaas.storage import repositories as repo

logger = logging.getLogger(__name__)


async def create_user(
    db: AsyncSession,
    tenant_id: str,
    email: str,
    password: str,
    full_name: str,
    role: Role,
) -> User:
    tenant = await repo.get_tenant_by_id(db, tenant_id)
    if tenant is None:
        raise ResourceNotFoundError("Tenant", tenant_id)
    if await repo.user_email_exists(db, tenant_id, email):
        raise DuplicateResourceError("Email already in use", {"field": "email", "value": email})

    user = User(
        tenant=tenant,
        tenant_id=tenant.id,
        email=email,
        password_hash=hash_password(password),
        full_name=full_name,
        role=role,
        enabled=True,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        raise DuplicateResourceError("Email already in use") from None
    logger.info("User %s (%s) created in tenant %s", email, role.value, tenant.slug)
    return user


async def get_user_by_email(db: AsyncSession, tenant_id: str, email: str) -> User:
    user = await repo.get_user_by_email(db, tenant_id, email)
    if user is None:
        raise ResourceNotFoundError("User", email)
    return user


async def list_users(db: AsyncSession, tenant_id: str) -> Sequence[User]:
    return await repo.list_users_by_tenant(db, tenant_id)


async def authenticate(db: AsyncSession, tenant_slug: str, email: str, password: str) -> User:
    """Resolve credentials to an enabled user, or 401."""
    invalid = AuthenticationError("Invalid email or password")
    tenant = await repo.get_tenant_by_slug(db, tenant_slug)
    if tenant is None or not tenant.active:
        raise invalid
    user = await repo.get_user_by_email(db, tenant.id, email)
    if user is None or not user.enabled or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %s on %s", email, tenant_slug)
        raise invalid
    return user
