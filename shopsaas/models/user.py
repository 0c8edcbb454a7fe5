"""User and Customer models."""

from sqlalchemy import Boolean, Enum as SAEnum, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shopsaas.auth.permissions import Role
from shopsaas.database import Base
from shopsaas.models.base import IdMixin, TenantScopedMixin, TimestampMixin
from shopsaas.models.tenant import Tenant


class User(IdMixin, TimestampMixin, TenantScopedMixin, Base):
    """Login account; belongs to exactly one tenant."""

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),)

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, native_enum=False, length=20), nullable=False
    )
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    tenant: Mapped[Tenant] = relationship(lazy="joined")


class Customer(IdMixin, TimestampMixin, TenantScopedMixin, Base):
    """CRM record for a store's shopper."""

    __tablename__ = "customers"
    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_customers_tenant_email"),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
