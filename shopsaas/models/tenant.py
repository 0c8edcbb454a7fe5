"""Tenant model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from shopsaas.database import Base
from shopsaas.models.base import IdMixin, TimestampMixin


class Tenant(IdMixin, TimestampMixin, Base):
    """Tenant table - one store per row. Slug is fixed at creation."""

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(63), unique=True, nullable=False)
    owner_email: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
