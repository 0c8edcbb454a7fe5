"""Shared columns for all tables."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, declared_attr, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


class IdMixin:
    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=new_id)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=utcnow
    )


class TenantScopedMixin:
    """Every tenant-owned row carries its tenant id; all lookups filter on it."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(
            Uuid(as_uuid=False), ForeignKey("tenants.id"), nullable=False, index=True
        )
