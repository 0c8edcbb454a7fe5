"""Tenant and onboarding schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

SLUG_PATTERN = r"^[a-z0-9-]+$"

# Surrounding whitespace is dropped before the length check and the uniqueness lookup.
StoreName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)]


class TenantCreateRequest(BaseModel):
    """POST /api/v1/tenants request."""

    name: StoreName
    slug: str = Field(min_length=1, max_length=63, pattern=SLUG_PATTERN)
    owner_email: EmailStr = Field(alias="ownerEmail")

    model_config = ConfigDict(populate_by_name=True)


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    owner_email: str
    active: bool
    created_at: datetime


class MerchantSignupRequest(BaseModel):
    """POST /api/v1/auth/register - store plus its first merchant account."""

    store_name: StoreName
    store_slug: str = Field(min_length=1, max_length=63, pattern=SLUG_PATTERN)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    full_name: str = Field(min_length=1, max_length=255)
