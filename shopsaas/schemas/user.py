"""User, customer and auth schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from shopsaas.auth.permissions import Role


class UserCreateRequest(BaseModel):
    """POST /api/v1/users - tenant comes from the caller's token."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    full_name: str = Field(min_length=1, max_length=255)
    role: Role = Role.STAFF


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: str
    role: Role
    tenant_id: str
    tenant_name: str | None = None
    enabled: bool
    created_at: datetime


class LoginRequest(BaseModel):
    tenant_slug: str
    email: EmailStr
    password: str


class CustomerSignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=50)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    email: str
    role: Role
    tenant_id: str


class CustomerRequest(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None
    active: bool
    created_at: datetime
