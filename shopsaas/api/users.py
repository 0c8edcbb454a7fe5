"""User endpoints, scoped to the caller's tenant."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.middleware import PrincipalDep, permission_dep
from shopsaas.auth.permissions import Permission, Role, has_permission
from shopsaas.database import get_db
from shopsaas.models import User
from shopsaas.schemas.user import UserCreateRequest, UserResponse
from shopsaas.services import users as user_service

logger = logging.getLogger(__name__)

router = APIRouter()

UserManager = permission_dep(Permission.USER_MANAGE)


def _to_response(user: User) -> UserResponse:
    response = UserResponse.model_validate(user)
    response.tenant_name = user.tenant.name if user.tenant is not None else None
    return response


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreateRequest,
    principal: UserManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Add a user to the caller's tenant."""
    if body.role == Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="ADMIN role cannot be assigned by a tenant",
        )
    user = await user_service.create_user(
        db,
        tenant_id=principal.tenant_id,
        email=body.email,
        password=body.password,
        full_name=body.full_name,
        role=body.role,
    )
    return _to_response(user)


@router.get("/tenant/{tenant_id}", response_model=list[UserResponse])
async def list_tenant_users(
    tenant_id: UUID,
    principal: UserManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if str(tenant_id) != principal.tenant_id:
        logger.warning("%s tried to list users of tenant %s", principal.email, tenant_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot access users of another tenant",
        )
    users = await user_service.list_users(db, principal.tenant_id)
    return [_to_response(user) for user in users]


@router.get("/{email}", response_model=UserResponse)
async def get_user(
    email: str,
    principal: PrincipalDep,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Look up a user of the caller's tenant. Without USER_VIEW only yourself."""
    if email != principal.email and not has_permission(principal.role, Permission.USER_VIEW):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Permission required: {Permission.USER_VIEW.value}",
        )
    user = await user_service.get_user_by_email(db, principal.tenant_id, email)
    return _to_response(user)
