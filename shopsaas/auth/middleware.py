"""Bearer token authentication and per-route permission checks."""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from shopsaas.auth.permissions import Permission, Role, has_permission
from shopsaas.auth.security import decode_access_token

logger = logging.getLogger(__name__)

AUTH_HEADER = APIKeyHeader(name="Authorization", auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as carried in the access token."""

    user_id: str
    email: str
    tenant_id: str
    role: Role


async def get_principal(auth_header: str | None = Depends(AUTH_HEADER)) -> Principal:
    """Extract the principal from `Authorization: Bearer <jwt>`."""
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_access_token(auth_header[7:].strip())
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return Principal(
            user_id=payload["sub"],
            email=payload["email"],
            tenant_id=payload["tenant_id"],
            role=Role(payload["role"]),
        )
    except (KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Malformed token claims",
        ) from None


PrincipalDep = Annotated[Principal, Depends(get_principal)]


def require_permission(permission: Permission):
    """Dependency factory: resolves to the principal when its role grants `permission`."""

    async def check_permission(principal: PrincipalDep) -> Principal:
        if not has_permission(principal.role, permission):
            logger.warning(
                "Denied %s to %s (%s)", permission.value, principal.email, principal.role.value
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission required: {permission.value}",
            )
        return principal

    return check_permission


def permission_dep(permission: Permission):
    return Annotated[Principal, Depends(require_permission(permission))]
