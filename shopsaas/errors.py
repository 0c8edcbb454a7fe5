"""Domain errors and their HTTP rendering."""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shopsaas.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class ShopError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationFailedError(ShopError):
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateResourceError(ShopError):
    status_code = status.HTTP_409_CONFLICT


class ResourceNotFoundError(ShopError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            f"{resource} not found: {identifier}",
            {"resource": resource, "identifier": str(identifier)},
        )


class InvalidOrderStateTransitionError(ShopError):
    """Order status change outside the allowed adjacency."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current: Any, target: Any):
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(
            f"Invalid order state transition from {current_value} to {target_value}",
            {"current": current_value, "target": target_value},
        )
        self.current = current
        self.target = target


class AuthenticationError(ShopError):
    status_code = status.HTTP_401_UNAUTHORIZED


class UnsupportedPaymentMethodError(ShopError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, method: str):
        super().__init__(f"Unsupported payment method: {method}", {"method": method})
        self.method = method


class PaymentFailedError(ShopError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED


class InsufficientStockError(ShopError):
    status_code = status.HTTP_409_CONFLICT


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def error_body(
    status_code: int,
    message: str,
    errors: dict[str, str] | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return ErrorResponse(
        status=status_code,
        message=message,
        timestamp=_now_iso(),
        errors=errors or {},
        details=details or {},
    ).model_dump()


async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.message, details=exc.details),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Field-level messages keyed by dotted path, without the body/query prefix."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        errors[".".join(loc) or "request"] = err.get("msg", "Invalid value")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(status.HTTP_400_BAD_REQUEST, "Validation Failed", errors=errors),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
