"""Payment strategy dispatcher.

Handlers register under a PaymentMethod; callers pass the method name as free
text and the dispatcher resolves it (uppercased, MOCK when absent).
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Protocol
from uuid import uuid4

from shopsaas.errors import UnsupportedPaymentMethodError

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "MOCK"


class PaymentMethod(str, Enum):
    """Known payment methods. Only those with a registered handler are usable."""

    MOCK = "MOCK"
    STRIPE = "STRIPE"
    PAYPAL = "PAYPAL"


@dataclass
class PaymentRequest:
    amount: Decimal
    currency: str
    payment_method: str | None = None
    description: str = ""
    payment_token: str | None = None


@dataclass
class PaymentResult:
    success: bool
    method: PaymentMethod
    transaction_id: str | None = None
    message: str = ""


class PaymentStrategy(Protocol):
    method: PaymentMethod

    def process_payment(self, request: PaymentRequest) -> PaymentResult: ...


class MockPaymentStrategy:
    """Always succeeds; nothing is charged."""

    method = PaymentMethod.MOCK

    def process_payment(self, request: PaymentRequest) -> PaymentResult:
        logger.info("Processing MOCK payment for amount: %s %s", request.amount, request.currency)
        return PaymentResult(
            success=True,
            method=self.method,
            transaction_id=f"mock_{uuid4().hex}",
            message="Mock payment approved",
        )


def resolve_method(name: str | None) -> PaymentMethod:
    """Map a free-text method name to a PaymentMethod."""
    key = (name or "").strip().upper() or DEFAULT_METHOD
    try:
        return PaymentMethod(key)
    except ValueError:
        raise UnsupportedPaymentMethodError(key) from None


class PaymentDispatcher:
    """Routes payment requests to the handler registered for their method."""

    def __init__(self, strategies: list[PaymentStrategy] | None = None):
        self._strategies: dict[PaymentMethod, PaymentStrategy] = {}
        for strategy in strategies or []:
            self.register(strategy)

    def register(self, strategy: PaymentStrategy) -> None:
        method = PaymentMethod(strategy.method)
        if method in self._strategies:
            raise ValueError(f"Payment handler already registered for {method.value}")
        self._strategies[method] = strategy

    @property
    def methods(self) -> frozenset[PaymentMethod]:
        return frozenset(self._strategies)

    def strategy_for(self, name: str | None) -> PaymentStrategy:
        method = resolve_method(name)
        strategy = self._strategies.get(method)
        if strategy is None:
            raise UnsupportedPaymentMethodError(method.value)
        return strategy

    def process(self, request: PaymentRequest) -> PaymentResult:
        strategy = self.strategy_for(request.payment_method)
        return strategy.process_payment(request)


def default_dispatcher() -> PaymentDispatcher:
    return PaymentDispatcher([MockPaymentStrategy()])


_dispatcher = default_dispatcher()


def get_payment_dispatcher() -> PaymentDispatcher:
    """FastAPI dependency; tests override it to inject other handlers."""
    return _dispatcher
