"""Unit tests for the payment dispatcher."""

from decimal import Decimal

import pytest

from shopsaas.billing.payments import (
    MockPaymentStrategy,
    PaymentDispatcher,
    PaymentMethod,
    PaymentRequest,
    PaymentResult,
    default_dispatcher,
    resolve_method,
)
from shopsaas.errors import UnsupportedPaymentMethodError


class DecliningStripe:
    method = PaymentMethod.STRIPE

    def process_payment(self, request: PaymentRequest) -> PaymentResult:
        return PaymentResult(success=False, method=self.method, message="card declined")


def _request(method=None):
    return PaymentRequest(amount=Decimal("25.00"), currency="USD", payment_method=method)


@pytest.mark.parametrize("method", [None, "", "   "])
def test_missing_method_defaults_to_mock(method):
    """Test no method -> MOCK -> success."""
    result = default_dispatcher().process(_request(method))
    assert result.success is True
    assert result.method is PaymentMethod.MOCK
    assert result.transaction_id.startswith("mock_")


def test_method_name_is_case_insensitive():
    result = default_dispatcher().process(_request(" mock "))
    assert result.method is PaymentMethod.MOCK


def test_unknown_method_unsupported():
    with pytest.raises(UnsupportedPaymentMethodError) as exc_info:
        default_dispatcher().process(_request("bitcoin"))
    assert exc_info.value.method == "BITCOIN"
    assert exc_info.value.status_code == 400


def test_known_method_without_handler_unsupported():
    """Test STRIPE is a known method but has no handler by default."""
    dispatcher = default_dispatcher()
    assert dispatcher.methods == {PaymentMethod.MOCK}
    with pytest.raises(UnsupportedPaymentMethodError):
        dispatcher.process(_request("stripe"))


def test_registered_handler_is_used():
    dispatcher = PaymentDispatcher([MockPaymentStrategy(), DecliningStripe()])
    result = dispatcher.process(_request("STRIPE"))
    assert result.success is False
    assert result.message == "card declined"


def test_duplicate_registration_rejected():
    dispatcher = default_dispatcher()
    with pytest.raises(ValueError):
        dispatcher.register(MockPaymentStrategy())


def test_mock_transaction_ids_unique():
    dispatcher = default_dispatcher()
    ids = {dispatcher.process(_request()).transaction_id for _ in range(5)}
    assert len(ids) == 5


def test_resolve_method():
    assert resolve_method(None) is PaymentMethod.MOCK
    assert resolve_method("paypal") is PaymentMethod.PAYPAL
