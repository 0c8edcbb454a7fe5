"""Service tests for order status changes and payment."""

import pytest
from sqlalchemy import update

from shopsaas.billing.payments import default_dispatcher
from shopsaas.engine.order_state import OrderStatus
from shopsaas.errors import InvalidOrderStateTransitionError
from shopsaas.models import Order
from shopsaas.services import billing, catalog, orders, tenants
from shopsaas.storage import repositories as repo


@pytest.fixture
async def pending_order(db):
    tenant = await tenants.create_tenant(db, "Acme Store", "acme-store", "a@acme.com")
    product = await catalog.create_product(db, tenant.id, "Mug", "MUG-1", price=5, stock_level=3)
    await orders.add_to_cart(db, tenant.id, "jane@example.com", 1, product_id=product.id)
    return await orders.place_order(db, tenant.id, "jane@example.com")


async def _cancel_behind_session(db, order):
    """Change the stored status without touching the copy held by the session."""
    await db.execute(
        update(Order)
        .where(Order.id == order.id)
        .values(status=OrderStatus.CANCELLED)
        .execution_options(synchronize_session=False)
    )
    assert order.status is OrderStatus.PENDING


async def test_pay_sees_status_committed_by_another_request(db, pending_order):
    """Test payment re-reads the order row instead of trusting a stale copy."""
    await _cancel_behind_session(db, pending_order)
    with pytest.raises(InvalidOrderStateTransitionError) as exc_info:
        await orders.pay_order(db, default_dispatcher(), pending_order.tenant_id, pending_order.id)
    assert exc_info.value.current is OrderStatus.CANCELLED
    assert await billing.list_invoices(db, pending_order.tenant_id) == []


async def test_status_change_sees_status_committed_by_another_request(db, pending_order):
    await _cancel_behind_session(db, pending_order)
    with pytest.raises(InvalidOrderStateTransitionError) as exc_info:
        await orders.update_order_status(
            db, pending_order.tenant_id, pending_order.id, OrderStatus.PAID
        )
    assert exc_info.value.current is OrderStatus.CANCELLED


async def test_status_changes_go_through_row_lock(db, pending_order, monkeypatch):
    locked = []
    lock_order = repo.lock_order

    async def recording_lock(db, tenant_id, order_id):
        locked.append(order_id)
        return await lock_order(db, tenant_id, order_id)

    monkeypatch.setattr(repo, "lock_order", recording_lock)
    await orders.pay_order(db, default_dispatcher(), pending_order.tenant_id, pending_order.id)
    await orders.update_order_status(
        db, pending_order.tenant_id, pending_order.id, OrderStatus.SHIPPED
    )
    assert locked == [pending_order.id, pending_order.id]


async def test_paid_order_records_paid_invoice(db, pending_order):
    paid = await orders.pay_order(db, default_dispatcher(), pending_order.tenant_id, pending_order.id)
    assert paid.status is OrderStatus.PAID
    [invoice] = await billing.list_invoices(db, pending_order.tenant_id)
    assert invoice.status.value == "PAID"
    [payment] = await billing.list_payments(db, pending_order.tenant_id, invoice.id)
    assert payment.status.value == "SUCCEEDED"
    assert payment.failure_reason is None
