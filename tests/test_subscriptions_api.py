"""API tests for plans and tenant subscriptions."""

import pytest

from shopsaas.models import BillingInterval
from shopsaas.services import subscriptions as subscription_service

PRO = {"name": "Pro Plan", "slug": "pro", "price": "79.00", "billing_interval": "MONTHLY"}


@pytest.fixture
def create_plan(client, admin_headers):
    async def _create(**overrides):
        resp = await client.post(
            "/api/v1/subscriptions/plans", json={**PRO, **overrides}, headers=admin_headers
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


async def test_plans_are_public(client, create_plan):
    await create_plan()
    await create_plan(name="Free Tier", slug="free", price="0.00")
    resp = await client.get("/api/v1/subscriptions/plans")
    assert resp.status_code == 200
    assert [p["slug"] for p in resp.json()] == ["free", "pro"]


async def test_only_admin_manages_plans(client, acme):
    _, merchant = acme
    resp = await client.post("/api/v1/subscriptions/plans", json=PRO, headers=merchant)
    assert resp.status_code == 403


async def test_duplicate_plan_slug(client, create_plan, admin_headers):
    await create_plan()
    resp = await client.post(
        "/api/v1/subscriptions/plans", json={**PRO, "name": "Pro 2"}, headers=admin_headers
    )
    assert resp.status_code == 409


async def test_update_and_soft_delete_plan(client, create_plan, admin_headers):
    plan = await create_plan()
    resp = await client.put(
        f"/api/v1/subscriptions/plans/{plan['id']}",
        json={**PRO, "price": "89.00", "billing_interval": "YEARLY"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["price"] == "89.00"
    assert resp.json()["billing_interval"] == "YEARLY"

    resp = await client.delete(f"/api/v1/subscriptions/plans/{plan['id']}", headers=admin_headers)
    assert resp.status_code == 204
    assert (await client.get("/api/v1/subscriptions/plans")).json() == []


async def test_no_subscription_yet(client, acme):
    _, merchant = acme
    resp = await client.get("/api/v1/subscriptions/me", headers=merchant)
    assert resp.status_code == 200
    assert resp.json() is None


async def test_subscribe_paid_plan(client, create_plan, acme):
    _, merchant = acme
    plan = await create_plan()
    resp = await client.post(
        "/api/v1/subscriptions/subscribe", json={"plan_id": plan["id"]}, headers=merchant
    )
    assert resp.status_code == 200, resp.text
    sub = resp.json()
    assert sub["status"] == "ACTIVE"
    assert sub["auto_renew"] is True
    assert sub["plan"]["slug"] == "pro"

    [invoice] = (await client.get("/api/v1/invoices", headers=merchant)).json()
    assert invoice["order_id"] is None
    assert invoice["amount"] == "79.00"
    assert invoice["description"] == "Subscription to Pro Plan"


async def test_free_plan_skips_payment(client, create_plan, acme):
    _, merchant = acme
    plan = await create_plan(name="Free Tier", slug="free", price="0.00")
    resp = await client.post(
        "/api/v1/subscriptions/subscribe",
        json={"plan_id": plan["id"], "payment_method": "paypal"},
        headers=merchant,
    )
    assert resp.status_code == 200
    assert (await client.get("/api/v1/invoices", headers=merchant)).json() == []


async def test_switching_plans_keeps_one_active(client, create_plan, acme):
    _, merchant = acme
    free = await create_plan(name="Free Tier", slug="free", price="0.00")
    pro = await create_plan()
    await client.post("/api/v1/subscriptions/subscribe", json={"plan_id": free["id"]}, headers=merchant)
    resp = await client.post(
        "/api/v1/subscriptions/subscribe", json={"plan_id": pro["id"]}, headers=merchant
    )
    assert resp.status_code == 200
    current = (await client.get("/api/v1/subscriptions/me", headers=merchant)).json()
    assert current["plan"]["slug"] == "pro"


async def test_subscribe_unknown_plan(client, acme):
    _, merchant = acme
    resp = await client.post(
        "/api/v1/subscriptions/subscribe",
        json={"plan_id": "00000000-0000-0000-0000-000000000000"},
        headers=merchant,
    )
    assert resp.status_code == 404


async def test_subscribe_unsupported_method(client, create_plan, acme):
    _, merchant = acme
    plan = await create_plan()
    resp = await client.post(
        "/api/v1/subscriptions/subscribe",
        json={"plan_id": plan["id"], "payment_method": "cash"},
        headers=merchant,
    )
    assert resp.status_code == 400
    assert (await client.get("/api/v1/subscriptions/me", headers=merchant)).json() is None


async def test_cancel_subscription(client, create_plan, acme):
    _, merchant = acme
    assert (await client.post("/api/v1/subscriptions/cancel", headers=merchant)).status_code == 404
    plan = await create_plan()
    await client.post("/api/v1/subscriptions/subscribe", json={"plan_id": plan["id"]}, headers=merchant)
    resp = await client.post("/api/v1/subscriptions/cancel", headers=merchant)
    assert resp.status_code == 200
    assert resp.json()["auto_renew"] is False
    assert resp.json()["status"] == "ACTIVE"


async def test_billing_period(db):
    """Test MONTHLY runs 30 days and YEARLY 365."""
    from shopsaas.billing.payments import default_dispatcher
    from shopsaas.services import tenants

    tenant = await tenants.create_tenant(db, "Acme Store", "acme-store", "a@acme.com")
    monthly = await subscription_service.create_plan(
        db, "Monthly", "monthly", 0, BillingInterval.MONTHLY
    )
    yearly = await subscription_service.create_plan(
        db, "Yearly", "yearly", 0, BillingInterval.YEARLY
    )
    sub = await subscription_service.subscribe(db, default_dispatcher(), tenant.id, monthly.id)
    assert (sub.end_date - sub.start_date).days == 30
    sub = await subscription_service.subscribe(db, default_dispatcher(), tenant.id, yearly.id)
    assert (sub.end_date - sub.start_date).days == 365
    current = await subscription_service.get_current_subscription(db, tenant.id)
    assert current.id == sub.id


async def test_ensure_plan_is_idempotent(db):
    first = await subscription_service.ensure_plan(db, "Pro Plan", "pro", 79, BillingInterval.MONTHLY)
    second = await subscription_service.ensure_plan(db, "Pro Plan", "pro", 79, BillingInterval.MONTHLY)
    assert first.id == second.id
