"""Tenant-scoped lookups never see another tenant's rows."""

import pytest

from shopsaas.errors import ResourceNotFoundError
from shopsaas.services import catalog, customers, tenants


async def test_services_scope_by_tenant(db):
    acme = await tenants.create_tenant(db, "Acme Store", "acme-store", "a@acme.com")
    globex = await tenants.create_tenant(db, "Globex Shop", "globex", "g@globex.com")
    product = await catalog.create_product(db, acme.id, "Mug", "MUG-1", price=5, stock_level=3)
    customer = await customers.create_customer(db, acme.id, "Jane", "Doe", "jane@example.com")

    assert (await catalog.get_product(db, acme.id, product.id)).id == product.id
    with pytest.raises(ResourceNotFoundError):
        await catalog.get_product(db, globex.id, product.id)
    with pytest.raises(ResourceNotFoundError):
        await customers.get_customer_by_email(db, globex.id, "jane@example.com")
    with pytest.raises(ResourceNotFoundError):
        await customers.delete_customer(db, globex.id, customer.id)
    assert await catalog.list_products(db, globex.id) == []


async def test_same_sku_in_two_tenants(db):
    acme = await tenants.create_tenant(db, "Acme Store", "acme-store", "a@acme.com")
    globex = await tenants.create_tenant(db, "Globex Shop", "globex", "g@globex.com")
    await catalog.create_product(db, acme.id, "Mug", "MUG-1", price=5)
    await catalog.create_product(db, globex.id, "Mug", "MUG-1", price=7)
    assert len(await catalog.list_products(db, acme.id)) == 1


async def test_products_invisible_across_tenants(client, create_product, globex):
    product = await create_product()
    _, globex_headers = globex
    resp = await client.get(f"/api/v1/products/{product['id']}", headers=globex_headers)
    assert resp.status_code == 404
    assert (await client.get("/api/v1/products", headers=globex_headers)).json() == []


async def test_cannot_add_other_tenants_product_to_cart(client, create_product, globex):
    product = await create_product()
    _, globex_headers = globex
    resp = await client.post(
        "/api/v1/orders/cart/add",
        json={"product_id": product["id"], "quantity": 1},
        headers=globex_headers,
    )
    assert resp.status_code == 404


async def test_orders_invisible_across_tenants(client, create_product, acme_shopper, globex):
    product = await create_product()
    await client.post(
        "/api/v1/orders/cart/add", json={"sku": product["sku"], "quantity": 1}, headers=acme_shopper
    )
    order = (await client.post("/api/v1/orders/checkout", json={}, headers=acme_shopper)).json()
    _, globex_headers = globex
    assert (await client.get(f"/api/v1/orders/{order['id']}", headers=globex_headers)).status_code == 404
    resp = await client.get(f"/api/v1/orders/number/{order['order_number']}", headers=globex_headers)
    assert resp.status_code == 404
    assert (await client.get("/api/v1/orders", headers=globex_headers)).json() == []
