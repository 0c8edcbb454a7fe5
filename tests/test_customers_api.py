"""API tests for merchant customer records."""

JANE = {"first_name": "Jane", "last_name": "Doe", "email": "jane@example.com", "phone": "555-0100"}


async def test_customer_crud(client, acme):
    _, headers = acme
    resp = await client.post("/api/v1/customers", json=JANE, headers=headers)
    assert resp.status_code == 201
    customer = resp.json()
    assert customer["active"] is True

    resp = await client.get("/api/v1/customers/jane@example.com", headers=headers)
    assert resp.json()["id"] == customer["id"]

    resp = await client.put(
        f"/api/v1/customers/{customer['id']}",
        json={**JANE, "last_name": "Smith", "email": "jane.smith@example.com"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["last_name"] == "Smith"

    resp = await client.get("/api/v1/customers", headers=headers)
    assert [c["email"] for c in resp.json()] == ["jane.smith@example.com"]

    resp = await client.delete(f"/api/v1/customers/{customer['id']}", headers=headers)
    assert resp.status_code == 204
    assert (await client.get("/api/v1/customers", headers=headers)).json() == []


async def test_duplicate_customer_email(client, acme):
    _, headers = acme
    await client.post("/api/v1/customers", json=JANE, headers=headers)
    resp = await client.post("/api/v1/customers", json=JANE, headers=headers)
    assert resp.status_code == 409


async def test_update_to_taken_email(client, acme):
    _, headers = acme
    await client.post("/api/v1/customers", json=JANE, headers=headers)
    bob = (
        await client.post(
            "/api/v1/customers",
            json={**JANE, "first_name": "Bob", "email": "bob@example.com"},
            headers=headers,
        )
    ).json()
    resp = await client.put(f"/api/v1/customers/{bob['id']}", json=JANE, headers=headers)
    assert resp.status_code == 409


async def test_customer_signup_creates_record(client, acme, acme_shopper):
    _, headers = acme
    resp = await client.get("/api/v1/customers/jane@example.com", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["first_name"] == "Jane"


async def test_customer_signup_unknown_store(client):
    resp = await client.post(
        "/api/v1/auth/customer/no-such-store/register",
        json={"email": "a@b.com", "password": "Secret123!", "first_name": "A", "last_name": "B"},
    )
    assert resp.status_code == 404


async def test_shopper_cannot_manage_customers(client, acme_shopper):
    resp = await client.get("/api/v1/customers", headers=acme_shopper)
    assert resp.status_code == 403
