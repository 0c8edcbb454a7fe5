"""API tests for tenant users."""

from conftest import PASSWORD, bearer


def _staff(email="staff@acme.com", role="STAFF"):
    return {"email": email, "password": PASSWORD, "full_name": "Sam Staff", "role": role}


async def test_merchant_creates_staff(client, acme):
    tenant, headers = acme
    resp = await client.post("/api/v1/users", json=_staff(), headers=headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["tenant_id"] == tenant["id"]
    assert body["tenant_name"] == "Acme Store"
    assert body["role"] == "STAFF"
    assert "password" not in body and "password_hash" not in body


async def test_duplicate_email_in_tenant(client, acme):
    _, headers = acme
    await client.post("/api/v1/users", json=_staff(), headers=headers)
    resp = await client.post("/api/v1/users", json=_staff(), headers=headers)
    assert resp.status_code == 409


async def test_same_email_allowed_in_other_tenant(client, acme, globex):
    _, acme_headers = acme
    _, globex_headers = globex
    assert (await client.post("/api/v1/users", json=_staff(), headers=acme_headers)).status_code == 201
    assert (await client.post("/api/v1/users", json=_staff(), headers=globex_headers)).status_code == 201


async def test_admin_role_not_assignable(client, acme):
    _, headers = acme
    resp = await client.post("/api/v1/users", json=_staff(role="ADMIN"), headers=headers)
    assert resp.status_code == 403


async def test_staff_cannot_create_users(client, acme):
    tenant, headers = acme
    created = (await client.post("/api/v1/users", json=_staff(), headers=headers)).json()
    staff_headers = bearer(created["id"], created["email"], tenant["id"], "STAFF")
    resp = await client.post("/api/v1/users", json=_staff("other@acme.com"), headers=staff_headers)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Permission required: user:manage"


async def test_get_user_by_email(client, acme):
    _, headers = acme
    await client.post("/api/v1/users", json=_staff(), headers=headers)
    resp = await client.get("/api/v1/users/staff@acme.com", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["full_name"] == "Sam Staff"


async def test_get_user_from_other_tenant_not_found(client, acme, globex):
    _, acme_headers = acme
    _, globex_headers = globex
    await client.post("/api/v1/users", json=_staff(), headers=acme_headers)
    resp = await client.get("/api/v1/users/staff@acme.com", headers=globex_headers)
    assert resp.status_code == 404


async def test_list_tenant_users(client, acme):
    tenant, headers = acme
    await client.post("/api/v1/users", json=_staff(), headers=headers)
    resp = await client.get(f"/api/v1/users/tenant/{tenant['id']}", headers=headers)
    assert resp.status_code == 200
    assert {u["email"] for u in resp.json()} == {"owner@acme.com", "staff@acme.com"}


async def test_list_other_tenant_users_forbidden(client, acme, globex):
    globex_tenant, _ = globex
    _, acme_headers = acme
    resp = await client.get(f"/api/v1/users/tenant/{globex_tenant['id']}", headers=acme_headers)
    assert resp.status_code == 403


async def test_malformed_tenant_id_is_validation_error(client, acme):
    _, headers = acme
    resp = await client.get("/api/v1/users/tenant/not-a-uuid", headers=headers)
    assert resp.status_code == 400
    assert "tenant_id" in resp.json()["errors"]


async def test_bad_token_unauthorized(client):
    resp = await client.get(
        "/api/v1/users/staff@acme.com", headers={"Authorization": "Bearer garbage"}
    )
    assert resp.status_code == 401
