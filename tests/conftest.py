"""Shared fixtures: in-memory database, API client and provisioned stores."""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import shopsaas.models  # noqa: F401
from shopsaas.auth.security import create_access_token
from shopsaas.database import Base, get_db
from shopsaas.main import app

PASSWORD = "Secret123!"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db(session_maker):
    """Session for service-level tests (not shared with the API client)."""
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def bearer(user_id: str, email: str, tenant_id: str, role: str) -> dict[str, str]:
    token = create_access_token(user_id=user_id, email=email, tenant_id=tenant_id, role=role)
    return {"Authorization": f"Bearer {token}"}


async def _login(client: AsyncClient, slug: str, email: str) -> dict[str, str]:
    resp = await client.post(
        "/api/v1/auth/login",
        json={"tenant_slug": slug, "email": email, "password": PASSWORD},
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


async def _signup(client: AsyncClient, name: str, slug: str, email: str):
    resp = await client.post(
        "/api/v1/auth/register",
        json={
            "store_name": name,
            "store_slug": slug,
            "email": email,
            "password": PASSWORD,
            "full_name": "Store Owner",
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json(), await _login(client, slug, email)


@pytest.fixture
async def acme(client):
    """(tenant json, merchant auth headers) for acme-store."""
    return await _signup(client, "Acme Store", "acme-store", "owner@acme.com")


@pytest.fixture
async def globex(client):
    return await _signup(client, "Globex Shop", "globex", "owner@globex.com")


@pytest.fixture
async def acme_shopper(client, acme):
    """Auth headers for a registered acme-store customer."""
    resp = await client.post(
        "/api/v1/auth/customer/acme-store/register",
        json={
            "email": "jane@example.com",
            "password": PASSWORD,
            "first_name": "Jane",
            "last_name": "Doe",
        },
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def create_product(client, acme):
    """Factory adding a product to acme-store."""
    _, headers = acme

    async def _create(sku="TSHIRT-1", price="19.99", stock_level=10, name="T-Shirt"):
        resp = await client.post(
            "/api/v1/products",
            json={"name": name, "sku": sku, "price": price, "stock_level": stock_level},
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def admin_headers(acme):
    tenant, _ = acme
    return bearer("00000000-0000-0000-0000-000000000001", "admin@saas.com", tenant["id"], "ADMIN")
