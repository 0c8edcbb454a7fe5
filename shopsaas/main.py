"""shopsaas FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopsaas.api.auth import router as auth_router
from shopsaas.api.customers import router as customers_router
from shopsaas.api.health import router as health_router
from shopsaas.api.invoices import router as invoices_router
from shopsaas.api.orders import router as orders_router
from shopsaas.api.products import router as products_router
from shopsaas.api.subscriptions import router as subscriptions_router
from shopsaas.api.tenants import router as tenants_router
from shopsaas.api.users import router as users_router
from shopsaas.config import settings
from shopsaas.errors import register_error_handlers

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="shopsaas - Multi-tenant Commerce Backend",
    description="Tenant onboarding, catalog, orders, billing and subscriptions for hosted stores",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health_router, tags=["Health"])
app.include_router(auth_router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(tenants_router, prefix="/api/v1/tenants", tags=["Tenants"])
app.include_router(users_router, prefix="/api/v1/users", tags=["Users"])
app.include_router(customers_router, prefix="/api/v1/customers", tags=["Customers"])
app.include_router(products_router, prefix="/api/v1/products", tags=["Products"])
app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(invoices_router, prefix="/api/v1/invoices", tags=["Invoices"])
app.include_router(subscriptions_router, prefix="/api/v1/subscriptions", tags=["Subscriptions"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "shopsaas", "version": "0.1.0", "docs": "/docs"}
