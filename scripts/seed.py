#!/usr/bin/env python3
"""
Seed script: creates the system-admin tenant, the platform ADMIN user and the
default subscription plans. Safe to re-run.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import sys
from decimal import Decimal

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shopsaas.auth.permissions import Role
from shopsaas.database import async_session_maker, engine
from shopsaas.models import BillingInterval
from shopsaas.services import subscriptions as subscription_service
from shopsaas.services import tenants as tenant_service
from shopsaas.services import users as user_service
from shopsaas.storage import repositories as repo

ADMIN_EMAIL = "admin@saas.com"
ADMIN_PASSWORD = "Admin123!"
SYSTEM_SLUG = "system-admin"

PLANS = [
    ("Free Tier", "free", Decimal("0.00"), "Basic features, 10 products"),
    ("Basic Plan", "basic", Decimal("29.00"), "Standard features, 100 products"),
    ("Pro Plan", "pro", Decimal("79.00"), "Advanced features, unlimited products"),
    ("Enterprise", "enterprise", Decimal("299.00"), "All features, priority support"),
]


async def seed():
    async with async_session_maker() as session:
        tenant = await repo.get_tenant_by_slug(session, SYSTEM_SLUG)
        if tenant is None:
            tenant = await tenant_service.create_tenant(
                session, name="System Admin", slug=SYSTEM_SLUG, owner_email=ADMIN_EMAIL
            )
        if await repo.user_email_exists(session, tenant.id, ADMIN_EMAIL):
            print("Admin user already exists.")
        else:
            await user_service.create_user(
                session,
                tenant_id=tenant.id,
                email=ADMIN_EMAIL,
                password=ADMIN_PASSWORD,
                full_name="Super Admin",
                role=Role.ADMIN,
            )
            print(f"Admin user created ({ADMIN_EMAIL} / {ADMIN_PASSWORD})")

        for name, slug, price, features in PLANS:
            await subscription_service.ensure_plan(
                session, name, slug, price, BillingInterval.MONTHLY, features
            )
        await session.commit()

    await engine.dispose()
    print("Seed complete!")
    print("Login: POST /api/v1/auth/login")
    print(f'  {{"tenant_slug": "{SYSTEM_SLUG}", "email": "{ADMIN_EMAIL}", "password": "{ADMIN_PASSWORD}"}}')


if __name__ == "__main__":
    asyncio.run(seed())
