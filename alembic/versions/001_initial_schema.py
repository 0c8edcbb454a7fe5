"""Initial schema - tenants, users, customers, catalog, orders, billing, subscriptions.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns(tenant_scoped: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=True),
    ]
    if tenant_scoped:
        columns.append(
            sa.Column(
                "tenant_id", sa.Uuid(as_uuid=False), sa.ForeignKey("tenants.id"), nullable=False
            )
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "tenants",
        *_base_columns(tenant_scoped=False),
        sa.Column("name", sa.String(50), unique=True, nullable=False),
        sa.Column("slug", sa.String(63), unique=True, nullable=False),
        sa.Column("owner_email", sa.String(255), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),
    )

    op.create_table(
        "customers",
        *_base_columns(),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("tenant_id", "email", name="uq_customers_tenant_email"),
    )

    op.create_table(
        "products",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sku", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(19, 2), nullable=False),
        sa.Column("stock_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("tenant_id", "sku", name="uq_products_tenant_sku"),
    )

    op.create_table(
        "carts",
        *_base_columns(),
        sa.Column("customer_email", sa.String(255), nullable=False),
        sa.UniqueConstraint("tenant_id", "customer_email", name="uq_carts_tenant_customer"),
    )

    op.create_table(
        "cart_items",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column(
            "cart_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("carts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("product_id", sa.Uuid(as_uuid=False), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
    )

    op.create_table(
        "orders",
        *_base_columns(),
        sa.Column("order_number", sa.String(32), nullable=False),
        sa.Column("customer_email", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("total_price", sa.Numeric(19, 2), nullable=False),
        sa.Column("shipping_address", sa.String(500), nullable=True),
        sa.UniqueConstraint("tenant_id", "order_number", name="uq_orders_tenant_number"),
    )
    op.create_index("ix_orders_customer_email", "orders", ["customer_email"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True),
        sa.Column(
            "order_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("product_id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("product_name", sa.String(255), nullable=False),
        sa.Column("sku", sa.String(100), nullable=False),
        sa.Column("price", sa.Numeric(19, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
    )

    op.create_table(
        "invoices",
        *_base_columns(),
        sa.Column("order_id", sa.Uuid(as_uuid=False), sa.ForeignKey("orders.id"), nullable=True),
        sa.Column("amount", sa.Numeric(19, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("issued_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )

    op.create_table(
        "payments",
        *_base_columns(),
        sa.Column(
            "invoice_id", sa.Uuid(as_uuid=False), sa.ForeignKey("invoices.id"), nullable=False
        ),
        sa.Column("amount", sa.Numeric(19, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("transaction_id", sa.String(100), unique=True, nullable=True),
        sa.Column("payment_intent_id", sa.String(100), unique=True, nullable=True),
        sa.Column("failure_reason", sa.String(500), nullable=True),
        sa.Column("processed_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_payments_invoice_id", "payments", ["invoice_id"])

    op.create_table(
        "subscription_plans",
        *_base_columns(tenant_scoped=False),
        sa.Column("name", sa.String(100), unique=True, nullable=False),
        sa.Column("slug", sa.String(63), unique=True, nullable=False),
        sa.Column("price", sa.Numeric(19, 2), nullable=False),
        sa.Column("billing_interval", sa.String(20), nullable=False),
        sa.Column("features", sa.Text(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "subscriptions",
        *_base_columns(),
        sa.Column(
            "plan_id",
            sa.Uuid(as_uuid=False),
            sa.ForeignKey("subscription_plans.id"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("start_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("end_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("auto_renew", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    # Partial unique: one ACTIVE subscription per tenant
    op.create_index(
        "uq_subscriptions_tenant_active",
        "subscriptions",
        ["tenant_id"],
        unique=True,
        postgresql_where=sa.text("status = 'ACTIVE'"),
        sqlite_where=sa.text("status = 'ACTIVE'"),
    )

    for table in (
        "users",
        "customers",
        "products",
        "carts",
        "orders",
        "invoices",
        "payments",
        "subscriptions",
    ):
        op.create_index(f"ix_{table}_tenant_id", table, ["tenant_id"])


def downgrade() -> None:
    for table in (
        "subscriptions",
        "payments",
        "invoices",
        "orders",
        "carts",
        "products",
        "customers",
        "users",
    ):
        op.drop_index(f"ix_{table}_tenant_id", table_name=table)
    op.drop_index("uq_subscriptions_tenant_active", table_name="subscriptions")
    op.drop_table("subscriptions")
    op.drop_table("subscription_plans")
    op.drop_index("ix_payments_invoice_id", table_name="payments")
    op.drop_table("payments")
    op.drop_table("invoices")
    op.drop_table("order_items")
    op.drop_index("ix_orders_customer_email", table_name="orders")
    op.drop_table("orders")
    op.drop_table("cart_items")
    op.drop_table("carts")
    op.drop_table("products")
    op.drop_table("customers")
    op.drop_table("users")
    op.drop_table("tenants")
