"""Role to capability mapping."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    MERCHANT = "MERCHANT"
    STAFF = "STAFF"
    CUSTOMER = "CUSTOMER"


class Permission(str, Enum):
    """Capabilities checked per route."""

    # Tenant users
    USER_MANAGE = "user:manage"
    USER_VIEW = "user:view"

    # CRM
    CUSTOMER_MANAGE = "customer:manage"

    # Catalog
    PRODUCT_MANAGE = "product:manage"
    PRODUCT_VIEW = "product:view"

    # Orders
    ORDER_MANAGE = "order:manage"
    ORDER_PLACE = "order:place"

    # Billing
    INVOICE_VIEW = "invoice:view"
    SUBSCRIPTION_MANAGE = "subscription:manage"
    PLAN_MANAGE = "plan:manage"


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.MERCHANT: frozenset(
        {
            Permission.USER_MANAGE,
            Permission.USER_VIEW,
            Permission.CUSTOMER_MANAGE,
            Permission.PRODUCT_MANAGE,
            Permission.PRODUCT_VIEW,
            Permission.ORDER_MANAGE,
            Permission.ORDER_PLACE,
            Permission.INVOICE_VIEW,
            Permission.SUBSCRIPTION_MANAGE,
        }
    ),
    Role.STAFF: frozenset(
        {
            Permission.USER_VIEW,
            Permission.PRODUCT_VIEW,
            Permission.ORDER_MANAGE,
            Permission.ORDER_PLACE,
        }
    ),
    Role.CUSTOMER: frozenset(
        {
            Permission.PRODUCT_VIEW,
            Permission.ORDER_PLACE,
        }
    ),
    # Platform operators manage plans only; store data stays with merchants.
    Role.ADMIN: frozenset(
        {
            Permission.USER_VIEW,
            Permission.PLAN_MANAGE,
        }
    ),
}


def get_permissions_for_role(role: str) -> frozenset[Permission]:
    try:
        return ROLE_PERMISSIONS[Role(role.upper())]
    except ValueError:
        return frozenset()


def has_permission(role: str, permission: Permission) -> bool:
    return permission in get_permissions_for_role(role)
