"""Subscription plans and the tenant's own subscription."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shopsaas.auth.middleware import permission_dep
from shopsaas.auth.permissions import Permission
from shopsaas.billing.payments import PaymentDispatcher, get_payment_dispatcher
from shopsaas.database import get_db
from shopsaas.schemas.billing import (
    SubscribeRequest,
    SubscriptionPlanRequest,
    SubscriptionPlanResponse,
    SubscriptionResponse,
)
from shopsaas.services import subscriptions as subscription_service

router = APIRouter()

PlanManager = permission_dep(Permission.PLAN_MANAGE)
SubscriptionManager = permission_dep(Permission.SUBSCRIPTION_MANAGE)


@router.get("/plans", response_model=list[SubscriptionPlanResponse])
async def list_plans(db: Annotated[AsyncSession, Depends(get_db)]):
    """Active plans, cheapest first. Public."""
    return await subscription_service.list_plans(db)


@router.post(
    "/plans", response_model=SubscriptionPlanResponse, status_code=status.HTTP_201_CREATED
)
async def create_plan(
    body: SubscriptionPlanRequest,
    _: PlanManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await subscription_service.create_plan(
        db,
        name=body.name,
        slug=body.slug,
        price=body.price,
        billing_interval=body.billing_interval,
        features=body.features,
    )


@router.put("/plans/{plan_id}", response_model=SubscriptionPlanResponse)
async def update_plan(
    plan_id: UUID,
    body: SubscriptionPlanRequest,
    _: PlanManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await subscription_service.update_plan(
        db,
        plan_id=str(plan_id),
        name=body.name,
        slug=body.slug,
        price=body.price,
        billing_interval=body.billing_interval,
        features=body.features,
    )


@router.delete("/plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(
    plan_id: UUID,
    _: PlanManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await subscription_service.delete_plan(db, str(plan_id))


@router.get("/me", response_model=SubscriptionResponse | None)
async def get_my_subscription(
    principal: SubscriptionManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """The tenant's ACTIVE subscription, or null."""
    return await subscription_service.get_current_subscription(db, principal.tenant_id)


@router.post("/subscribe", response_model=SubscriptionResponse)
async def subscribe(
    body: SubscribeRequest,
    principal: SubscriptionManager,
    db: Annotated[AsyncSession, Depends(get_db)],
    dispatcher: Annotated[PaymentDispatcher, Depends(get_payment_dispatcher)],
):
    return await subscription_service.subscribe(
        db,
        dispatcher,
        tenant_id=principal.tenant_id,
        plan_id=str(body.plan_id),
        payment_method=body.payment_method,
    )


@router.post("/cancel", response_model=SubscriptionResponse)
async def cancel_subscription(
    principal: SubscriptionManager,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await subscription_service.cancel_subscription(db, principal.tenant_id)
