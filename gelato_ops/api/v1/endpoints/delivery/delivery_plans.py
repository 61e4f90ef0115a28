from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.models.shared.enums import DeliveryPlanStatus
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.delivery.delivery_plan_schema import (
    DeliveryPlanCreate,
    DeliveryPlanResponse,
    DeliveryPlanStatusUpdate,
)
from gelato_ops.services.audit.audit_service import AuditService
from gelato_ops.services.delivery.delivery_plan_service import DeliveryPlanService

router = APIRouter()

@router.get("", response_model=List[DeliveryPlanResponse])
async def get_delivery_plans(
    plan_status: Optional[DeliveryPlanStatus] = Query(None, alias="status"),
    on_date: Optional[date] = Query(None, alias="date"),
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    store_id: Optional[int] = Query(None, alias="storeId"),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("deliveries", "read")),
):
    """Delivery plans, newest date first. ``date`` takes precedence over ``from``/``to``."""
    service = DeliveryPlanService(db)
    return await service.get_plans(
        status=plan_status,
        on_date=on_date,
        from_date=from_date,
        to_date=to_date,
        store_id=store_id,
    )

@router.post("", response_model=DeliveryPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_delivery_plan(
    plan_data: DeliveryPlanCreate,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("deliveries", "create")),
):
    service = DeliveryPlanService(db)
    plan = await service.create_plan(plan_data)
    await AuditService(db).log(
        action="create",
        resource="delivery_plans",
        resource_id=plan.id,
        user=current_user,
        details={"items": len(plan_data.items), "customers": len(plan_data.customer_ids)},
        request=request,
    )
    return plan

@router.patch("/{plan_id}/status", response_model=DeliveryPlanResponse)
async def update_delivery_plan_status(
    plan_id: int,
    status_data: DeliveryPlanStatusUpdate,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("deliveries", "update")),
):
    """Move a plan between DRAFT, CONFIRMED and SENT; only CONFIRMED plans count as outgoing stock"""
    service = DeliveryPlanService(db)
    plan = await service.update_status(plan_id, status_data.status)
    await AuditService(db).log(
        action="update_status",
        resource="delivery_plans",
        resource_id=plan_id,
        user=current_user,
        details={"status": status_data.status.value},
        request=request,
    )
    return plan
