from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.models.shared.enums import OrderStatus
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.purchase.order_schema import (
    OrderCreate,
    OrderResponse,
    OrderStatusUpdate,
    ReceiveOrderRequest,
    ReceiveOrderResponse,
)
from gelato_ops.services.audit.audit_service import AuditService
from gelato_ops.services.purchase.order_service import OrderService

router = APIRouter()

@router.get("", response_model=List[OrderResponse])
async def get_orders(
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("orders", "read")),
):
    service = OrderService(db)
    return await service.get_orders(order_status)

@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("orders", "create")),
):
    """Create a supplier order"""
    service = OrderService(db)
    order = await service.create_order(order_data, current_user)
    await AuditService(db).log(
        action="create",
        resource="orders",
        resource_id=order.id,
        user=current_user,
        details={"items": len(order_data.items), "status": order.status},
        request=request,
    )
    return order

@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("orders", "update")),
):
    service = OrderService(db)
    order = await service.update_status(order_id, status_data.status)
    await AuditService(db).log(
        action="update_status",
        resource="orders",
        resource_id=order_id,
        user=current_user,
        details={"status": status_data.status.value},
        request=request,
    )
    return order

@router.post("/{order_id}/receive", response_model=ReceiveOrderResponse)
async def receive_order(
    order_id: int,
    receive_data: ReceiveOrderRequest,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("orders", "update")),
):
    """Record received stock at the hub and plan deliveries to stores below target"""
    service = OrderService(db)
    await service.receive_order(order_id, receive_data, current_user, request)
    return ReceiveOrderResponse(message="Stock receipt recorded successfully", order_id=order_id)
